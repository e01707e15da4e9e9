# Standard library imports
import logging
import re
import uuid
from pathlib import PurePosixPath
from dataclasses import dataclass
from typing import Optional

# External package imports
from starlette.datastructures import FormData, UploadFile

# Local application imports
from ....domain.repositories.file_storage import FileStorage
from ....domain.constants import UPLOAD_NAMING_ORIGINAL, UPLOAD_NAMING_RANDOM, UserFields
from ....domain.exceptions import MalformedUpload


logger = logging.getLogger(__name__)

_EXTENSION_PATTERN = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def client_basename(filename: str) -> str:
    """Strip any directory components (either separator) from a client filename."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    return "" if name in (".", "..") else name


def safe_extension(filename: str) -> str:
    """Lower-cased extension of the client filename, or '' if it looks unsafe."""
    suffix = PurePosixPath(client_basename(filename)).suffix
    return suffix.lower() if _EXTENSION_PATTERN.match(suffix) else ""


@dataclass(frozen=True)
class StoredAttachment:
    """Result of storing an upload

    ``created`` is False when the write replaced a file that was already
    stored under the same name, so the file is not this request's to remove.
    """
    name: str
    created: bool = True


class ReceiveAttachmentUseCase:
    """Use case for storing the optional profile picture of a registration"""

    def __init__(
        self,
        file_storage: FileStorage,
        naming_policy: str = UPLOAD_NAMING_RANDOM,
        field_name: str = UserFields.PICTURE,
    ) -> None:
        self.file_storage = file_storage
        self.naming_policy = naming_policy
        self.field_name = field_name

    def choose_name(self, client_filename: str) -> str:
        """
        Pick the stored name for an upload

        With the "original" policy the client's basename is kept, which means
        concurrent uploads of the same name overwrite each other. The default
        "random" policy uses a uuid4 hex plus the original extension.
        """
        if self.naming_policy == UPLOAD_NAMING_ORIGINAL:
            original = client_basename(client_filename)
            if original:
                return original
        return f"{uuid.uuid4().hex}{safe_extension(client_filename)}"

    async def execute(self, form: FormData) -> Optional[StoredAttachment]:
        """
        Store the picture from a parsed registration form

        Args:
            form: Parsed multipart form

        Returns:
            The stored attachment, or None if no file was sent

        Raises:
            MalformedUpload: If the uploaded bytes cannot be read
            IOFailure: If the file cannot be written
        """
        upload = form.get(self.field_name)
        if not isinstance(upload, UploadFile) or not upload.filename:
            return None

        try:
            data = await upload.read()
        except OSError as e:
            raise MalformedUpload(f"Failed to read uploaded file: {e}") from e

        name = self.choose_name(upload.filename)
        # A kept client name may already belong to another user's picture
        created = True
        if self.naming_policy == UPLOAD_NAMING_ORIGINAL:
            created = not await self.file_storage.exists(name)

        stored_name = await self.file_storage.write(name, data)
        logger.info(f"Stored profile picture as {stored_name} ({len(data)} bytes)")
        return StoredAttachment(name=stored_name, created=created)
