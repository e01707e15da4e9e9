"""
Registration pipeline: multipart intake -> password hashing -> persistence.

RegistrationFlow.run() walks one request through the stages

    RECEIVING -> HASHING -> PERSISTING -> RESPONDING

and always returns a RegistrationOutcome, either SUCCESS with the stored
user or FAILED with the typed error and the stage it happened in. Nothing is
retried. When a stage after RECEIVING fails, the picture stored for the
request is removed again, unless the write replaced a file some earlier
request had stored under the same name.
"""

# Standard library imports
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

# External package imports
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

# Local application imports
from ....core.security import DEFAULT_HASH_COST, hash_password
from ....domain.constants import UserFields
from ....domain.exceptions import (
    CryptoFailure,
    IOFailure,
    MalformedUpload,
    RegistrationError,
    StorageFailure,
    ValidationFailure,
)
from ....domain.models.user import User
from ....domain.repositories.file_storage import FileStorage
from .receive_attachment import ReceiveAttachmentUseCase, StoredAttachment
from .register_user import RegisterUserUseCase


logger = logging.getLogger(__name__)

FORM_MEDIA_TYPES = frozenset({"multipart/form-data", "application/x-www-form-urlencoded"})


class RegistrationStage(str, Enum):
    RECEIVING = "receiving"
    HASHING = "hashing"
    PERSISTING = "persisting"
    RESPONDING = "responding"
    SUCCESS = "success"
    FAILED = "failed"


# Error raised for an unexpected exception, by the stage it escaped from
_UNEXPECTED_FAILURES = {
    RegistrationStage.RECEIVING: IOFailure,
    RegistrationStage.HASHING: CryptoFailure,
    RegistrationStage.PERSISTING: StorageFailure,
}


@dataclass
class RegistrationOutcome:
    """Terminal state of one registration request"""
    state: RegistrationStage
    user: Optional[User] = None
    error: Optional[RegistrationError] = None
    failed_stage: Optional[RegistrationStage] = None

    @property
    def succeeded(self) -> bool:
        return self.state is RegistrationStage.SUCCESS

    @classmethod
    def success(cls, user: User) -> "RegistrationOutcome":
        return cls(state=RegistrationStage.SUCCESS, user=user)

    @classmethod
    def failure(cls, stage: RegistrationStage, error: RegistrationError) -> "RegistrationOutcome":
        return cls(state=RegistrationStage.FAILED, error=error, failed_stage=stage)


def form_to_fields(form: FormData) -> Dict[str, Any]:
    """Collect the text fields of a registration form, keyed by wire name."""
    fields: Dict[str, Any] = {
        key: value
        for key, value in form.multi_items()
        if isinstance(value, str) and key != UserFields.FRIENDS
    }
    fields[UserFields.FRIENDS] = [
        value for value in form.getlist(UserFields.FRIENDS) if isinstance(value, str)
    ]
    return fields


class RegistrationFlow:
    """Composes attachment intake, hashing and the user registrar for one request"""

    def __init__(
        self,
        register_user: RegisterUserUseCase,
        receive_attachment: ReceiveAttachmentUseCase,
        file_storage: FileStorage,
        hash_cost: int = DEFAULT_HASH_COST,
        password_min_length: int = 1,
    ) -> None:
        self.register_user = register_user
        self.receive_attachment = receive_attachment
        self.file_storage = file_storage
        self.hash_cost = hash_cost
        self.password_min_length = password_min_length

    async def parse_form(self, request: Request) -> FormData:
        """
        Parse the request body as a form

        Raises:
            MalformedUpload: If the body is not a form or cannot be parsed
        """
        content_type = request.headers.get("content-type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()
        if media_type not in FORM_MEDIA_TYPES:
            raise MalformedUpload(f"Unsupported content type for registration: {media_type or 'none'}")

        try:
            return await request.form()
        except (MultiPartException, StarletteHTTPException, ValueError, KeyError) as e:
            raise MalformedUpload(f"Could not parse registration form: {e}") from e

    async def run(self, request: Request) -> RegistrationOutcome:
        """
        Run one registration request to a terminal outcome

        Args:
            request: Incoming HTTP request with the registration form

        Returns:
            RegistrationOutcome (SUCCESS or FAILED); never raises for pipeline errors
        """
        stage = RegistrationStage.RECEIVING
        form: Optional[FormData] = None
        attachment: Optional[StoredAttachment] = None

        try:
            form = await self.parse_form(request)
            registration = self.register_user.validate_fields(form_to_fields(form))
            if len(registration.password) < self.password_min_length:
                raise ValidationFailure(
                    [UserFields.PASSWORD],
                    f"Password must be at least {self.password_min_length} characters",
                )
            attachment = await self.receive_attachment.execute(form)

            stage = RegistrationStage.HASHING
            # bcrypt is deliberately slow; keep it off the event loop
            hashed_password = await asyncio.to_thread(
                hash_password, registration.password, self.hash_cost
            )

            stage = RegistrationStage.PERSISTING
            picture_path = attachment.name if attachment is not None else None
            user = await self.register_user.execute(registration, hashed_password, picture_path)
        except RegistrationError as error:
            return await self._fail(stage, error, attachment)
        except Exception as e:
            error = _UNEXPECTED_FAILURES[stage](f"Unexpected error while {stage.value}: {e}")
            error.__cause__ = e
            return await self._fail(stage, error, attachment)
        finally:
            if form is not None:
                await form.close()

        return RegistrationOutcome.success(user)

    async def _fail(
        self,
        stage: RegistrationStage,
        error: RegistrationError,
        attachment: Optional[StoredAttachment],
    ) -> RegistrationOutcome:
        if error.status_code >= 500:
            logger.error(
                f"Registration failed while {stage.value}: {error.kind}: {error.message}",
                exc_info=error.__cause__ or error,
            )
        else:
            logger.warning(f"Registration rejected while {stage.value}: {error.kind}: {error.message}")

        if attachment is not None and attachment.created:
            await self._discard_attachment(attachment.name)
        return RegistrationOutcome.failure(stage, error)

    async def _discard_attachment(self, stored_name: str) -> None:
        try:
            await self.file_storage.delete(stored_name)
        except IOFailure as e:
            logger.error(f"Could not remove attachment {stored_name} of failed registration: {e}")
