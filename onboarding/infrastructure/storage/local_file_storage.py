# Standard library imports
import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

# Local application imports
from ...domain.repositories.file_storage import FileStorage
from ...domain.exceptions import IOFailure


logger = logging.getLogger(__name__)


class LocalFileStorage(FileStorage):
    """Filesystem implementation of FileStorage, rooted at the upload directory"""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        """
        Resolve a stored name to its path under the root

        Raises:
            IOFailure: If the name is empty or would escape the root
        """
        if not name or "\x00" in name or name in (".", "..") or Path(name).name != name:
            raise IOFailure(f"Refusing to store file under unsafe name {name!r}")
        root = self.root.resolve()
        path = (root / name).resolve()
        if path.parent != root:
            raise IOFailure(f"Refusing to store file outside upload directory: {name!r}")
        return path

    def _write_sync(self, name: str, data: bytes) -> str:
        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write to a temp file and rename so readers never see a partial file
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise IOFailure(f"Failed to write {path}: {e}") from e
        return name

    async def write(self, name: str, data: bytes) -> str:
        stored = await asyncio.to_thread(self._write_sync, name, data)
        logger.debug(f"Wrote {len(data)} bytes to {self.root / stored}")
        return stored

    async def exists(self, name: str) -> bool:
        try:
            path = self.path_for(name)
        except IOFailure:
            return False
        return await asyncio.to_thread(path.is_file)

    async def delete(self, name: str) -> None:
        path = self.path_for(name)
        try:
            await asyncio.to_thread(path.unlink, True)
        except OSError as e:
            raise IOFailure(f"Failed to delete {path}: {e}") from e
