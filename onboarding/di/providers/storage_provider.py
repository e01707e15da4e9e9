from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.file_storage import FileStorage
from ...infrastructure.storage.local_file_storage import LocalFileStorage

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class StorageProvider:
    """Attachment storage provider - local filesystem rooted at UPLOAD_DIR"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        if container.has(FileStorage):
            return

        settings = container.get(Settings)
        container.register_singleton(FileStorage, LocalFileStorage(settings.upload_dir))
