from abc import ABC, abstractmethod


class FileStorage(ABC):
    """Byte storage interface for uploaded attachments, addressed by name"""

    @abstractmethod
    async def write(self, name: str, data: bytes) -> str:
        """
        Durably store ``data`` under ``name``.

        Returns:
            The name the data was stored under

        Raises:
            IOFailure: If the destination is unwritable or the write fails
        """
        pass

    @abstractmethod
    async def exists(self, name: str) -> bool:
        """Check whether a file with this name is stored"""
        pass

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Remove a stored file; missing files are ignored"""
        pass
