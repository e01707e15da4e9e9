from .user_repository import UserRepository
from .file_storage import FileStorage

__all__ = ["UserRepository", "FileStorage"]
