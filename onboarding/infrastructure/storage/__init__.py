from .local_file_storage import LocalFileStorage

__all__ = ["LocalFileStorage"]
