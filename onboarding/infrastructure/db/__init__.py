from .mongo_connection import close_connection, get_database, get_user_collection
from .mongo_user_repository import MongoUserRepository

__all__ = [
    "close_connection",
    "get_database",
    "get_user_collection",
    "MongoUserRepository",
]
