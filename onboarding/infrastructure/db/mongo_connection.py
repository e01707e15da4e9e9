# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection

# Local application imports
from ...core.config import Settings, get_settings


logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"

# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_database(settings: Optional[Settings] = None) -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    Args:
        settings: Settings to connect with; defaults to the global settings

    Returns:
        MongoDB database instance
    """
    global _mongo_client, _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    settings = settings or get_settings()
    # tz_aware so stored timestamps come back as UTC-aware datetimes
    _mongo_client = AsyncIOMotorClient(
        settings.mongo_url,
        tz_aware=True,
        serverSelectionTimeoutMS=10000,
    )
    _mongo_database = _mongo_client[settings.mongo_database_name]
    logger.info(f"MongoDB client created for database {settings.mongo_database_name}")
    return _mongo_database


def get_user_collection(settings: Optional[Settings] = None) -> AsyncIOMotorCollection:
    """
    Get users collection from MongoDB

    Returns:
        MongoDB collection for users
    """
    return get_database(settings)[USERS_COLLECTION]


def close_connection() -> None:
    """Close the MongoDB client and drop the cached instances"""
    global _mongo_client, _mongo_database
    if _mongo_client is not None:
        _mongo_client.close()
        logger.info("MongoDB client closed")
    _mongo_client = None
    _mongo_database = None
