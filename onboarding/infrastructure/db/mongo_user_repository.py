# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

# Local application imports
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User
from ...domain.constants import UserFields
from ...domain.exceptions import ConflictFailure, StorageFailure
from ...utils.datetime_utils import ensure_utc
from .mongo_connection import get_user_collection


logger = logging.getLogger(__name__)

EMAIL_INDEX_NAME = "email_unique"


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(self, user_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.user_collection = user_collection if user_collection is not None else get_user_collection()

    async def ensure_indexes(self) -> None:
        """
        Create the unique email index

        The index is what makes two concurrent registrations with the same
        email end in exactly one insert.
        """
        try:
            await self.user_collection.create_index(
                [(UserFields.EMAIL, ASCENDING)],
                unique=True,
                name=EMAIL_INDEX_NAME,
            )
        except PyMongoError as e:
            raise StorageFailure(f"Error creating user indexes: {str(e)}") from e

    async def insert(self, user: User) -> User:
        """
        Insert a new user document

        Args:
            user: User domain model without an ID

        Returns:
            The stored User with its ID set

        Raises:
            ConflictFailure: If the email is already registered
            StorageFailure: If MongoDB rejects or cannot complete the write
        """
        if not user:
            raise ValueError("User cannot be None")
        if user.id:
            raise ValueError(f"User {user.id} already has an ID; inserts create new users only")

        user_dict = self._user_to_dict(user)
        try:
            result = await self.user_collection.insert_one(user_dict)
        except DuplicateKeyError as e:
            raise ConflictFailure("Email is already registered (unique index)") from e
        except PyMongoError as e:
            raise StorageFailure(f"Error inserting user: {str(e)}") from e

        user_dict[UserFields.MONGO_ID] = result.inserted_id
        return self._document_to_user(user_dict)

    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find user by email address

        Args:
            email: Email address to search for

        Returns:
            User domain model if found, None otherwise
        """
        if not email:
            return None

        try:
            document = await self.user_collection.find_one({UserFields.EMAIL: email.lower()})
        except PyMongoError as e:
            raise StorageFailure(f"Error finding user by email: {str(e)}") from e
        if document is None:
            return None
        return self._document_to_user(document)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find user by ID

        Args:
            user_id: User ID to search for

        Returns:
            User domain model if found, None otherwise
        """
        if not user_id:
            return None

        try:
            object_id = ObjectId(user_id)
        except (InvalidId, ValueError, TypeError):
            return None

        try:
            document = await self.user_collection.find_one({UserFields.MONGO_ID: object_id})
        except PyMongoError as e:
            raise StorageFailure(f"Error finding user by ID: {str(e)}") from e
        if document is None:
            return None
        return self._document_to_user(document)

    def _document_to_user(self, document: dict) -> User:
        """
        Convert MongoDB document to User domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            User domain model
        """
        if not document or UserFields.MONGO_ID not in document:
            raise ValueError("Invalid document: missing _id field")

        return User(
            id=str(document[UserFields.MONGO_ID]),
            first_name=document.get(UserFields.FIRST_NAME, ""),
            last_name=document.get(UserFields.LAST_NAME, ""),
            email=document.get(UserFields.EMAIL, ""),
            hashed_password=document.get(UserFields.HASHED_PASSWORD, ""),
            location=document.get(UserFields.LOCATION, ""),
            occupation=document.get(UserFields.OCCUPATION, ""),
            picture_path=document.get(UserFields.PICTURE_PATH),
            friends=list(document.get(UserFields.FRIENDS) or []),
            viewed_profile=int(document.get(UserFields.VIEWED_PROFILE, 0)),
            impressions=int(document.get(UserFields.IMPRESSIONS, 0)),
            created_at=ensure_utc(document.get(UserFields.CREATED_AT)),
            updated_at=ensure_utc(document.get(UserFields.UPDATED_AT)),
        )

    def _user_to_dict(self, user: User) -> dict:
        """
        Convert User domain model to MongoDB document

        Args:
            user: User domain model

        Returns:
            Dictionary ready for MongoDB storage
        """
        return {
            UserFields.FIRST_NAME: user.first_name,
            UserFields.LAST_NAME: user.last_name,
            UserFields.EMAIL: user.email.lower(),
            UserFields.HASHED_PASSWORD: user.hashed_password,
            UserFields.PICTURE_PATH: user.picture_path,
            UserFields.FRIENDS: list(user.friends),
            UserFields.LOCATION: user.location,
            UserFields.OCCUPATION: user.occupation,
            UserFields.VIEWED_PROFILE: user.viewed_profile,
            UserFields.IMPRESSIONS: user.impressions,
            UserFields.CREATED_AT: user.created_at,
            UserFields.UPDATED_AT: user.updated_at,
        }
