# Standard library imports
import logging
import random
from typing import Any, Mapping, Optional

# External package imports
from pydantic import ValidationError

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.user import User
from ....domain.constants import COUNTER_UPPER_BOUND
from ....domain.exceptions import ConflictFailure, ValidationFailure
from ....utils.datetime_utils import utc_now
from ...dto.auth_dto import UserRegistrationRequest


logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """Use case for building and persisting a new user"""

    def __init__(
        self,
        user_repository: UserRepository,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.user_repository = user_repository
        self.rng = rng or random.Random()

    @staticmethod
    def validate_fields(data: Mapping[str, Any]) -> UserRegistrationRequest:
        """
        Validate submitted registration fields

        Args:
            data: Raw field values keyed by their wire (camelCase) names

        Returns:
            Validated registration request

        Raises:
            ValidationFailure: Naming every missing or malformed field
        """
        try:
            return UserRegistrationRequest.model_validate(dict(data))
        except ValidationError as exception:
            fields = []
            for error in exception.errors():
                name = str(error["loc"][0]) if error.get("loc") else "body"
                if name not in fields:
                    fields.append(name)
            raise ValidationFailure(fields) from exception

    def _draw_counter(self) -> int:
        return self.rng.randrange(COUNTER_UPPER_BOUND)

    async def execute(
        self,
        request: UserRegistrationRequest,
        hashed_password: str,
        picture_path: Optional[str] = None,
    ) -> User:
        """
        Register a new user

        Args:
            request: Validated registration request
            hashed_password: bcrypt hash of the submitted password
            picture_path: Stored name of the profile picture, if one was uploaded

        Returns:
            The persisted User, including its credential hash

        Raises:
            ValidationFailure: If the assembled user is invalid
            ConflictFailure: If a user with this email already exists
            StorageFailure: If the user store fails
        """
        # Check if user already exists; the unique index still decides races
        existing_user = await self.user_repository.find_by_email(request.email)
        if existing_user is not None:
            logger.info("Registration rejected: email already registered")
            raise ConflictFailure("Email is already registered")

        timestamp = utc_now()
        try:
            new_user = User(
                id=None,  # Will be set by repository
                first_name=request.first_name,
                last_name=request.last_name,
                email=request.email,
                hashed_password=hashed_password,
                location=request.location,
                occupation=request.occupation,
                picture_path=picture_path,
                friends=list(request.friends),
                viewed_profile=self._draw_counter(),
                impressions=self._draw_counter(),
                created_at=timestamp,
                updated_at=timestamp,
            )
        except ValueError as exception:
            raise ValidationFailure(["body"], str(exception)) from exception

        saved_user = await self.user_repository.insert(new_user)
        logger.info(f"Registered user {saved_user.id}")
        return saved_user
