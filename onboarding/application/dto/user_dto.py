from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from ...domain.models.user import User


class UserResponse(BaseModel):
    """DTO for user response (no password)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    first_name: str
    last_name: str
    email: EmailStr
    picture_path: Optional[str] = None
    friends: List[str] = Field(default_factory=list)
    location: str
    occupation: str
    viewed_profile: int
    impressions: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build the public view of a persisted user, leaving the credential hash out"""
        return cls(
            id=user.id or "",
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            picture_path=user.picture_path,
            friends=list(user.friends),
            location=user.location,
            occupation=user.occupation,
            viewed_profile=user.viewed_profile,
            impressions=user.impressions,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ErrorResponse(BaseModel):
    """DTO for a failed request: user-safe message plus the failure kind"""
    detail: str
    error: str
    fields: Optional[List[str]] = None
