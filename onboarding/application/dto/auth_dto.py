from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from ...core.security import BCRYPT_MAX_PASSWORD_BYTES


ProfileText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class UserRegistrationRequest(BaseModel):
    """DTO for user registration request (camelCase form fields on the wire)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: ProfileText
    last_name: ProfileText
    email: EmailStr
    password: str = Field(min_length=1)
    location: ProfileText
    occupation: ProfileText
    friends: List[str] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password_size(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return value

    @field_validator("friends")
    @classmethod
    def drop_blank_friends(cls, value: List[str]) -> List[str]:
        return [friend.strip() for friend in value if friend and friend.strip()]
