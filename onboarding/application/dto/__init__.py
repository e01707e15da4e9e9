from .auth_dto import UserRegistrationRequest
from .user_dto import ErrorResponse, UserResponse

__all__ = [
    "UserRegistrationRequest",
    "UserResponse",
    "ErrorResponse",
]
