"""
Error taxonomy for the registration pipeline.

Every stage of a registration raises one of these typed failures. Each
carries a user-facing message that is safe to put in a response body, the
HTTP status it maps to, and a short ``kind`` identifier used by the API
layer and in logs.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Iterable, Optional, Tuple


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class RegistrationError(Exception):
    """Base exception for all registration failures."""

    kind: str = "RegistrationError"
    status_code: int = 500
    default_user_message: str = "Registration failed. Please try again."

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or self.default_user_message
        self.details = details or {}


# -----------------------------------------------------------------------------
# Client errors
# -----------------------------------------------------------------------------


class ValidationFailure(RegistrationError):
    """Raised when required fields are missing or malformed."""

    kind = "ValidationFailure"
    status_code = 400
    default_user_message = "Invalid registration data."

    def __init__(self, fields: Iterable[str], message: Optional[str] = None):
        self.fields: Tuple[str, ...] = tuple(fields)
        text = message or f"Missing or invalid field(s): {', '.join(self.fields)}"
        super().__init__(text, user_message=text, details={"fields": list(self.fields)})


class ConflictFailure(RegistrationError):
    """Raised when a user with the same email already exists."""

    kind = "ConflictFailure"
    status_code = 409
    default_user_message = "A user with this email already exists."


class MalformedUpload(RegistrationError):
    """Raised when the multipart body cannot be parsed."""

    kind = "MalformedUpload"
    status_code = 400
    default_user_message = "The request body could not be parsed as a form upload."


# -----------------------------------------------------------------------------
# Server errors
# -----------------------------------------------------------------------------


class IOFailure(RegistrationError):
    """Raised when the attachment cannot be written to storage."""

    kind = "IOFailure"
    status_code = 500
    default_user_message = "The uploaded file could not be stored."


class CryptoFailure(RegistrationError):
    """Raised when the password hashing primitive fails."""

    kind = "CryptoFailure"
    status_code = 500
    default_user_message = "Registration failed due to a server error."


class StorageFailure(RegistrationError):
    """Raised when the user store is unreachable or rejects the write."""

    kind = "StorageFailure"
    status_code = 500
    default_user_message = "Registration failed due to a server error."
