"""Constants for domain model field names"""

from .user_fields import UserFields
from .media_constants import (
    COUNTER_UPPER_BOUND,
    DEFAULT_UPLOAD_DIR,
    UPLOAD_NAMING_ORIGINAL,
    UPLOAD_NAMING_POLICIES,
    UPLOAD_NAMING_RANDOM,
)

__all__ = [
    "UserFields",
    "COUNTER_UPPER_BOUND",
    "DEFAULT_UPLOAD_DIR",
    "UPLOAD_NAMING_ORIGINAL",
    "UPLOAD_NAMING_POLICIES",
    "UPLOAD_NAMING_RANDOM",
]
