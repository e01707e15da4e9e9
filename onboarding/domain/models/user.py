# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class User:
    """
    Pure domain model for a registered user - no external dependencies.

    ``hashed_password`` holds the bcrypt representation, never the plaintext.
    ``picture_path`` is the stored name of the profile picture, if any.
    """
    id: Optional[str]
    first_name: str
    last_name: str
    email: str
    hashed_password: str
    location: str
    occupation: str
    picture_path: Optional[str] = None
    friends: List[str] = field(default_factory=list)
    viewed_profile: int = 0
    impressions: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.first_name or not self.first_name.strip():
            raise ValueError("First name is required")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Last name is required")
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")
        if not self.hashed_password:
            raise ValueError("Password hash is required")
        if self.viewed_profile < 0 or self.impressions < 0:
            raise ValueError("Counters cannot be negative")
