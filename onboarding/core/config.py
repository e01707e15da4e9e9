# Standard library imports
import os
from typing import Final, List, Mapping, Optional

# Local application imports
from ..domain.constants import DEFAULT_UPLOAD_DIR, UPLOAD_NAMING_POLICIES, UPLOAD_NAMING_RANDOM


# bcrypt accepts work factors in this range
MIN_HASH_COST: Final[int] = 4
MAX_HASH_COST: Final[int] = 31


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    Pass an explicit mapping to build settings without touching os.environ
    (used by tests and by callers that construct the app themselves).
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ

        # Server Configuration
        self.port: Final[int] = _parse_int(env, "PORT", 6001)
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in env.get("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        self.log_level: Final[str] = env.get("LOG_LEVEL", "INFO").upper()

        # Database Configuration
        self.mongo_url: Final[str] = env.get("MONGO_URL", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = env.get("MONGO_DB_NAME", "onboarding")

        # Upload Configuration
        self.upload_dir: Final[str] = env.get("UPLOAD_DIR", DEFAULT_UPLOAD_DIR)
        self.upload_naming: Final[str] = env.get("UPLOAD_NAMING", UPLOAD_NAMING_RANDOM).lower()

        # Credential Configuration
        self.hash_cost: Final[int] = _parse_int(env, "HASH_COST", 12)
        self.password_min_length: Final[int] = _parse_int(env, "PASSWORD_MIN_LENGTH", 1)

        self._validate()

    def _validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"PORT must be between 1 and 65535, got {self.port}")
        if not MIN_HASH_COST <= self.hash_cost <= MAX_HASH_COST:
            raise ValueError(
                f"HASH_COST must be between {MIN_HASH_COST} and {MAX_HASH_COST}, got {self.hash_cost}"
            )
        if self.upload_naming not in UPLOAD_NAMING_POLICIES:
            raise ValueError(
                f"UPLOAD_NAMING must be one of {sorted(UPLOAD_NAMING_POLICIES)}, got {self.upload_naming!r}"
            )
        if self.password_min_length < 1:
            raise ValueError("PASSWORD_MIN_LENGTH must be at least 1")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
