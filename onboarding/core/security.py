# Standard library imports
import logging

# External package imports
import bcrypt

# Local application imports
from ..domain.constants import UserFields
from ..domain.exceptions import CryptoFailure, ValidationFailure


logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_HASH_COST = 12


def hash_password(plain_password: str, rounds: int = DEFAULT_HASH_COST) -> str:
    """
    Hash a plain password using bcrypt

    A fresh random salt is generated on every call, so hashing the same
    password twice yields two different strings. The result embeds the
    algorithm, cost and salt ($2b$<cost>$<salt><digest>), so verification
    needs nothing besides the stored string.

    Args:
        plain_password: The plain text password to hash
        rounds: bcrypt work factor (log2 of the iteration count)

    Returns:
        Hashed password string

    Raises:
        ValidationFailure: If the password is empty or longer than bcrypt accepts
        CryptoFailure: If salt generation or hashing fails
    """
    if not plain_password:
        raise ValidationFailure([UserFields.PASSWORD], "Password must not be empty")

    encoded = plain_password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationFailure(
            [UserFields.PASSWORD],
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
        )

    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(encoded, salt)
    except (ValueError, TypeError, OSError) as e:
        logger.error(f"Password hashing failed with cost {rounds}: {e}", exc_info=True)
        raise CryptoFailure(f"Password hashing failed: {e}") from e
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if passwords match, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8")
        )
    except (ValueError, TypeError):
        return False
