"""
Password handling.

Provides:
- Password hashing with bcrypt (fixed work factor from settings)
- Password comparison that separates "no match" from "could not compare"
"""

import logging

from passlib.context import CryptContext

from userhub.core.config import get_settings
from userhub.core.errors import ComparisonError

settings = get_settings()
logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Hash password with bcrypt. Errors propagate to the caller."""
    return pwd_context.hash(password)


def compare_password(candidate: str, stored_hash: str) -> bool:
    """
    Check a plaintext candidate against a stored bcrypt hash.

    Returns:
        True on match, False on mismatch.

    Raises:
        ComparisonError: the hash is missing or malformed, or the
            candidate is not a string.
    """
    if not stored_hash:
        raise ComparisonError("No stored password hash to compare against")
    try:
        return pwd_context.verify(candidate, stored_hash)
    except (ValueError, TypeError) as e:
        logger.warning("Password comparison failed: %s", e)
        raise ComparisonError(str(e)) from e
