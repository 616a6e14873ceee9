"""
Field validators - usable on their own, without a model or a database.

Each validator returns the value unchanged when it is acceptable and
raises userhub.core.errors.ValidationError otherwise.
"""

import re
from typing import Optional

from userhub.core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^([a-z0-9_\.-]+)@([\da-z\.-]+)\.([a-z\.]{2,6})$", re.ASCII)

# Optional scheme, host with a dotted TLD, then an optional path.
# \d and \w match ASCII only (re.ASCII).
PHOTO_URL_PATTERN = re.compile(r"^(https?://)?([\da-z\.-]+)\.([a-z\.]{2,6})([/\w \.-]*)/?$", re.ASCII)

EMAIL_REQUIRED = "User email required"
EMAIL_INVALID = "Not a valid email"
PHOTO_INVALID = "Not a valid image URL"


def validate_email(value: Optional[str]) -> str:
    if value is None or value == "":
        raise ValidationError("email", EMAIL_REQUIRED)
    if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
        raise ValidationError("email", EMAIL_INVALID)
    return value


def validate_photo_url(value: Optional[str]) -> Optional[str]:
    """Photo is optional: None passes, anything else must look like a URL."""
    if value is None:
        return value
    if not isinstance(value, str) or not PHOTO_URL_PATTERN.fullmatch(value):
        raise ValidationError("photo", PHOTO_INVALID)
    return value
