"""
Schemas module - pydantic models for user and company documents.

- Input schemas validate what callers send (UserCreate, UserUpdate)
- Output schemas describe what is read back (User, Company)
"""

from userhub.schemas.company import Company
from userhub.schemas.user import (
    Education,
    Experience,
    User,
    UserCreate,
    UserUpdate,
    parse_model,
)
from userhub.schemas.validators import validate_email, validate_photo_url

__all__ = [
    "Company",
    "Education",
    "Experience",
    "User",
    "UserCreate",
    "UserUpdate",
    "parse_model",
    "validate_email",
    "validate_photo_url",
]
