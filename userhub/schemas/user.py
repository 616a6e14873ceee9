"""
User Schemas - what gets written to and read back from the users collection.

Attribute names are snake_case; the persisted documents use camelCase
(firstName, currentCompanyName, createdAt, ...), which is what the
aliases map to.
"""

from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from userhub.core.errors import ValidationError
from userhub.core.security import compare_password
from userhub.schemas.validators import validate_email, validate_photo_url

ModelT = TypeVar("ModelT", bound=BaseModel)

# Messages for required fields that are absent from the input entirely
REQUIRED_MESSAGES = {
    "username": "Username required",
    "email": "User email required",
}


class DocumentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _unique(values: List[str]) -> List[str]:
    """Skills behave as a set; keep first occurrence order."""
    return list(dict.fromkeys(values))


# ============================================================
# NESTED ENTRIES
# ============================================================

class Experience(DocumentModel):
    job_title: Optional[str] = None
    company: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class Education(DocumentModel):
    institution: Optional[str] = None
    degree: Optional[str] = None
    end_date: Optional[datetime] = None


# ============================================================
# STORED USER
# ============================================================

class User(DocumentModel):
    """
    A persisted user as returned by the service layer.

    Not re-validated against the email/photo formats: what is in the
    database is returned as-is. The password hash is kept on the model
    for compare_password() but excluded from model_dump().
    """
    id: Optional[str] = Field(None, alias="_id")
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, exclude=True, repr=False)
    current_company_name: Optional[str] = None
    current_company_id: Optional[str] = None
    photo: Optional[str] = None
    experience: List[Experience] = []
    education: List[Education] = []
    skills: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def compare_password(self, candidate: str) -> bool:
        """Check candidate against this user's stored hash (see core.security)."""
        return compare_password(candidate, self.password)


# ============================================================
# INPUT SCHEMAS
# ============================================================

class UserCreate(DocumentModel):
    """Candidate user for create_user. Password is plaintext here."""
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, repr=False)
    current_company_name: Optional[str] = None
    photo: Optional[str] = None
    experience: List[Experience] = []
    education: List[Education] = []
    skills: List[str] = []

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("photo")
    @classmethod
    def check_photo(cls, v):
        return validate_photo_url(v)

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v):
        return _unique(v)


class UserUpdate(DocumentModel):
    """
    Partial patch for update_user.

    Only fields that were actually sent are applied (exclude_unset), so an
    explicit null clears a field while an omitted one is left alone.
    username, currentCompanyId and the timestamps are not patchable.
    """
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, repr=False)
    current_company_name: Optional[str] = None
    photo: Optional[str] = None
    experience: Optional[List[Experience]] = None
    education: Optional[List[Education]] = None
    skills: Optional[List[str]] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        # an explicit null is an attempt to remove a required field
        return validate_email(v)

    @field_validator("photo")
    @classmethod
    def check_photo(cls, v):
        return validate_photo_url(v)

    @field_validator("experience", "education")
    @classmethod
    def null_list_is_empty(cls, v):
        return v if v is not None else []

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v):
        return _unique(v) if v is not None else []


def parse_model(model_cls: Type[ModelT], data: Any) -> ModelT:
    """
    Validate input into model_cls, raising userhub's ValidationError.

    Field validators raise userhub's ValidationError already (it is a
    ValueError, so pydantic wraps it); that original error is re-raised
    as-is. Other pydantic failures are converted using the first error.
    """
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        original = error.get("ctx", {}).get("error")
        if isinstance(original, ValidationError):
            raise original from e
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        if error["type"] == "missing":
            message = REQUIRED_MESSAGES.get(field, f"{field} required")
        elif error["type"] == "extra_forbidden":
            message = f"Unknown field '{field}'"
        else:
            message = error["msg"]
        raise ValidationError(field, message) from e
