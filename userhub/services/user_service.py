"""
User Account Service

PURPOSE:
Create, update and delete users while keeping the denormalized
user <-> company link consistent:
- user side: currentCompanyName (free text) and currentCompanyId
- company side: employees, a list of user ids

HOW IT WORKS:
1. Validate input with the pydantic schemas (schemas/user.py)
2. Hash any plaintext password before building the write
3. Write the user
4. On update/delete, move the user between company employee lists

Each step is a separate store call with no transaction around them.
If a later step fails, the error propagates and earlier steps stay
applied (logged at ERROR so the inconsistency is visible).
Companies are matched by name; an unknown name is not an error.
"""

import logging
from typing import Any, Mapping, Optional, Union

from userhub.core.errors import (
    DuplicateUsernameError,
    ImmutableFieldError,
    NotFoundError,
    StoreError,
)
from userhub.core.security import compare_password, hash_password
from userhub.schemas.company import Company
from userhub.schemas.user import User, UserCreate, UserUpdate, parse_model
from userhub.services.base import CompanyStore, UserStore
from userhub.services.mongo_service import MongoCompanyStore, MongoUserStore, serialize_doc, utcnow

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("username",)


def _immutable_field_in(patch: Any) -> Optional[str]:
    """Name of the first immutable field found in patch, at any nesting level."""
    if not isinstance(patch, Mapping):
        return None
    for key, value in patch.items():
        if key in IMMUTABLE_FIELDS:
            return key
        # operator-style patches, e.g. {"$set": {"username": ...}}
        found = _immutable_field_in(value)
        if found:
            return found
    return None


class UserService:
    """
    Lifecycle operations for users.

    Both stores are injected; get_user_service() wires the MongoDB ones.
    """

    def __init__(self, users: UserStore, companies: CompanyStore):
        self.users = users
        self.companies = companies

    # ============================================================
    # CREATE
    # ============================================================

    def create_user(self, candidate: Union[UserCreate, Mapping[str, Any]]) -> User:
        """
        Persist a new user.

        Raises:
            ValidationError: bad or missing fields
            DuplicateUsernameError: the username is taken
        """
        candidate = parse_model(UserCreate, candidate)

        if self.users.find_by_username(candidate.username) is not None:
            raise DuplicateUsernameError(candidate.username)

        doc = candidate.model_dump(by_alias=True, exclude_none=True)
        if candidate.password is not None:
            doc["password"] = hash_password(candidate.password)
        now = utcnow()
        doc["createdAt"] = now
        doc["updatedAt"] = now

        saved = self.users.insert(doc)
        logger.info("User %s created", candidate.username)
        return self._to_user(saved)

    # ============================================================
    # READ
    # ============================================================

    def get_user(self, username: str) -> User:
        doc = self.users.find_by_username(username)
        if doc is None:
            raise NotFoundError(username)
        return self._to_user(doc)

    def get_current_company(self, username: str) -> Optional[Company]:
        """Resolve the user's currentCompanyId to its company, if any."""
        doc = self.users.find_by_username(username)
        if doc is None:
            raise NotFoundError(username)
        company_id = doc.get("currentCompanyId")
        if not company_id:
            return None
        company = self.companies.find_by_id(company_id)
        if company is None:
            logger.info("User %s points at missing company %s", username, company_id)
            return None
        return Company.model_validate(serialize_doc(company))

    # ============================================================
    # UPDATE
    # ============================================================

    def update_user(self, username: str, patch: Union[UserUpdate, Mapping[str, Any]]) -> User:
        """
        Apply a partial patch, then reconcile company membership.

        Raises:
            ImmutableFieldError: the patch touches username
            ValidationError: bad fields in the patch
            NotFoundError: no such user (before or during the write)
        """
        field = _immutable_field_in(patch)
        if field:
            raise ImmutableFieldError(field)
        patch = parse_model(UserUpdate, patch)

        before = self.users.find_by_username(username)
        if before is None:
            raise NotFoundError(username)

        fields = patch.model_dump(by_alias=True, exclude_unset=True)
        if "password" in fields and fields["password"] is not None:
            fields["password"] = hash_password(fields["password"])
        fields["updatedAt"] = utcnow()

        after = self.users.update_by_username(username, fields)
        if after is None:
            # deleted between the read and the write
            raise NotFoundError(username)
        logger.info("User %s updated (%s)", username, ", ".join(sorted(fields)))

        return self._to_user(self._reconcile_company(before, after))

    def _reconcile_company(self, before: dict, after: dict) -> dict:
        """
        Move the user between company employee lists after an update.

        Returns the latest user document.
        """
        user_id = after["_id"]
        username = after["username"]
        old_name = before.get("currentCompanyName")
        new_name = after.get("currentCompanyName")

        if new_name and new_name != old_name:
            company = self.companies.add_employee(new_name, user_id)
            if company is not None:
                logger.info("User %s added to %s's employees", user_id, new_name)
                company_id = company["_id"]
            else:
                logger.info("Company %s not found; membership not recorded", new_name)
                company_id = None
            after = self._set_company_id(username, company_id)
            if old_name:
                self._leave_company(old_name, user_id, "update")
        elif not new_name and old_name:
            self._leave_company(old_name, user_id, "update")
            after = self._set_company_id(username, None)

        return after

    def _leave_company(self, name: str, user_id: Any, operation: str) -> None:
        try:
            company = self.companies.remove_employee(name, user_id)
        except StoreError:
            logger.error(
                "Removing user %s from %s failed; the user %s already went through",
                user_id, name, operation
            )
            raise
        if company is not None:
            logger.info("User %s removed from %s's employees", user_id, name)
        else:
            logger.info("Previous company %s not found; nothing to remove", name)

    def _set_company_id(self, username: str, company_id: Any) -> dict:
        doc = self.users.update_by_username(
            username, {"currentCompanyId": company_id, "updatedAt": utcnow()}
        )
        if doc is None:
            raise NotFoundError(username)
        return doc

    # ============================================================
    # DELETE
    # ============================================================

    def delete_user(self, username: str) -> None:
        """
        Remove the user and take them off their current company's employees.

        Raises:
            NotFoundError: no such user
        """
        doc = self.users.delete_by_username(username)
        if doc is None:
            raise NotFoundError(username)
        logger.info("User %s deleted", username)

        company_name = doc.get("currentCompanyName")
        if company_name:
            self._leave_company(company_name, doc["_id"], "delete")

    # ============================================================
    # PASSWORDS
    # ============================================================

    @staticmethod
    def compare_password(candidate: str, stored_hash: str) -> bool:
        """True/False for match; ComparisonError if the hash is unusable."""
        return compare_password(candidate, stored_hash)

    @staticmethod
    def _to_user(doc: dict) -> User:
        return User.model_validate(serialize_doc(doc))


def get_user_service() -> UserService:
    """UserService backed by the configured MongoDB collections."""
    return UserService(MongoUserStore(), MongoCompanyStore())
