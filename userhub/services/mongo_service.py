"""
MongoDB Service - CRUD operations for the users and companies collections.

Collections in this database:
1. users      - account profiles (see schemas/user.py for the shape)
2. companies  - company name plus employees, a list of user ObjectIds

Every pymongo failure leaves this module as StoreError with the driver
error chained; nothing is retried here.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from userhub.core.errors import DuplicateUsernameError, ImmutableFieldError, StoreError
from userhub.db.mongodb import get_collection, COLLECTIONS

logger = logging.getLogger(__name__)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

# Fields holding ObjectIds (or lists of them) besides _id
_OBJECT_ID_FIELDS = ("currentCompanyId", "employees")


def _stringify(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [_stringify(item) for item in value]
    return value


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Return a JSON-friendly copy of a MongoDB document (ObjectIds -> str)."""
    if doc is None:
        return None
    doc = dict(doc)
    for key in ("_id",) + _OBJECT_ID_FIELDS:
        if key in doc:
            doc[key] = _stringify(doc[key])
    return doc


def utcnow() -> datetime:
    """Current UTC time as MongoDB stores it: naive, millisecond precision."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@contextmanager
def store_errors(action: str):
    """Re-raise driver errors raised inside the block as StoreError."""
    try:
        yield
    except PyMongoError as e:
        logger.error("%s failed: %s", action, e)
        raise StoreError(f"{action} failed: {e}") from e


# ============================================================
# USERS COLLECTION
# ============================================================

class MongoUserStore:
    """
    Handles user document storage.
    Lookups are by username, which has a unique index.
    """

    def __init__(self, collection: Collection = None):
        if collection is None:
            collection = get_collection(COLLECTIONS["users"])
        self.collection: Collection = collection

    def find_by_username(self, username: str) -> Optional[dict]:
        with store_errors("find user"):
            return self.collection.find_one({"username": username})

    def insert(self, doc: dict) -> dict:
        """
        Insert a new user document.

        Returns:
            The document with its generated _id.

        Raises:
            DuplicateUsernameError: the unique username index rejected it
                (another create won the race).
        """
        with store_errors("insert user"):
            try:
                result = self.collection.insert_one(doc)
            except DuplicateKeyError as e:
                raise DuplicateUsernameError(doc.get("username")) from e
        doc["_id"] = result.inserted_id
        return doc

    def update_by_username(self, username: str, fields: dict) -> Optional[dict]:
        """$set fields on the user and return the updated document (None if absent)."""
        if "username" in fields:
            raise ImmutableFieldError("username")
        with store_errors("update user"):
            return self.collection.find_one_and_update(
                {"username": username},
                {"$set": fields},
                return_document=ReturnDocument.AFTER
            )

    def delete_by_username(self, username: str) -> Optional[dict]:
        with store_errors("delete user"):
            return self.collection.find_one_and_delete({"username": username})


# ============================================================
# COMPANIES COLLECTION
# Owned elsewhere; userhub only maintains the employees list
# ============================================================

class MongoCompanyStore:
    """
    Company lookups and employee membership by company name.
    """

    def __init__(self, collection: Collection = None):
        if collection is None:
            collection = get_collection(COLLECTIONS["companies"])
        self.collection: Collection = collection

    def create(self, name: str) -> dict:
        """Insert an empty company (seeding and scripts)."""
        doc = {"name": name, "employees": [], "createdAt": utcnow()}
        with store_errors("insert company"):
            result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def find_by_name(self, name: str) -> Optional[dict]:
        with store_errors("find company"):
            return self.collection.find_one({"name": name})

    def find_by_id(self, company_id: Any) -> Optional[dict]:
        """Fetch a company by ObjectId (or its string form). Bad ids find nothing."""
        if isinstance(company_id, str):
            if not ObjectId.is_valid(company_id):
                return None
            company_id = ObjectId(company_id)
        with store_errors("find company"):
            return self.collection.find_one({"_id": company_id})

    def add_employee(self, name: str, user_id: Any) -> Optional[dict]:
        """$addToSet the user onto the named company; None if no such company."""
        with store_errors("add employee"):
            return self.collection.find_one_and_update(
                {"name": name},
                {"$addToSet": {"employees": user_id}},
                return_document=ReturnDocument.AFTER
            )

    def remove_employee(self, name: str, user_id: Any) -> Optional[dict]:
        """$pull the user from the named company; None if no such company."""
        with store_errors("remove employee"):
            return self.collection.find_one_and_update(
                {"name": name},
                {"$pull": {"employees": user_id}},
                return_document=ReturnDocument.AFTER
            )
