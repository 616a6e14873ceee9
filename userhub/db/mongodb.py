"""
MongoDB Connection Utility

MongoDB stores:
- users: account profiles, password hashes, employment snapshot
- companies: company name plus the list of employee user ids

The user -> company link is denormalized on both sides, so the
services layer keeps the two in step (see services/user_service.py).
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from userhub.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the userhub database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by its name in COLLECTIONS."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "companies": "companies",
}


def init_mongo_indexes(db: Database = None):
    """
    Create indexes. Call this once during app startup.

    users.username is unique so a concurrent create loses at the
    database instead of producing two accounts.
    """
    db = db if db is not None else get_mongo_db()

    db[COLLECTIONS["users"]].create_index([("username", ASCENDING)], unique=True)
    db[COLLECTIONS["companies"]].create_index("name")

    logger.info("MongoDB indexes created successfully")
