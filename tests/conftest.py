import uuid

import mongomock
import pytest

from userhub.db.mongodb import COLLECTIONS, init_mongo_indexes
from userhub.services.mongo_service import MongoCompanyStore, MongoUserStore
from userhub.services.user_service import UserService


@pytest.fixture
def mongo_db():
    """Fresh in-memory database per test, with the production indexes."""
    client = mongomock.MongoClient()
    db = client[f"userhub_test_{uuid.uuid4().hex}"]
    init_mongo_indexes(db)
    yield db
    client.drop_database(db.name)


@pytest.fixture
def users_store(mongo_db):
    return MongoUserStore(mongo_db[COLLECTIONS["users"]])


@pytest.fixture
def companies_store(mongo_db):
    return MongoCompanyStore(mongo_db[COLLECTIONS["companies"]])


@pytest.fixture
def service(users_store, companies_store):
    return UserService(users_store, companies_store)


@pytest.fixture
def acme(companies_store):
    return companies_store.create("Acme")


@pytest.fixture
def globex(companies_store):
    return companies_store.create("Globex")


@pytest.fixture
def make_user(service):
    """Create a user with sensible defaults; keyword args override them."""
    def _make(username="alice", **fields):
        data = {
            "username": username,
            "email": f"{username}@example.com",
            "password": "secret",
        }
        data.update(fields)
        return service.create_user(data)
    return _make
