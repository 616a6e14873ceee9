from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from userhub.core.errors import DuplicateUsernameError, ImmutableFieldError, StoreError
from userhub.services.mongo_service import MongoCompanyStore, MongoUserStore, serialize_doc


def test_serialize_doc_converts_object_ids_without_mutating():
    user_id, company_id = ObjectId(), ObjectId()
    doc = {"_id": user_id, "currentCompanyId": company_id, "employees": [user_id], "name": "x"}

    out = serialize_doc(doc)

    assert out == {
        "_id": str(user_id),
        "currentCompanyId": str(company_id),
        "employees": [str(user_id)],
        "name": "x",
    }
    assert doc["_id"] is user_id
    assert serialize_doc(None) is None


def test_user_store_round_trip(users_store):
    saved = users_store.insert({"username": "alice", "email": "alice@example.com"})
    assert isinstance(saved["_id"], ObjectId)

    updated = users_store.update_by_username("alice", {"firstName": "Alice"})
    assert updated["firstName"] == "Alice"

    deleted = users_store.delete_by_username("alice")
    assert deleted["_id"] == saved["_id"]
    assert users_store.find_by_username("alice") is None


def test_user_store_missing_user_returns_none(users_store):
    assert users_store.update_by_username("ghost", {"firstName": "x"}) is None
    assert users_store.delete_by_username("ghost") is None


def test_user_store_refuses_username_writes(users_store):
    users_store.insert({"username": "alice"})
    with pytest.raises(ImmutableFieldError):
        users_store.update_by_username("alice", {"username": "mallory"})
    assert users_store.find_by_username("alice") is not None


def test_user_store_maps_duplicate_key_to_duplicate_username():
    collection = MagicMock()
    collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")
    store = MongoUserStore(collection)

    with pytest.raises(DuplicateUsernameError) as exc:
        store.insert({"username": "alice"})
    assert exc.value.username == "alice"


def test_driver_failures_become_store_errors():
    collection = MagicMock()
    down = ServerSelectionTimeoutError("no servers")
    collection.find_one.side_effect = down
    collection.find_one_and_update.side_effect = down

    with pytest.raises(StoreError) as exc:
        MongoUserStore(collection).find_by_username("alice")
    assert exc.value.__cause__ is down

    with pytest.raises(StoreError):
        MongoCompanyStore(collection).add_employee("Acme", ObjectId())


def test_add_employee_is_a_set_and_never_creates(companies_store, acme):
    user_id = ObjectId()
    companies_store.add_employee("Acme", user_id)
    company = companies_store.add_employee("Acme", user_id)
    assert company["employees"] == [user_id]

    assert companies_store.add_employee("Initech", user_id) is None
    assert companies_store.find_by_name("Initech") is None


def test_remove_employee(companies_store, acme):
    user_id = ObjectId()
    companies_store.add_employee("Acme", user_id)
    company = companies_store.remove_employee("Acme", user_id)
    assert company["employees"] == []
    assert companies_store.remove_employee("Initech", user_id) is None


def test_find_company_by_id(companies_store, acme):
    assert companies_store.find_by_id(acme["_id"])["name"] == "Acme"
    assert companies_store.find_by_id(str(acme["_id"]))["name"] == "Acme"
    assert companies_store.find_by_id("not-an-object-id") is None
    assert companies_store.find_by_id(ObjectId()) is None
