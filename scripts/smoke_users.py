#!/usr/bin/env python3
"""
User Lifecycle Smoke Script

Runs create -> update -> delete against a live MongoDB and prints the
company membership at each step.
Run: python scripts/smoke_users.py
"""
import sys
sys.path.insert(0, '.')

from userhub.core.config import get_settings
from userhub.core.logging import configure_logging
from userhub.db.mongodb import COLLECTIONS, get_mongo_db, init_mongo_indexes, test_mongo_connection
from userhub.services.mongo_service import MongoCompanyStore, MongoUserStore
from userhub.services.user_service import UserService

SMOKE_USERNAME = "smoke_user"
SMOKE_COMPANIES = ("Smoke Acme", "Smoke Globex")


def employees_of(companies: MongoCompanyStore, name: str) -> list:
    company = companies.find_by_name(name)
    return company["employees"] if company else []


def cleanup():
    """Remove anything a previous run left behind."""
    db = get_mongo_db()
    db[COLLECTIONS["users"]].delete_many({"username": SMOKE_USERNAME})
    db[COLLECTIONS["companies"]].delete_many({"name": {"$in": list(SMOKE_COMPANIES)}})


def main():
    configure_logging()
    settings = get_settings()
    print("=" * 60)
    print("USERHUB LIFECYCLE SMOKE RUN")
    print(f"URI: {settings.mongodb_uri}  DB: {settings.mongodb_db}")
    print("=" * 60)

    if not test_mongo_connection():
        print("❌ MongoDB connection failed!")
        return

    init_mongo_indexes()
    companies = MongoCompanyStore()
    service = UserService(MongoUserStore(), companies)
    cleanup()

    acme, globex = SMOKE_COMPANIES
    companies.create(acme)
    companies.create(globex)

    try:
        print("\n[1] Create")
        user = service.create_user({
            "username": SMOKE_USERNAME,
            "email": "smoke.user@example.com",
            "password": "secret",
        })
        print(f"    ✅ Created {user.username} ({user.id})")
        print(f"    ✅ Password check: {user.compare_password('secret')}")

        print("\n[2] Join first company")
        user = service.update_user(SMOKE_USERNAME, {"currentCompanyName": acme})
        print(f"    ✅ currentCompanyId: {user.current_company_id}")
        print(f"    ✅ {acme} employees: {employees_of(companies, acme)}")

        print("\n[3] Move to second company")
        user = service.update_user(SMOKE_USERNAME, {"currentCompanyName": globex})
        print(f"    ✅ {acme} employees: {employees_of(companies, acme)}")
        print(f"    ✅ {globex} employees: {employees_of(companies, globex)}")

        print("\n[4] Delete")
        service.delete_user(SMOKE_USERNAME)
        print(f"    ✅ {globex} employees: {employees_of(companies, globex)}")

        print("\n" + "=" * 60)
        print("✅ SMOKE RUN PASSED")
        print("=" * 60)
    finally:
        cleanup()


if __name__ == "__main__":
    main()
