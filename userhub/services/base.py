"""
Store interfaces the user service depends on.

UserService receives one of each in its constructor; MongoUserStore and
MongoCompanyStore (services/mongo_service.py) are the production
implementations. Documents are plain dicts in their persisted shape
(camelCase keys, raw ObjectIds).
"""

from typing import Any, Optional, Protocol


class UserStore(Protocol):
    def find_by_username(self, username: str) -> Optional[dict]: ...

    def insert(self, doc: dict) -> dict: ...

    def update_by_username(self, username: str, fields: dict) -> Optional[dict]:
        """Set fields and return the document after the write, or None if absent."""
        ...

    def delete_by_username(self, username: str) -> Optional[dict]:
        """Remove and return the deleted document, or None if absent."""
        ...


class CompanyStore(Protocol):
    def find_by_name(self, name: str) -> Optional[dict]: ...

    def find_by_id(self, company_id: Any) -> Optional[dict]: ...

    def add_employee(self, name: str, user_id: Any) -> Optional[dict]:
        """Add user_id to the named company's employees. Never creates a company."""
        ...

    def remove_employee(self, name: str, user_id: Any) -> Optional[dict]: ...
