"""
Services module - user lifecycle and its MongoDB stores.
"""
from userhub.services.mongo_service import MongoCompanyStore, MongoUserStore
from userhub.services.user_service import UserService, get_user_service

__all__ = [
    "MongoCompanyStore",
    "MongoUserStore",
    "UserService",
    "get_user_service",
]
