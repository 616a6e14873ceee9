"""
UserHub
User accounts with password hashing and current-employer tracking.

Architecture:
- MongoDB: users and companies collections
- bcrypt (passlib): one-way password hashes
- Services: create/update/delete with company membership reconciliation
"""

__version__ = "1.0.0"
