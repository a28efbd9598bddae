"""Repository interfaces for auth_core.

This package defines abstract repository interfaces that can be implemented
by different persistence technologies. The SQLAlchemy implementations live
in auth_core.persistence.sqlalchemy.
"""

from auth_core.repositories.session_repository import (
    SessionLookup,
    SessionRepository,
)
from auth_core.repositories.user_repository import UserRecord, UserRepository

__all__ = [
    "SessionLookup",
    "SessionRepository",
    "UserRecord",
    "UserRepository",
]
