"""SQLAlchemy implementation for auth_core persistence.

Provides:
- AuthBase: Declarative base for auth models
- UserModel, SessionModel: the users and sessions tables
- UserRepositorySQLAlchemy, SessionRepositorySQLAlchemy: store implementations

Note: The consuming application should create AuthBase.metadata
(at startup or from its migrations) before using the repositories.

Examples
--------
async with engine.begin() as conn:
    await conn.run_sync(AuthBase.metadata.create_all)

session_maker = async_sessionmaker(engine, expire_on_commit=False)
users = UserRepositorySQLAlchemy(session_maker)
"""

from auth_core.persistence.sqlalchemy.base import AuthBase
from auth_core.persistence.sqlalchemy.models import SessionModel, UserModel
from auth_core.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "SessionModel",
    "SessionRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
