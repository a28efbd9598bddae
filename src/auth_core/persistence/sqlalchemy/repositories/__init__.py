from auth_core.persistence.sqlalchemy.repositories.session_repository import (
    SessionRepositorySQLAlchemy,
)
from auth_core.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = ["SessionRepositorySQLAlchemy", "UserRepositorySQLAlchemy"]
