"""Auth Core - credential verification and bearer sessions.

This package provides the authentication building blocks that are
independent of any transport. It handles:
- Password hashing (bcrypt)
- Opaque session token issuance and expiry rules
- Store interfaces for identity records and sessions
- The error taxonomy shared with the transport layer

Architecture:
    auth_core/
    ├── services/           # Pure logic (password hashing, session tokens)
    ├── repositories/       # Abstract store interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── best_effort.py      # Fire-and-observe side effects
    ├── schemas.py          # Request/response value objects
    └── exceptions.py       # Error taxonomy
"""

from auth_core.exceptions import (
    AccountLockedError,
    AuthError,
    AuthInfrastructureError,
    ErrorCode,
    HashingFailedError,
    InvalidCredentialsError,
    PasswordExpiredError,
    PersistenceError,
    SessionExpiredError,
    SessionNotFoundError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from auth_core.repositories import (
    SessionLookup,
    SessionRepository,
    UserRecord,
    UserRepository,
)
from auth_core.schemas import AuthResponse, LoginRequest, PublicUser, RegisterRequest
from auth_core.services import PasswordHashingService, SessionTokenService

__all__ = [
    # Services
    "PasswordHashingService",
    "SessionTokenService",
    # Repositories (interfaces)
    "SessionLookup",
    "SessionRepository",
    "UserRecord",
    "UserRepository",
    # Schemas
    "AuthResponse",
    "LoginRequest",
    "PublicUser",
    "RegisterRequest",
    # Exceptions
    "AccountLockedError",
    "AuthError",
    "AuthInfrastructureError",
    "ErrorCode",
    "HashingFailedError",
    "InvalidCredentialsError",
    "PasswordExpiredError",
    "PersistenceError",
    "SessionExpiredError",
    "SessionNotFoundError",
    "UnauthorizedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
