"""FastAPI dependency injection for the auth API.

Provides dependencies for:
- The shared database engine and session maker
- Store implementations
- Password hashing and token services
- The AuthenticationService
- The bearer token of the current request
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from auth_config.settings import Settings, get_settings
from auth_core import (
    PasswordHashingService,
    SessionRepository,
    SessionTokenService,
    UserRepository,
)
from auth_core.persistence.sqlalchemy import (
    AuthBase,
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from auth_service.application.services import AuthenticationService
from auth_service.presentation.api.config import get_api_settings

logger = logging.getLogger(__name__)

# Security scheme for opaque Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session Maker (Singleton)
# -----------------------------------------------------------------------------


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create an async engine for the configured database.

    The engine owns the connection pool. Pool sizing only applies to
    server databases; SQLite uses SQLAlchemy's default pool.
    """
    url = settings.database_url

    if settings.is_sqlite:
        # Ensure data directory exists for file-based SQLite
        db_path = url.split("///")[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(url, echo=False)

    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return build_engine(get_settings())


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


SessionMakerDep = Annotated[
    async_sessionmaker[AsyncSession],
    Depends(get_session_maker),
]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(AuthBase.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


# -----------------------------------------------------------------------------
# Stores
# -----------------------------------------------------------------------------


def get_user_repository(session_maker: SessionMakerDep) -> UserRepository:
    return UserRepositorySQLAlchemy(session_maker)


def get_session_repository(session_maker: SessionMakerDep) -> SessionRepository:
    return SessionRepositorySQLAlchemy(session_maker)


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service with the configured work factor."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_token_service(settings: SettingsDep) -> SessionTokenService:
    """Get session token service configured with API settings."""
    return SessionTokenService(
        lifetime_hours=settings.session_lifetime_hours,
        token_bytes=settings.session_token_bytes,
    )


def get_authentication_service(
    settings: SettingsDep,
    user_repo: UserRepository = Depends(get_user_repository),
    session_repo: SessionRepository = Depends(get_session_repository),
    password_service: PasswordHashingService = Depends(get_password_service),
    token_service: SessionTokenService = Depends(get_token_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates login, registration and token resolution.
    """
    return AuthenticationService(
        user_repository=user_repo,
        session_repository=session_repo,
        password_service=password_service,
        token_service=token_service,
        best_effort_timeout=settings.best_effort_timeout_seconds,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Bearer Token
# -----------------------------------------------------------------------------


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    Extract the opaque token from ``Authorization: Bearer <token>``.

    Raises
    ------
    HTTPException
        401 if the header is missing or not a Bearer credential
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


BearerToken = Annotated[str, Depends(get_bearer_token)]
