"""Shared pytest fixtures for all test packages."""

from tests.shared.fixtures.database import (
    POSTGRES_IMAGE,
    SQLITE_MEMORY_URL,
    postgres_container,
    postgres_session_maker,
    session_maker,
    sqlite_engine,
)

__all__ = [
    "POSTGRES_IMAGE",
    "SQLITE_MEMORY_URL",
    "postgres_container",
    "postgres_session_maker",
    "session_maker",
    "sqlite_engine",
]
