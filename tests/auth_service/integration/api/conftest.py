"""Pytest fixtures for API tests.

The app runs against the shared in-memory SQLite engine and is driven by an
``httpx.AsyncClient`` over ``ASGITransport``, so requests execute on the
test's own event loop.
"""

import httpx
import pytest
import pytest_asyncio
from pydantic import SecretStr

from auth_config.settings import Settings
from auth_service.presentation.api.app import API_V1_PREFIX, create_app
from tests.shared.fixtures.database import SQLITE_MEMORY_URL


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        postgres_password=SecretStr("test-password"),
        database_url_override=SQLITE_MEMORY_URL,
        api_host="127.0.0.1",
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        bcrypt_rounds=4,  # Low rounds for fast tests
        best_effort_timeout_seconds=1.0,
        log_level="DEBUG",
    )


@pytest.fixture
def app(api_settings, sqlite_engine):
    return create_app(settings=api_settings, engine=sqlite_engine)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def register_payload() -> dict:
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "password123",
    }
