"""Root pytest configuration for test discovery and auto-skip behavior.

Test Structure:
    tests/
    ├── auth_core/             # Hashing, tokens, stores
    │   ├── unit/              # Fast, isolated tests
    │   └── integration/       # SQLAlchemy stores (in-memory SQLite, Postgres)
    ├── auth_service/          # AuthenticationService, HTTP API, CLI
    │   ├── unit/
    │   └── integration/
    ├── auth_config/           # Settings loading
    │   └── unit/
    └── shared/                # Shared fixtures and utilities

Environment Variables:
    RUN_INTEGRATION=1    Run @pytest.mark.integration tests (Testcontainers)
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)

Pytest Options:
    --run-integration    Run integration tests
    --run-all            Run all tests
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from auth_config import clear_settings_cache

# Make shared fixtures available to every test package
from tests.shared.fixtures.database import (  # noqa: F401
    postgres_container,
    postgres_session_maker,
    session_maker,
    sqlite_engine,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

def _flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that need a real PostgreSQL container (auto-skipped)",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip container-backed tests unless explicitly enabled."""
    if config.getoption("--run-all") or _flag("RUN_ALL_TESTS"):
        return

    if config.getoption("--run-integration") or _flag("RUN_INTEGRATION"):
        return

    skip_integration = pytest.mark.skip(
        reason="Integration test - run with --run-integration or RUN_INTEGRATION=1",
    )
    for item in items:
        item_markers = {mark.name for mark in item.iter_markers()}
        if "integration" in item_markers:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def configure_app_settings():
    """Give every test a fresh settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
