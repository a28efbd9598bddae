"""Auth service settings.

Every field maps to an upper-case environment variable of the same name
(``BCRYPT_ROUNDS``, ``SESSION_LIFETIME_HOURS`` ...). Real environment
variables win over dotenv files. Dotenv files are looked up relative to the
working directory, lowest priority first:

- ``config/.env``
- ``config/.env.dev``
- the file named by ``AUTH_ENV_FILE``

Missing files are skipped.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VAR = "AUTH_ENV_FILE"


def env_files() -> tuple[Path, ...]:
    """Dotenv candidates in ascending priority."""
    files = [Path("config/.env"), Path("config/.env.dev")]
    explicit = os.environ.get(ENV_FILE_VAR)
    if explicit:
        files.append(Path(explicit))
    return tuple(files)


class Settings(BaseSettings):
    """Runtime configuration of the auth service."""

    model_config = SettingsConfigDict(
        env_file=env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Auth Service"

    # Postgres connection; the password has no default
    postgres_password: SecretStr
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "auth"
    # Replaces the Postgres URL entirely, e.g. sqlite+aiosqlite:///./data/auth.db
    database_url_override: str | None = None
    db_pool_size: int = Field(default=10, ge=1)
    db_max_overflow: int = Field(default=20, ge=0)

    # HTTP server
    api_host: str = "0.0.0.0"  # noqa: S104
    api_port: int = 8080
    api_debug: bool = False
    api_cors_origins: str = ""
    readiness_drain_delay_seconds: float = Field(default=5.0, ge=0)
    shutdown_timeout_seconds: float = Field(default=30.0, gt=0)

    # Authentication
    session_lifetime_hours: int = Field(default=24, gt=0)
    session_token_bytes: int = Field(default=32, ge=16)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    # None disables the bound on last-login updates and session inserts
    best_effort_timeout_seconds: float | None = 2.0

    log_level: str = "INFO"

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_cors_origins(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return ",".join(v)
        return v or ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; raises if POSTGRES_PASSWORD is unset."""
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    get_settings.cache_clear()
