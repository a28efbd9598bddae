"""Auth service CLI application using Typer.

This module provides command-line utilities for the auth service:
database schema creation, demo data seeding and running the API server.
"""

import asyncio

import typer
import uvicorn
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from auth_config.settings import Settings, get_settings
from auth_core import PasswordHashingService, UserRepository
from auth_core.persistence.sqlalchemy import UserRepositorySQLAlchemy
from auth_service.presentation.api.app import create_app
from auth_service.presentation.api.dependencies import build_engine, create_tables
from auth_service.presentation.api.server import ReadinessAwareServer

app = typer.Typer(
    name="auth-service",
    help="Auth Service - username/password login with session tokens",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

DEMO_USERS = ("alice", "bob", "carol", "david", "eve")
DEMO_PASSWORD = "password123"  # NOQA: S105


async def seed_demo_users(
    user_repo: UserRepository,
    password_service: PasswordHashingService,
    usernames: tuple[str, ...] = DEMO_USERS,
) -> dict[str, bool]:
    """Insert demo users, skipping any whose username or email is taken.

    Returns
    -------
    Mapping of username to whether it was created by this call.
    """
    created: dict[str, bool] = {}
    for username in usernames:
        email = f"{username}@example.com"
        if await user_repo.exists_by_username_or_email(username, email):
            created[username] = False
            continue
        password_hash = await asyncio.to_thread(password_service.hash, DEMO_PASSWORD)
        await user_repo.create(username, email, password_hash)
        created[username] = True
    return created


async def _init_db(engine: AsyncEngine) -> None:
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


async def _seed_db(engine: AsyncEngine, rounds: int) -> dict[str, bool]:
    try:
        await create_tables(engine)
        session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        return await seed_demo_users(
            UserRepositorySQLAlchemy(session_maker),
            PasswordHashingService(rounds=rounds),
        )
    finally:
        await engine.dispose()


@db_app.command("init")
def init_db() -> None:
    """Create missing database tables. Existing tables are left untouched."""
    settings = get_settings()
    asyncio.run(_init_db(build_engine(settings)))
    console.print("[green]✓[/green] Database schema is up to date")


@db_app.command("seed")
def seed_db() -> None:
    """Insert the demo users (password: password123)."""
    settings = get_settings()
    created = asyncio.run(_seed_db(build_engine(settings), settings.bcrypt_rounds))

    table = Table(title="Demo users")
    table.add_column("Username", style="cyan")
    table.add_column("Email")
    table.add_column("Status")
    for username, was_created in created.items():
        status = "[green]created[/green]" if was_created else "[dim]exists[/dim]"
        table.add_row(username, f"{username}@example.com", status)
    console.print(table)


def build_server(
    settings: Settings,
    host: str | None = None,
    port: int | None = None,
) -> ReadinessAwareServer:
    """Create the API app and the uvicorn server that runs it."""
    api = create_app(settings)
    config = uvicorn.Config(
        api,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
    )
    return ReadinessAwareServer(
        config,
        app_state=api.state,
        drain_delay=settings.readiness_drain_delay_seconds,
    )


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Bind port (default: API_PORT)"),
) -> None:
    """Run the HTTP API with uvicorn.

    On SIGTERM the service reports not ready for READINESS_DRAIN_DELAY_SECONDS,
    then drains in-flight requests for at most SHUTDOWN_TIMEOUT_SECONDS.
    """
    build_server(get_settings(), host, port).run()


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
