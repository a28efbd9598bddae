"""End-to-end AuthenticationService flows on real stores (in-memory SQLite)."""

from datetime import timedelta

import pytest

from auth_core import (
    InvalidCredentialsError,
    LoginRequest,
    PasswordHashingService,
    RegisterRequest,
    SessionExpiredError,
    SessionNotFoundError,
    SessionTokenService,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from auth_core.persistence.sqlalchemy import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from auth_core.time import utc_now
from auth_service.application.services import AuthenticationService


class _Clock:
    def __init__(self):
        self.now = utc_now()

    def __call__(self):
        return self.now


@pytest.fixture
def clock() -> _Clock:
    return _Clock()


@pytest.fixture
def user_repo(session_maker) -> UserRepositorySQLAlchemy:
    return UserRepositorySQLAlchemy(session_maker)


@pytest.fixture
def auth_service(session_maker, user_repo, clock) -> AuthenticationService:
    return AuthenticationService(
        user_repository=user_repo,
        session_repository=SessionRepositorySQLAlchemy(session_maker),
        password_service=PasswordHashingService(rounds=4),
        token_service=SessionTokenService(),
        clock=clock,
    )


async def test_register_login_resolve_scenario(auth_service, user_repo):
    registered = await auth_service.register(
        RegisterRequest("alice", "alice@example.com", "password123"),
    )
    assert registered.user.username == "alice"
    assert registered.user.email == "alice@example.com"

    logged_in = await auth_service.login(LoginRequest("alice", "password123"))
    assert logged_in.user.id == registered.user.id
    assert logged_in.token != registered.token

    with pytest.raises(InvalidCredentialsError):
        await auth_service.login(LoginRequest("alice", "wrongpass"))

    resolved = await auth_service.resolve_by_token(logged_in.token)
    assert resolved == logged_in.user

    with pytest.raises(SessionNotFoundError):
        await auth_service.resolve_by_token("bogus")

    record = await user_repo.find_by_username("alice")
    assert record.last_login_at is not None
    assert record.password_hash != "password123"


async def test_registration_token_resolves(auth_service):
    registered = await auth_service.register(
        RegisterRequest("bob", "bob@example.com", "password123"),
    )

    resolved = await auth_service.resolve_by_token(registered.token)

    assert resolved == registered.user


async def test_duplicate_registration_is_rejected(auth_service, user_repo):
    await auth_service.register(
        RegisterRequest("carol", "carol@example.com", "password123"),
    )

    with pytest.raises(UserAlreadyExistsError):
        await auth_service.register(
            RegisterRequest("carol2", "carol@example.com", "password123"),
        )

    assert await user_repo.find_by_username("carol2") is None


async def test_unknown_user_login(auth_service):
    with pytest.raises(UserNotFoundError):
        await auth_service.login(LoginRequest("nobody", "password123"))


async def test_session_expires_after_24_hours(auth_service, clock):
    registered = await auth_service.register(
        RegisterRequest("david", "david@example.com", "password123"),
    )
    issued_at = clock.now

    clock.now = issued_at + timedelta(hours=24) - timedelta(seconds=1)
    assert (await auth_service.resolve_by_token(registered.token)).username == "david"

    clock.now = issued_at + timedelta(hours=24)
    with pytest.raises(SessionExpiredError):
        await auth_service.resolve_by_token(registered.token)
