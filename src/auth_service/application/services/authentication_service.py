"""Authentication service for login, registration and token resolution."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING

from auth_core import (
    AuthError,
    AuthResponse,
    HashingFailedError,
    InvalidCredentialsError,
    LoginRequest,
    PersistenceError,
    PublicUser,
    RegisterRequest,
    SessionExpiredError,
    SessionNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from auth_core.best_effort import BestEffortResult, attempt
from auth_core.time import utc_now

if TYPE_CHECKING:
    from auth_core import (
        PasswordHashingService,
        SessionRepository,
        SessionTokenService,
        UserRepository,
    )

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Classify anything a store raises that is not already an AuthError."""
    try:
        yield
    except AuthError:
        raise
    except Exception as e:
        raise PersistenceError(operation) from e


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates the user and session stores with password hashing and
    token issuance to provide:
    - Login with username and password
    - Registration (which also logs the new user in)
    - Resolving a bearer token to its user

    The service keeps no state between calls and never retries. Every store
    call is awaited exactly once, so cancelling the calling task aborts
    whichever call is in flight. Updating the last login time and persisting
    a new session are best-effort: their failure is logged and the caller
    still receives a token.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        password_service: PasswordHashingService,
        token_service: SessionTokenService,
        best_effort_timeout: float | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._user_repo = user_repository
        self._session_repo = session_repository
        self._password_service = password_service
        self._token_service = token_service
        self._best_effort_timeout = best_effort_timeout
        self._clock = clock

    async def login(self, request: LoginRequest) -> AuthResponse:
        with _store_errors("find_by_username"):
            user = await self._user_repo.find_by_username(request.username)
        if user is None:
            # Same bcrypt cost as a wrong password
            await asyncio.to_thread(
                self._password_service.verify_dummy,
                request.password,
            )
            logger.warning("Login failed for %s: unknown username", request.username)
            msg = f"authenticate user {request.username!r}: user not found"
            raise UserNotFoundError(msg)

        try:
            matches = await asyncio.to_thread(
                self._password_service.verify,
                user.password_hash,
                request.password,
            )
        except HashingFailedError as e:
            logger.warning(
                "Login failed for %s: stored digest unusable (%s)",
                request.username,
                e,
            )
            msg = f"authenticate user {request.username!r}: digest unusable"
            raise InvalidCredentialsError(msg) from e
        if not matches:
            logger.warning("Login failed for %s: wrong password", request.username)
            msg = f"authenticate user {request.username!r}: wrong password"
            raise InvalidCredentialsError(msg)

        await self._best_effort(
            "update_last_login",
            self._user_repo.update_last_login(user.id),
        )
        token = await self._issue_session(user.id)

        logger.info("User logged in: %s (id: %s)", user.username, user.id)
        return AuthResponse(token=token, user=user.to_public())

    async def register(self, request: RegisterRequest) -> AuthResponse:
        password_hash = await asyncio.to_thread(
            self._password_service.hash,
            request.password,
        )

        with _store_errors("exists_by_username_or_email"):
            taken = await self._user_repo.exists_by_username_or_email(
                request.username,
                request.email,
            )
        if taken:
            logger.info("Registration rejected for %s: taken", request.username)
            raise UserAlreadyExistsError(request.username, request.email)

        # The uniqueness constraint in the store still decides a race between
        # two registrations that both passed the check above.
        with _store_errors("create_user"):
            user_id = await self._user_repo.create(
                request.username,
                request.email,
                password_hash,
            )

        token = await self._issue_session(user_id)

        logger.info("User registered: %s (id: %s)", request.username, user_id)
        return AuthResponse(
            token=token,
            user=PublicUser(id=user_id, username=request.username, email=request.email),
        )

    async def resolve_by_token(self, token: str) -> PublicUser:
        with _store_errors("find_session_by_token"):
            session = await self._session_repo.find_by_token(token)
        if session is None:
            raise SessionNotFoundError("lookup session: no such token")

        if self._token_service.is_expired(session.expires_at, self._clock()):
            msg = f"session expired at {session.expires_at.isoformat()}"
            raise SessionExpiredError(msg)

        return session.to_public()

    async def _issue_session(self, user_id: int) -> str:
        token = self._token_service.generate_token()
        expires_at = self._token_service.expires_at(self._clock())
        # The token is returned even if it could not be stored; resolving it
        # later then fails with SessionNotFoundError.
        await self._best_effort(
            "create_session",
            self._session_repo.create(user_id, token, expires_at),
        )
        return token

    async def _best_effort(
        self,
        operation: str,
        awaitable: Awaitable[object],
    ) -> BestEffortResult[object]:
        return await attempt(operation, awaitable, timeout=self._best_effort_timeout)
