"""Unit tests for the error kind to HTTP response mapping."""

import httpx
import pytest
from fastapi import FastAPI

from auth_core import (
    AccountLockedError,
    AuthError,
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
from auth_service.presentation.api.exception_handlers import (
    ERROR_CODE_TO_PUBLIC,
    public_error_for,
    setup_exception_handlers,
)


class TestPublicErrorMapping:
    def test_every_error_code_is_mapped(self):
        assert set(ERROR_CODE_TO_PUBLIC) == set(ErrorCode)

    def test_unknown_user_and_wrong_password_are_indistinguishable(self):
        assert public_error_for(UserNotFoundError()) == public_error_for(
            InvalidCredentialsError(),
        )
        assert public_error_for(UserNotFoundError()).status_code == 401

    def test_missing_and_expired_session_are_indistinguishable(self):
        assert public_error_for(SessionNotFoundError()) == public_error_for(
            SessionExpiredError(),
        )
        assert public_error_for(SessionExpiredError()).status_code == 401

    def test_conflict(self):
        error = public_error_for(UserAlreadyExistsError("alice", "a@example.com"))

        assert error.status_code == 409
        assert error.code == "USER_ALREADY_EXISTS"

    @pytest.mark.parametrize(
        "exc",
        [PasswordExpiredError(), AccountLockedError(), UnauthorizedError()],
    )
    def test_reserved_kinds_are_forbidden(self, exc):
        assert public_error_for(exc).status_code == 403

    @pytest.mark.parametrize(
        "exc",
        [
            HashingFailedError("salt generation failed"),
            PersistenceError("create_user", "relation users does not exist"),
            RuntimeError("boom"),
        ],
    )
    def test_infrastructure_failures_are_generic(self, exc):
        error = public_error_for(exc)

        assert error.status_code == 500
        assert error.code == "INTERNAL_ERROR"
        assert error.detail == "Internal server error"


def _app_raising(exc: Exception) -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/boom")
    async def boom():
        raise exc

    return app


async def _get(app: FastAPI) -> httpx.Response:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get("/boom")


class TestExceptionHandlerResponses:
    async def test_user_not_found_body_matches_invalid_credentials(self):
        not_found = await _get(_app_raising(UserNotFoundError("no user 'mallory'")))
        wrong_pw = await _get(_app_raising(InvalidCredentialsError("bad pw 'alice'")))

        assert not_found.status_code == wrong_pw.status_code == 401
        assert not_found.content == wrong_pw.content
        assert not_found.json() == {
            "detail": "Invalid credentials",
            "code": "INVALID_CREDENTIALS",
        }
        assert not_found.headers["www-authenticate"] == "Bearer"

    async def test_internal_message_is_not_leaked(self):
        response = await _get(
            _app_raising(PersistenceError("create_user", "password=hunter2 failed")),
        )

        assert response.status_code == 500
        assert "hunter2" not in response.text
        assert response.json()["code"] == "INTERNAL_ERROR"

    async def test_unhandled_exception_is_generic(self):
        response = await _get(_app_raising(ValueError("secret detail")))

        assert response.status_code == 500
        assert "secret detail" not in response.text

    async def test_base_auth_error(self):
        response = await _get(_app_raising(AuthError()))

        assert response.status_code == 403
