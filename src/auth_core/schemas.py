"""Value objects exchanged with the authentication service.

None of these are persisted. ``PublicUser`` is the only user shape that
leaves the core, so the password hash cannot leak through a response.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoginRequest:
    username: str
    password: str


@dataclass(frozen=True)
class RegisterRequest:
    username: str
    email: str
    password: str


@dataclass(frozen=True)
class PublicUser:
    """Public-safe view of an identity record."""

    id: int
    username: str
    email: str


@dataclass(frozen=True)
class AuthResponse:
    """Issued bearer token plus the authenticated user."""

    token: str
    user: PublicUser
