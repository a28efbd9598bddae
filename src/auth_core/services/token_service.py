"""Session token service.

Issues opaque bearer tokens and computes their absolute expiry. Tokens carry
no information; all meaning lives in the session store row they key.
"""

import secrets
from datetime import datetime, timedelta

from auth_core.time import ensure_tz_aware


class SessionTokenService:
    """Service for session token creation and expiry rules.

    Examples
    --------
    >>> service = SessionTokenService()
    >>> token = service.generate_token()
    >>> expires_at = service.expires_at(issued_at)
    >>> service.is_expired(expires_at, now)
    False
    """

    DEFAULT_LIFETIME_HOURS = 24
    DEFAULT_TOKEN_BYTES = 32
    MIN_TOKEN_BYTES = 16

    def __init__(
        self,
        lifetime_hours: int = DEFAULT_LIFETIME_HOURS,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
    ):
        """Initialize the token service.

        Parameters
        ----------
        lifetime_hours
            Hours from issuance until a session expires (default 24)
        token_bytes
            Bytes of randomness per token (default 32)
        """
        if lifetime_hours <= 0:
            msg = "Session lifetime must be positive"
            raise ValueError(msg)
        if token_bytes < self.MIN_TOKEN_BYTES:
            msg = f"Session tokens need at least {self.MIN_TOKEN_BYTES} bytes"
            raise ValueError(msg)

        self._lifetime = timedelta(hours=lifetime_hours)
        self._token_bytes = token_bytes

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def generate_token(self) -> str:
        """Return a new URL-safe random token."""
        return secrets.token_urlsafe(self._token_bytes)

    def expires_at(self, issued_at: datetime) -> datetime:
        """Absolute expiry for a session issued at ``issued_at``."""
        return ensure_tz_aware(issued_at) + self._lifetime

    @staticmethod
    def is_expired(expires_at: datetime, now: datetime) -> bool:
        """A session is valid only while ``now`` is strictly before expiry."""
        return ensure_tz_aware(now) >= ensure_tz_aware(expires_at)
