"""Abstract repository interface for session tokens."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from auth_core.schemas import PublicUser


@dataclass(frozen=True)
class SessionLookup:
    """A session joined with the user that owns it."""

    user_id: int
    username: str
    email: str
    expires_at: datetime

    def to_public(self) -> PublicUser:
        return PublicUser(id=self.user_id, username=self.username, email=self.email)


class SessionRepository(ABC):
    """
    Abstract repository interface for bearer sessions.

    Expiry is not enforced here. ``find_by_token`` returns expired sessions
    too; the service compares ``expires_at`` on every read.
    """

    @abstractmethod
    async def create(self, user_id: int, token: str, expires_at: datetime) -> None:
        """
        Insert a new session for a user.

        Parameters
        ----------
        user_id
            Owning user's identifier
        token
            Unique opaque token
        expires_at
            Absolute expiry (timezone-aware)
        """

    @abstractmethod
    async def find_by_token(self, token: str) -> SessionLookup | None:
        """
        Look up a session and its owning user in one read.

        Parameters
        ----------
        token
            The bearer token

        Returns
        -------
        The joined session row if found, None otherwise
        """
