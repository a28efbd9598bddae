"""Abstract repository interface for identity records.

This interface defines the contract the AuthenticationService consumes.
Implementations can use SQLAlchemy or any other storage; the service never
sees a query or a connection.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from auth_core.schemas import PublicUser


@dataclass(frozen=True)
class UserRecord:
    """Immutable identity data returned by the repository.

    Carries the password hash so the service can verify credentials.
    Use ``to_public()`` for anything that leaves the core.
    """

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime | None = None
    last_login_at: datetime | None = None

    def to_public(self) -> PublicUser:
        return PublicUser(id=self.id, username=self.username, email=self.email)


class UserRepository(ABC):
    """
    Abstract repository interface for identity records.

    Every method is awaited once per call by the service; cancelling the
    awaiting task must abort the underlying storage work.

    Implementations must raise:
    - ``UserAlreadyExistsError`` from ``create`` on a uniqueness violation
    - ``PersistenceError`` for any other storage failure
    """

    @abstractmethod
    async def find_by_username(self, username: str) -> UserRecord | None:
        """
        Find a user by username.

        Parameters
        ----------
        username
            The exact username

        Returns
        -------
        The user if found, None otherwise. Absence is not an error.
        """

    @abstractmethod
    async def exists_by_username_or_email(self, username: str, email: str) -> bool:
        """
        Check whether either the username or the email is taken.

        Parameters
        ----------
        username
            Candidate username
        email
            Candidate email

        Returns
        -------
        True if any user has this username or this email
        """

    @abstractmethod
    async def create(self, username: str, email: str, password_hash: str) -> int:
        """
        Insert a new user.

        Parameters
        ----------
        username
            Unique username
        email
            Unique email
        password_hash
            The bcrypt digest

        Returns
        -------
        The identifier assigned by the store
        """

    @abstractmethod
    async def update_last_login(self, user_id: int) -> None:
        """
        Set the last login timestamp to now.

        Parameters
        ----------
        user_id
            The user's identifier
        """
