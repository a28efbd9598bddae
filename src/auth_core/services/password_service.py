"""Password hashing service using bcrypt.

Digests are self-describing (``$2b$<rounds>$<salt><hash>``), so the work
factor can be raised later without invalidating stored hashes.
"""

from functools import lru_cache

import bcrypt

from auth_core.exceptions import HashingFailedError

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt with a configurable work factor. ``bcrypt.checkpw``
    compares digests in constant time.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> digest = service.hash("password123")
    >>> service.verify(digest, "password123")
    True
    >>> service.verify(digest, "wrongpass")
    False
    """

    DEFAULT_ROUNDS = 12

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
            Higher values are more secure but slower.
        """
        if not 4 <= rounds <= 31:
            msg = f"bcrypt rounds must be between 4 and 31, got {rounds}"
            raise ValueError(msg)
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt digest as a string

        Raises
        ------
        HashingFailedError
            If the password cannot be hashed (too long for bcrypt, or the
            salt could not be generated)
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            msg = f"Password exceeds {MAX_PASSWORD_BYTES} bytes"
            raise HashingFailedError(msg)

        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(encoded, salt)
        except (ValueError, OSError) as e:
            msg = f"Password hashing failed: {e}"
            raise HashingFailedError(msg) from e
        return hashed.decode("utf-8")

    def verify(self, password_hash: str, password: str) -> bool:
        """Verify a password against a stored digest.

        Parameters
        ----------
        password_hash
            The bcrypt digest to verify against
        password
            The plaintext password to check

        Returns
        -------
        True if the password matches, False otherwise

        Raises
        ------
        HashingFailedError
            If the stored digest is malformed. A malformed digest is not the
            same thing as a mismatch.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError) as e:
            msg = "Stored password digest is malformed"
            raise HashingFailedError(msg) from e


    def verify_dummy(self, password: str) -> None:
        """Run a bcrypt check whose outcome is discarded.

        Used when no stored digest exists for a login attempt, so that an
        unknown username costs the same work as a wrong password.

        Parameters
        ----------
        password
            The plaintext password supplied by the caller
        """
        encoded = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        bcrypt.checkpw(encoded, _dummy_digest(self._rounds))


@lru_cache(maxsize=None)
def _dummy_digest(rounds: int) -> bytes:
    return bcrypt.hashpw(b"unused-dummy-password", bcrypt.gensalt(rounds=rounds))
