"""Unit tests for PasswordHashingService."""

import pytest

from auth_core.exceptions import HashingFailedError
from auth_core.services import PasswordHashingService
from auth_core.services.password_service import _dummy_digest


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_hash_returns_bcrypt_format(self):
        """Test that hash returns a self-describing bcrypt digest."""
        hashed = self.service.hash("secure_password123")

        assert hashed.startswith("$2")
        assert hashed.split("$")[2] == "04"
        assert len(hashed) == 60

    def test_verify_correct_password(self):
        password = "my_secret_password"
        hashed = self.service.hash(password)

        assert self.service.verify(hashed, password) is True

    def test_verify_incorrect_password(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify(hashed, "wrong_password") is False

    def test_hash_produces_different_hashes(self):
        """Hashing the same password twice uses different salts."""
        password = "same_password"
        hash1 = self.service.hash(password)
        hash2 = self.service.hash(password)

        assert hash1 != hash2
        assert self.service.verify(hash1, password)
        assert self.service.verify(hash2, password)

    def test_verify_accepts_digest_from_other_work_factor(self):
        """The work factor is read from the digest, not the service."""
        other = PasswordHashingService(rounds=5)
        hashed = other.hash("password123")

        assert self.service.verify(hashed, "password123") is True


class TestPasswordHashingFailures:
    """Failures are reported as HashingFailedError, never as a mismatch."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    @pytest.mark.parametrize("digest", ["not_a_valid_hash", ""])
    def test_verify_malformed_digest_raises(self, digest):
        with pytest.raises(HashingFailedError):
            self.service.verify(digest, "password")

    def test_hash_rejects_password_over_72_bytes(self):
        with pytest.raises(HashingFailedError, match="72 bytes"):
            self.service.hash("a" * 73)

    def test_hash_counts_bytes_not_characters(self):
        # 36 two-byte characters are exactly 72 bytes
        self.service.hash("é" * 36)

        with pytest.raises(HashingFailedError):
            self.service.hash("é" * 37)

    def test_hashing_failure_is_infrastructure_error(self):
        with pytest.raises(HashingFailedError) as exc_info:
            self.service.verify("garbage", "password")

        assert exc_info.value.code.value == "HASHING_FAILED"


class TestPasswordHashingConfiguration:
    def test_default_rounds(self):
        assert PasswordHashingService().rounds == 12

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_out_of_range_rejected(self, rounds):
        with pytest.raises(ValueError, match="between 4 and 31"):
            PasswordHashingService(rounds=rounds)

    def test_dummy_verification_never_raises(self):
        service = PasswordHashingService(rounds=4)

        assert service.verify_dummy("password123") is None
        assert service.verify_dummy("é" * 40) is None
        assert service.verify_dummy("") is None

    def test_dummy_digest_uses_configured_rounds(self):
        PasswordHashingService(rounds=4).verify_dummy("password123")

        assert _dummy_digest(4).startswith(b"$2b$04$")
        assert _dummy_digest(4) is _dummy_digest(4)
