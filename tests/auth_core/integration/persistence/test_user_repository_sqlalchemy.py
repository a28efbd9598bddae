"""Store tests for UserRepositorySQLAlchemy on in-memory SQLite."""

import pytest
from sqlalchemy import select, text

from auth_core import PersistenceError, UserAlreadyExistsError
from auth_core.persistence.sqlalchemy import UserModel, UserRepositorySQLAlchemy

TEST_DIGEST = "$2b$04$abcdefghijklmnopqrstuuNw8hTxYoYpS6Kc0HP1VJ2.gPUTwiUyK"


class TestUserRepositorySQLAlchemy:
    @pytest.fixture(autouse=True)
    def _repo(self, session_maker):
        self.session_maker = session_maker
        self.repo = UserRepositorySQLAlchemy(session_maker)

    async def test_create_assigns_increasing_ids(self):
        first = await self.repo.create("alice", "alice@example.com", TEST_DIGEST)
        second = await self.repo.create("bob", "bob@example.com", TEST_DIGEST)

        assert isinstance(first, int)
        assert second > first

    async def test_find_by_username(self):
        user_id = await self.repo.create("alice", "alice@example.com", TEST_DIGEST)

        record = await self.repo.find_by_username("alice")

        assert record is not None
        assert record.id == user_id
        assert record.email == "alice@example.com"
        assert record.password_hash == TEST_DIGEST
        assert record.created_at is not None
        assert record.created_at.tzinfo is not None
        assert record.last_login_at is None

    async def test_find_by_username_absent(self):
        assert await self.repo.find_by_username("nobody") is None

    async def test_exists_by_username_or_email(self):
        await self.repo.create("alice", "alice@example.com", TEST_DIGEST)

        assert await self.repo.exists_by_username_or_email("alice", "x@example.com")
        assert await self.repo.exists_by_username_or_email("x", "alice@example.com")
        assert not await self.repo.exists_by_username_or_email("x", "x@example.com")

    @pytest.mark.parametrize(
        ("username", "email"),
        [("alice", "other@example.com"), ("other", "alice@example.com")],
    )
    async def test_create_duplicate_is_conflict(self, username, email):
        await self.repo.create("alice", "alice@example.com", TEST_DIGEST)

        with pytest.raises(UserAlreadyExistsError):
            await self.repo.create(username, email, TEST_DIGEST)

    async def test_failed_insert_leaves_store_usable(self):
        await self.repo.create("alice", "alice@example.com", TEST_DIGEST)
        with pytest.raises(UserAlreadyExistsError):
            await self.repo.create("alice", "alice@example.com", TEST_DIGEST)

        assert await self.repo.create("bob", "bob@example.com", TEST_DIGEST)

    async def test_update_last_login(self):
        user_id = await self.repo.create("alice", "alice@example.com", TEST_DIGEST)

        await self.repo.update_last_login(user_id)

        record = await self.repo.find_by_username("alice")
        assert record.last_login_at is not None
        assert record.last_login_at.tzinfo is not None

    async def test_update_last_login_unknown_user_is_noop(self):
        await self.repo.update_last_login(9999)

        async with self.session_maker() as session:
            result = await session.execute(select(UserModel))
            assert result.scalars().all() == []

    async def test_storage_failure_is_persistence_error(self):
        async with self.session_maker.begin() as session:
            await session.execute(text("DROP TABLE sessions"))
            await session.execute(text("DROP TABLE users"))

        with pytest.raises(PersistenceError) as exc_info:
            await self.repo.find_by_username("alice")

        assert exc_info.value.operation == "find_by_username"
