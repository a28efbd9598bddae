"""SQLAlchemy implementation of UserRepository.

Each operation runs in its own short transaction taken from the session
maker, so a failed best-effort write never poisons a caller's session.
"""

import logging

from sqlalchemy import exists, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth_core.exceptions import PersistenceError, UserAlreadyExistsError
from auth_core.persistence.sqlalchemy.models import UserModel
from auth_core.repositories import UserRecord, UserRepository
from auth_core.time import ensure_tz_aware, utc_now

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error.orig if error.orig is not None else error).lower()
    return "unique" in text or "duplicate" in text


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def find_by_username(self, username: str) -> UserRecord | None:
        stmt = select(UserModel).where(UserModel.username == username)
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("find_by_username") from e

        if model is None:
            return None

        return self._map_to_record(model)

    async def exists_by_username_or_email(self, username: str, email: str) -> bool:
        stmt = select(
            exists().where(
                or_(UserModel.username == username, UserModel.email == email),
            ),
        )
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return bool(result.scalar())
        except SQLAlchemyError as e:
            raise PersistenceError("exists_by_username_or_email") from e

    async def create(self, username: str, email: str, password_hash: str) -> int:
        model = UserModel(
            username=username,
            email=email,
            password_hash=password_hash,
        )
        try:
            async with self._session_maker.begin() as session:
                session.add(model)
                await session.flush()
                user_id = model.id
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise UserAlreadyExistsError(username, email) from e
            raise PersistenceError("create_user") from e
        except SQLAlchemyError as e:
            raise PersistenceError("create_user") from e

        logger.info("Created user: %s (id: %s)", username, user_id)
        return user_id

    async def update_last_login(self, user_id: int) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(last_login=utc_now())
        )
        try:
            async with self._session_maker.begin() as session:
                await session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("update_last_login") from e

    def _map_to_record(self, model: UserModel) -> UserRecord:
        return UserRecord(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            created_at=ensure_tz_aware(model.created_at),
            last_login_at=(
                ensure_tz_aware(model.last_login) if model.last_login else None
            ),
        )
