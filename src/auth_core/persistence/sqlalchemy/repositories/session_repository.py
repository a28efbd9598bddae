"""SQLAlchemy implementation of SessionRepository."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth_core.exceptions import PersistenceError
from auth_core.persistence.sqlalchemy.models import SessionModel, UserModel
from auth_core.repositories import SessionLookup, SessionRepository
from auth_core.time import ensure_tz_aware

logger = logging.getLogger(__name__)


class SessionRepositorySQLAlchemy(SessionRepository):
    """SQLAlchemy implementation of the SessionRepository interface."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def create(self, user_id: int, token: str, expires_at: datetime) -> None:
        model = SessionModel(user_id=user_id, token=token, expires_at=expires_at)
        try:
            async with self._session_maker.begin() as session:
                session.add(model)
        except SQLAlchemyError as e:
            raise PersistenceError("create_session") from e

        logger.debug("Created session for user: %s", user_id)

    async def find_by_token(self, token: str) -> SessionLookup | None:
        stmt = (
            select(
                SessionModel.user_id,
                UserModel.username,
                UserModel.email,
                SessionModel.expires_at,
            )
            .join(UserModel, SessionModel.user_id == UserModel.id)
            .where(SessionModel.token == token)
        )
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                row = result.first()
        except SQLAlchemyError as e:
            raise PersistenceError("find_session_by_token") from e

        if row is None:
            return None

        return SessionLookup(
            user_id=row.user_id,
            username=row.username,
            email=row.email,
            expires_at=ensure_tz_aware(row.expires_at),
        )
