"""SQLAlchemy declarative base for auth_core models.

The consuming application creates the tables from ``AuthBase.metadata``,
either at startup or from its migration tooling.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from auth_core.time import utc_now


class AuthBase(DeclarativeBase):
    """Declarative base for auth_core models."""


class CreatedAtMixin:
    """Mixin for an immutable created_at timestamp (utc_now)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
