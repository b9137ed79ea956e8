"""SQLAlchemy declarative base and common mixins."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from gatekeeper.core.constants import MAX_ID_LENGTH


def generate_id() -> str:
    """Generate a new string primary key."""
    return str(uuid4())


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class StringIDMixin:
    """Mixin that adds a string primary key.

    Identifiers are opaque strings so that ids issued by an external
    identity provider can be stored unchanged.
    """

    id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH),
        primary_key=True,
        default=generate_id,
    )


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
