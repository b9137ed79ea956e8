"""User database models."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gatekeeper.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_IPV6_LENGTH,
    MAX_NAME_LENGTH,
    MAX_TOKEN_LENGTH,
    MAX_USER_AGENT_LENGTH,
)
from gatekeeper.core.database.base import Base, StringIDMixin, TimestampMixin


if TYPE_CHECKING:
    from gatekeeper.core.permissions.models import Role


class User(Base, StringIDMixin, TimestampMixin):
    """User model representing an authenticated principal.

    Users are created by the identity provider; this service reads them
    to resolve sessions and role assignments.

    Attributes:
        name: Display name
        email: Unique email address
        email_verified: Whether the email address has been confirmed
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # Relationships
    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary="user_roles",
        back_populates="users",
    )
    sessions: Mapped[list["UserSession"]] = relationship(
        "UserSession",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


class UserSession(Base, StringIDMixin, TimestampMixin):
    """An authenticated session issued by the identity provider.

    Attributes:
        token: Opaque session token presented by the client
        expires_at: When the session stops being valid
        ip_address: Client IP address when the session was created
        user_agent: Client user agent when the session was created
    """

    __tablename__ = "user_sessions"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(
        String(MAX_TOKEN_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    ip_address: Mapped[str | None] = mapped_column(
        String(MAX_IPV6_LENGTH),
        nullable=True,
    )
    user_agent: Mapped[str | None] = mapped_column(
        String(MAX_USER_AGENT_LENGTH),
        nullable=True,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="sessions",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<UserSession(id={self.id}, user_id={self.user_id})>"
