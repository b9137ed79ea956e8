"""Permission system database models.

This module defines the RBAC (Role-Based Access Control) models:
- Permission: A colon-delimited capability name (e.g. "container:own:start")
- Role: A named set of permissions
- role_permissions: Junction table linking roles to permissions
- UserRole: Junction table linking users to roles
"""

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gatekeeper.core.constants import (
    MAX_ID_LENGTH,
    MAX_PERMISSION_NAME_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from gatekeeper.core.database.base import Base, StringIDMixin, TimestampMixin


if TYPE_CHECKING:
    from gatekeeper.modules.users.models import User


# Junction table for Role <-> Permission many-to-many relationship
role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        String(MAX_ID_LENGTH),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        String(MAX_ID_LENGTH),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Permission(Base, StringIDMixin, TimestampMixin):
    """Permission model representing a named capability.

    Names are colon-delimited segments; the final segment may be the
    wildcard ``*``, which grants every permission sharing the same
    immediate parent.

    Attributes:
        name: Unique permission name (e.g. "container:own:*")
        description: Human-readable description of the permission

    Examples:
        - name="user:read" -> Can read user information
        - name="container:own:*" -> Every action on the user's own containers
    """

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary=role_permissions,
        back_populates="permissions",
    )

    def __repr__(self) -> str:
        return f"<Permission({self.name})>"


class Role(Base, StringIDMixin, TimestampMixin):
    """Role model representing a named bundle of permissions.

    Attributes:
        name: Unique role name (e.g. "superadmin", "user")
        description: Human-readable description of the role
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    permissions: Mapped[list["Permission"]] = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
    )
    users: Mapped[list["User"]] = relationship(
        "User",
        secondary="user_roles",
        back_populates="roles",
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"


class UserRole(Base, TimestampMixin):
    """Junction table linking users to roles.

    A user can hold several roles; their effective grants are the union
    of all their roles' permissions.
    """

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_role"),)

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    role_id: Mapped[str] = mapped_column(
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<UserRole(user_id={self.user_id}, role_id={self.role_id})>"
