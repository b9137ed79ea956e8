"""Read-only permission stores.

A store answers one question: does any role assigned to a user carry a
permission with exactly this name? Wildcard handling lives in the
checker; stores only compare names for equality.
"""

from collections import defaultdict
from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.core.errors import ValidationError
from gatekeeper.core.permissions.models import (
    Permission,
    Role,
    UserRole,
    role_permissions,
)


class PermissionStore(Protocol):
    """Query surface over the user -> role -> permission relation."""

    async def granted_exactly(self, user_id: str, permission_name: str) -> bool:
        """Return True if a role held by the user carries this exact name.

        Raises on I/O or query failure; callers decide how to handle it.
        """
        ...


def _require_arguments(user_id: str, permission_name: str) -> None:
    """Reject empty lookup arguments.

    Raises:
        ValidationError: If either argument is empty
    """
    errors = []
    if not user_id:
        errors.append({"field": "user_id", "message": "Must be a non-empty string"})
    if not permission_name:
        errors.append(
            {"field": "permission_name", "message": "Must be a non-empty string"}
        )
    if errors:
        raise ValidationError("Invalid permission lookup", errors=errors)


class SQLAlchemyPermissionStore:
    """Permission store backed by the relational schema.

    Each lookup is a single join query limited to one row:
    user_roles -> roles -> role_permissions -> permissions.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def granted_exactly(self, user_id: str, permission_name: str) -> bool:
        """Check for an exact grant of ``permission_name`` to ``user_id``.

        Args:
            user_id: The user's ID
            permission_name: The permission name to match literally

        Returns:
            True if at least one of the user's roles carries the permission
        """
        _require_arguments(user_id, permission_name)

        stmt = (
            select(Permission.id)
            .select_from(UserRole)
            .join(Role, UserRole.role_id == Role.id)
            .join(role_permissions, role_permissions.c.role_id == Role.id)
            .join(Permission, role_permissions.c.permission_id == Permission.id)
            .where(
                UserRole.user_id == user_id,
                Permission.name == permission_name,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None


class InMemoryPermissionStore:
    """Permission store over explicit in-process join indexes.

    Keeps ``user_id -> {role_id}`` and ``role_id -> {permission_name}``
    so that lookups never scan every grant. Useful for tests and for
    callers that load a snapshot of assignments for a single request.

    Example:
        store = InMemoryPermissionStore()
        store.grant("editor", ["container:own:*"])
        store.assign("user-1", "editor")
        await store.granted_exactly("user-1", "container:own:*")  # True
    """

    def __init__(self) -> None:
        self._user_roles: dict[str, set[str]] = defaultdict(set)
        self._role_permissions: dict[str, set[str]] = defaultdict(set)

    def grant(self, role_id: str, permission_names: Iterable[str]) -> None:
        """Attach permission names to a role."""
        self._role_permissions[role_id].update(permission_names)

    def assign(self, user_id: str, role_id: str) -> None:
        """Assign a role to a user."""
        self._user_roles[user_id].add(role_id)

    async def granted_exactly(self, user_id: str, permission_name: str) -> bool:
        """Check for an exact grant of ``permission_name`` to ``user_id``."""
        _require_arguments(user_id, permission_name)

        return any(
            permission_name in self._role_permissions.get(role_id, ())
            for role_id in self._user_roles.get(user_id, ())
        )
