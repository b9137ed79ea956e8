"""Permission checking logic.

This module provides the checks that decide whether a user holds a
permission through one of their assigned roles.

Resolution is exact first, then a single wildcard one level up:
``container:own:*`` covers ``container:own:start`` but ``container:*``
does not. Every failure mode resolves to ``False``.
"""

import structlog

from gatekeeper.core.permissions.names import wildcard_parent
from gatekeeper.core.permissions.store import PermissionStore


logger = structlog.get_logger()


class PermissionChecker:
    """Service for checking user permissions.

    Evaluates whether a user holds permissions through their roles,
    querying the store directly instead of materializing grant sets.
    Checks never raise: store failures are logged and treated as denial.
    """

    def __init__(self, store: PermissionStore) -> None:
        self.store = store

    async def has_permission(
        self,
        user_id: str | None,
        permission: str | None,
    ) -> bool:
        """Check if a user holds a specific permission.

        Args:
            user_id: The user's ID
            permission: The permission name (e.g. "container:own:start")

        Returns:
            True if the user holds the permission exactly or through the
            wildcard of its immediate parent, False otherwise
        """
        if not user_id or not permission:
            return False

        # The two lookups are independent reads, not a snapshot
        try:
            if await self.store.granted_exactly(user_id, permission):
                return True

            return bool(
                await self.store.granted_exactly(user_id, wildcard_parent(permission))
            )
        except Exception:
            logger.exception(
                "permission_check_failed",
                user_id=user_id,
                permission=permission,
            )
            return False

    async def has_all_permissions(
        self,
        user_id: str | None,
        permissions: list[str],
    ) -> bool:
        """Check if a user holds all of the specified permissions.

        Stops at the first permission that is not held. An empty list is
        satisfied trivially.

        Args:
            user_id: The user's ID
            permissions: Permission names to check

        Returns:
            True if the user holds every permission
        """
        for permission in permissions:
            if not await self.has_permission(user_id, permission):
                return False

        return True

    async def has_any_permission(
        self,
        user_id: str | None,
        permissions: list[str],
    ) -> bool:
        """Check if a user holds any of the specified permissions.

        Stops at the first permission that is held. An empty list is
        never satisfied.

        Args:
            user_id: The user's ID
            permissions: Permission names to check

        Returns:
            True if the user holds at least one permission
        """
        for permission in permissions:
            if await self.has_permission(user_id, permission):
                return True

        return False

    async def first_missing_permission(
        self,
        user_id: str | None,
        permissions: list[str],
    ) -> str | None:
        """Return the first permission the user does not hold.

        Args:
            user_id: The user's ID
            permissions: Permission names to check, in order

        Returns:
            The first missing permission name, or None if all are held
        """
        for permission in permissions:
            if not await self.has_permission(user_id, permission):
                return permission

        return None
