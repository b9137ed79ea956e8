"""Integration tests for permission resolution against the database."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.core.errors import ValidationError
from gatekeeper.core.permissions.checker import PermissionChecker
from gatekeeper.core.permissions.store import SQLAlchemyPermissionStore
from gatekeeper.modules.users.models import User
from tests.factories.rbac import assign, create_role
from tests.factories.user import UserFactory


pytestmark = pytest.mark.integration


@pytest.fixture
def store(db: AsyncSession) -> SQLAlchemyPermissionStore:
    return SQLAlchemyPermissionStore(db)


@pytest.fixture
def checker(store: SQLAlchemyPermissionStore) -> PermissionChecker:
    return PermissionChecker(store)


class TestSQLAlchemyPermissionStore:
    """Tests for exact-name lookups."""

    async def test_exact_grant(
        self, db: AsyncSession, user: User, store: SQLAlchemyPermissionStore
    ):
        role = await create_role(db, "viewer", ["user:read"])
        await assign(db, user, role)

        assert await store.granted_exactly(user.id, "user:read") is True
        assert await store.granted_exactly(user.id, "user:update") is False

    async def test_wildcard_is_matched_literally(
        self, db: AsyncSession, user: User, store: SQLAlchemyPermissionStore
    ):
        """The store never expands wildcards."""
        role = await create_role(db, "admin", ["user:*"])
        await assign(db, user, role)

        assert await store.granted_exactly(user.id, "user:*") is True
        assert await store.granted_exactly(user.id, "user:read") is False

    async def test_unassigned_role_grants_nothing(
        self, db: AsyncSession, user: User, store: SQLAlchemyPermissionStore
    ):
        await create_role(db, "admin", ["user:read"])

        assert await store.granted_exactly(user.id, "user:read") is False

    async def test_grants_from_several_roles(
        self, db: AsyncSession, user: User, store: SQLAlchemyPermissionStore
    ):
        first = await create_role(db, "viewer", ["user:read"])
        second = await create_role(db, "operator", ["node:read"])
        await assign(db, user, first)
        await assign(db, user, second)

        assert await store.granted_exactly(user.id, "user:read") is True
        assert await store.granted_exactly(user.id, "node:read") is True

    async def test_empty_arguments_rejected(self, store: SQLAlchemyPermissionStore):
        with pytest.raises(ValidationError):
            await store.granted_exactly("", "user:read")


class TestPermissionCheckerWithDatabase:
    """End-to-end resolution through roles in the database."""

    async def test_admin_wildcard(
        self, db: AsyncSession, user: User, checker: PermissionChecker
    ):
        role = await create_role(db, "admin", ["user:*"])
        await assign(db, user, role)

        assert await checker.has_permission(user.id, "user:read") is True
        assert await checker.has_permission(user.id, "user:write") is True
        assert await checker.has_permission(user.id, "role:read") is False

    async def test_editor_nested_wildcard(
        self, db: AsyncSession, user: User, checker: PermissionChecker
    ):
        role = await create_role(db, "editor", ["container:own:*"])
        await assign(db, user, role)

        assert await checker.has_permission(user.id, "container:own:start") is True
        assert await checker.has_permission(user.id, "container:manage") is False
        assert await checker.has_permission(user.id, "container:*") is False

    async def test_grants_are_per_user(
        self, db: AsyncSession, user: User, checker: PermissionChecker
    ):
        other = UserFactory.build()
        db.add(other)
        await db.flush()
        role = await create_role(db, "admin", ["user:*"])
        await assign(db, other, role)

        assert await checker.has_permission(other.id, "user:read") is True
        assert await checker.has_permission(user.id, "user:read") is False

    async def test_unknown_user(self, checker: PermissionChecker):
        assert await checker.has_permission("missing-user", "user:read") is False

    async def test_aggregates(
        self, db: AsyncSession, user: User, checker: PermissionChecker
    ):
        role = await create_role(db, "user", ["container:own:*", "user:read"])
        await assign(db, user, role)

        assert await checker.has_all_permissions(
            user.id, ["user:read", "container:own:logs"]
        )
        assert not await checker.has_all_permissions(
            user.id, ["user:read", "node:read"]
        )
        assert await checker.has_any_permission(user.id, ["node:read", "user:read"])
        assert not await checker.has_any_permission(
            user.id, ["node:read", "cluster:read"]
        )
