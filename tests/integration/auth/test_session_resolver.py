"""Integration tests for database-backed session resolution."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.core.auth.sessions import DatabaseSessionResolver
from gatekeeper.core.constants import DEFAULT_SESSION_COOKIE_NAME
from gatekeeper.modules.users.models import User, UserSession
from tests.factories.user import UserFactory, UserSessionFactory


pytestmark = pytest.mark.integration


@pytest.fixture
def resolver(db: AsyncSession) -> DatabaseSessionResolver:
    return DatabaseSessionResolver(db, DEFAULT_SESSION_COOKIE_NAME)


class TestDatabaseSessionResolver:
    """Tests for DatabaseSessionResolver."""

    async def test_resolves_bearer_token(
        self,
        resolver: DatabaseSessionResolver,
        user: User,
        user_session: UserSession,
    ):
        session = await resolver.resolve_session(
            {"authorization": f"Bearer {user_session.token}"}
        )

        assert session is not None
        assert session.user.id == user.id
        assert session.user.email == user.email
        assert session.session.id == user_session.id

    async def test_resolves_cookie(
        self, resolver: DatabaseSessionResolver, user: User, user_session: UserSession
    ):
        session = await resolver.resolve_session(
            {"cookie": f"{DEFAULT_SESSION_COOKIE_NAME}={user_session.token}"}
        )

        assert session is not None
        assert session.user.id == user.id

    async def test_unknown_token(self, resolver: DatabaseSessionResolver):
        assert await resolver.resolve_session({"authorization": "Bearer nope"}) is None

    async def test_no_credentials(self, resolver: DatabaseSessionResolver):
        assert await resolver.resolve_session({}) is None

    async def test_expired_session(
        self, db: AsyncSession, resolver: DatabaseSessionResolver, user: User
    ):
        expired = UserSessionFactory.build(
            user_id=user.id,
            expires_at=datetime.now(UTC) - timedelta(minutes=1),
        )
        db.add(expired)
        await db.flush()

        result = await resolver.resolve_session(
            {"authorization": f"Bearer {expired.token}"}
        )

        assert result is None


class TestSessionFixtures:
    """The shared user and session fixtures carry no extra rows."""

    async def test_user_has_no_roles(self, db: AsyncSession, user: User):
        await db.refresh(user, attribute_names=["roles"])

        assert user.roles == []

    async def test_session_belongs_to_user(
        self, db: AsyncSession, user: User, user_session: UserSession
    ):
        await db.refresh(user_session, attribute_names=["user"])

        assert user_session.user_id == user.id
        assert user_session.user.id == user.id

    def test_factories_skip_relationships(self):
        user = UserFactory.build()
        user_session = UserSessionFactory.build(user_id=user.id)

        assert user.roles == []
        assert user.sessions == []
        assert user_session.user is None
        assert user_session.user_id == user.id
