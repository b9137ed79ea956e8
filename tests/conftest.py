"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from gatekeeper.core.database import get_db
from gatekeeper.main import create_app

# Import all models to ensure they're registered with Base.metadata
from gatekeeper.models import Base
from gatekeeper.modules.users.models import User, UserSession
from tests.factories.user import UserFactory, UserSessionFactory


# In-memory SQLite shared across one engine's single connection
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes, ensuring test isolation.
    """
    async with engine.connect() as conn:
        await conn.begin()

        async with AsyncSession(
            bind=conn,
            expire_on_commit=False,
            autoflush=False,
        ) as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# User and Session Fixtures
# ============================================================


@pytest.fixture
async def user(db: AsyncSession) -> User:
    """Create a test user without roles."""
    user = UserFactory.build()
    db.add(user)
    await db.flush()
    return user


@pytest.fixture
async def user_session(db: AsyncSession, user: User) -> UserSession:
    """Create an active session for the test user."""
    user_session = UserSessionFactory.build(user_id=user.id)
    db.add(user_session)
    await db.flush()
    return user_session


@pytest.fixture
def auth_headers(user_session: UserSession) -> dict[str, str]:
    """Authorization headers carrying the test user's session token."""
    return {"Authorization": f"Bearer {user_session.token}"}
