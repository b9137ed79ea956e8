"""Async database session management."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gatekeeper.config import settings


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create an async engine for the given URL.

    Args:
        database_url: Async SQLAlchemy URL, defaults to the configured database

    Returns:
        A new AsyncEngine
    """
    url = database_url or settings.async_database_url
    options: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,  # Verify connections before use
    }
    # SQLite pools do not accept sizing arguments
    if not url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory for the configured database."""
    return create_session_factory(create_engine())


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
