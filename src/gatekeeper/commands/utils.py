"""Utility functions for the gatekeeper CLI."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import typer
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from gatekeeper.config import settings
from gatekeeper.core.database import create_engine, create_session_factory


DatabaseUrlOption = typer.Option(
    None,
    "--database-url",
    "-d",
    help="Database URL (defaults to DATABASE_URL from settings).",
)


def resolve_database_url(database_url: str | None) -> str:
    """Return an async SQLAlchemy URL for the CLI to connect with."""
    if not database_url:
        return settings.async_database_url
    return database_url.replace("postgresql://", "postgresql+asyncpg://")


@asynccontextmanager
async def engine_scope(database_url: str | None) -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine for one command and dispose of it afterwards."""
    engine = create_engine(resolve_database_url(database_url))
    try:
        yield engine
    finally:
        await engine.dispose()


@asynccontextmanager
async def session_scope(database_url: str | None) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session that commits on success and rolls back on error."""
    async with engine_scope(database_url) as engine:
        async with create_session_factory(engine)() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
