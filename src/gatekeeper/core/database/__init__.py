"""Database layer - session management, base models, and mixins."""

from gatekeeper.core.database.base import (
    Base,
    StringIDMixin,
    TimestampMixin,
    generate_id,
)
from gatekeeper.core.database.session import (
    create_engine,
    create_session_factory,
    get_db,
    get_session_factory,
)


__all__ = [
    "Base",
    "StringIDMixin",
    "TimestampMixin",
    "create_engine",
    "create_session_factory",
    "generate_id",
    "get_db",
    "get_session_factory",
]
