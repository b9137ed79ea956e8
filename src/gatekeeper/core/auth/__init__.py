"""Authentication module: session resolution and request tracing."""

from gatekeeper.core.auth.middleware import RequestIdMiddleware
from gatekeeper.core.auth.schemas import SessionData, SessionInfo, SessionUser
from gatekeeper.core.auth.sessions import (
    DatabaseSessionResolver,
    SessionResolver,
    extract_session_token,
)


__all__ = [
    "DatabaseSessionResolver",
    # Middleware
    "RequestIdMiddleware",
    # Schemas
    "SessionData",
    "SessionInfo",
    "SessionResolver",
    "SessionUser",
    "extract_session_token",
]
