"""Session resolution.

Turns request credentials into a principal. The authorization
middleware receives a ``SessionResolver`` explicitly, so tests and other
deployments can substitute their own identity provider.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Protocol

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import cookie_parser

from gatekeeper.core.auth.schemas import SessionData, SessionInfo, SessionUser
from gatekeeper.modules.users.models import UserSession


logger = structlog.get_logger()


class SessionResolver(Protocol):
    """Identity provider capability used by the authorization middleware."""

    async def resolve_session(self, headers: Mapping[str, str]) -> SessionData | None:
        """Resolve request headers to a session, or None if unauthenticated."""
        ...


def extract_session_token(headers: Mapping[str, str], cookie_name: str) -> str | None:
    """Extract the session token from request headers.

    A bearer token in the Authorization header wins over the session
    cookie.

    Args:
        headers: Request headers (lower-case keys, or a case-insensitive mapping)
        cookie_name: Name of the session cookie

    Returns:
        The token, or None if the request carries no credentials
    """
    auth_header = headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        if token:
            return token

    cookie_header = headers.get("cookie")
    if cookie_header:
        return cookie_parser(cookie_header).get(cookie_name) or None

    return None


class DatabaseSessionResolver:
    """Resolve sessions stored in the ``user_sessions`` table.

    Expired sessions are treated as absent.
    """

    def __init__(self, session: AsyncSession, cookie_name: str) -> None:
        self.session = session
        self.cookie_name = cookie_name

    async def resolve_session(self, headers: Mapping[str, str]) -> SessionData | None:
        """Look up the session for the request's token.

        Args:
            headers: Request headers

        Returns:
            The resolved session and user, or None
        """
        token = extract_session_token(headers, self.cookie_name)
        if not token:
            return None

        stmt = select(UserSession).where(
            UserSession.token == token,
            UserSession.expires_at > datetime.now(UTC),
        )
        result = await self.session.execute(stmt)
        user_session = result.scalar_one_or_none()

        if user_session is None:
            logger.debug("session_not_found")
            return None

        return SessionData(
            user=SessionUser.model_validate(user_session.user),
            session=SessionInfo.model_validate(user_session),
        )
