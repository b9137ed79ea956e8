"""Authorization middleware.

Builds request handlers that resolve the caller's session, check the
required permissions, and return a structured ``AuthResult``:

- no session -> 401 "Authentication required"
- permission missing -> 403 "Missing required permission '<name>'"
- granted -> ``AuthSuccess(user, session)``
- unexpected error -> 500 "Internal server error during permission check"

On failure the handler also sets ``response.status_code``.
"""

from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response

from gatekeeper.core.auth.sessions import SessionResolver
from gatekeeper.core.constants import (
    MSG_AUTHENTICATION_REQUIRED,
    MSG_INTERNAL_ERROR,
    MSG_MISSING_ANY_PERMISSION,
    MSG_MISSING_PERMISSION,
)
from gatekeeper.core.permissions.checker import PermissionChecker
from gatekeeper.core.permissions.schemas import AuthFailure, AuthResult, AuthSuccess


logger = structlog.get_logger()

PermissionHandler = Callable[[Request, Response], Awaitable[AuthResult]]

# Returns a denial message, or None when the user passes the check
_Decision = Callable[[str], Awaitable[str | None]]


def _fail(response: Response, status: int, message: str) -> AuthFailure:
    response.status_code = status
    return AuthFailure(status=status, message=message)


class AuthorizationMiddleware:
    """Enforces permission checks at a request boundary.

    Usage:
        authz = AuthorizationMiddleware(sessions, checker)
        handler = authz.require_permission("container:own:start")
        result = await handler(request, response)

    Args:
        sessions: Identity provider used to resolve request credentials
        checker: Permission checker used to evaluate grants
    """

    def __init__(self, sessions: SessionResolver, checker: PermissionChecker) -> None:
        self.sessions = sessions
        self.checker = checker

    def require_session(self) -> PermissionHandler:
        """Build a handler that only requires an authenticated session."""

        async def decide(user_id: str) -> str | None:
            return None

        return self._build_handler([], decide)

    def require_permission(self, permission: str) -> PermissionHandler:
        """Build a handler requiring a single permission."""

        async def decide(user_id: str) -> str | None:
            if await self.checker.has_permission(user_id, permission):
                return None
            return MSG_MISSING_PERMISSION.format(permission=permission)

        return self._build_handler([permission], decide)

    def require_all_permissions(self, permissions: list[str]) -> PermissionHandler:
        """Build a handler requiring every listed permission.

        The denial message names the first missing permission.
        """

        async def decide(user_id: str) -> str | None:
            missing = await self.checker.first_missing_permission(user_id, permissions)
            if missing is None:
                return None
            return MSG_MISSING_PERMISSION.format(permission=missing)

        return self._build_handler(permissions, decide)

    def require_any_permission(self, permissions: list[str]) -> PermissionHandler:
        """Build a handler requiring at least one listed permission."""

        async def decide(user_id: str) -> str | None:
            if await self.checker.has_any_permission(user_id, permissions):
                return None
            return MSG_MISSING_ANY_PERMISSION.format(permissions=", ".join(permissions))

        return self._build_handler(permissions, decide)

    def _build_handler(
        self,
        permissions: list[str],
        decide: _Decision,
    ) -> PermissionHandler:
        async def handler(request: Request, response: Response) -> AuthResult:
            try:
                session = await self.sessions.resolve_session(request.headers)

                if session is None:
                    logger.info(
                        "authentication_required",
                        permissions=permissions,
                        path=request.scope.get("path"),
                    )
                    return _fail(response, 401, MSG_AUTHENTICATION_REQUIRED)

                user_id = session.user.id
                denial = await decide(user_id)

                if denial is not None:
                    logger.info(
                        "permission_denied",
                        user_id=user_id,
                        permissions=permissions,
                        path=request.scope.get("path"),
                    )
                    return _fail(response, 403, denial)

                return AuthSuccess(user=session.user, session=session.session)
            except Exception:
                logger.exception(
                    "permission_middleware_error",
                    permissions=permissions,
                    path=request.scope.get("path"),
                )
                return _fail(response, 500, MSG_INTERNAL_ERROR)

        return handler
