"""FastAPI dependencies for route protection.

Each request gets its own store, checker and middleware bound to the
request's database session. Override ``get_permission_store`` or
``get_session_resolver`` in ``app.dependency_overrides`` to swap the
collaborators.

Usage:
    @router.delete("/containers/{container_id}")
    async def delete_container(
        auth: Annotated[AuthSuccess, Depends(permission_required("container:own:delete"))],
    ):
        ...
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request, Response

from gatekeeper.api.dependencies import DBSession
from gatekeeper.config import settings
from gatekeeper.core.auth.sessions import DatabaseSessionResolver, SessionResolver
from gatekeeper.core.errors import PermissionCheckError
from gatekeeper.core.permissions.checker import PermissionChecker
from gatekeeper.core.permissions.middleware import (
    AuthorizationMiddleware,
    PermissionHandler,
)
from gatekeeper.core.permissions.schemas import AuthFailure, AuthSuccess
from gatekeeper.core.permissions.store import (
    PermissionStore,
    SQLAlchemyPermissionStore,
)


def get_permission_store(db: DBSession) -> PermissionStore:
    """Provide the permission store for the current request."""
    return SQLAlchemyPermissionStore(db)


def get_permission_checker(
    store: Annotated[PermissionStore, Depends(get_permission_store)],
) -> PermissionChecker:
    """Provide a permission checker over the request's store."""
    return PermissionChecker(store)


def get_session_resolver(db: DBSession) -> SessionResolver:
    """Provide the session resolver for the current request."""
    return DatabaseSessionResolver(db, settings.session_cookie_name)


def get_authorization(
    sessions: Annotated[SessionResolver, Depends(get_session_resolver)],
    checker: Annotated[PermissionChecker, Depends(get_permission_checker)],
) -> AuthorizationMiddleware:
    """Provide the authorization middleware for the current request."""
    return AuthorizationMiddleware(sessions, checker)


Authorization = Annotated[AuthorizationMiddleware, Depends(get_authorization)]
Checker = Annotated[PermissionChecker, Depends(get_permission_checker)]


def _enforce(
    build: Callable[[AuthorizationMiddleware], PermissionHandler],
) -> Callable[..., Awaitable[AuthSuccess]]:
    async def dependency(
        request: Request,
        response: Response,
        authz: Authorization,
    ) -> AuthSuccess:
        result = await build(authz)(request, response)
        if isinstance(result, AuthFailure):
            raise PermissionCheckError(result)
        return result

    return dependency


def session_required() -> Callable[..., Awaitable[AuthSuccess]]:
    """Dependency factory requiring only an authenticated session.

    Failures use the same 401/500 bodies as the permission dependencies.
    """
    return _enforce(lambda authz: authz.require_session())


def permission_required(permission: str) -> Callable[..., Awaitable[AuthSuccess]]:
    """Dependency factory requiring a single permission.

    Args:
        permission: The permission name (e.g. "user:read")

    Returns:
        A dependency resolving to the authorized ``AuthSuccess``

    Raises:
        PermissionCheckError: If the request is unauthenticated (401),
            lacks the permission (403) or the check fails (500)
    """
    return _enforce(lambda authz: authz.require_permission(permission))


def all_permissions_required(
    permissions: list[str],
) -> Callable[..., Awaitable[AuthSuccess]]:
    """Dependency factory requiring every listed permission."""
    return _enforce(lambda authz: authz.require_all_permissions(permissions))


def any_permission_required(
    permissions: list[str],
) -> Callable[..., Awaitable[AuthSuccess]]:
    """Dependency factory requiring at least one listed permission."""
    return _enforce(lambda authz: authz.require_any_permission(permissions))
