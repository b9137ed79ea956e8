"""Root API router with health and authorization endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from gatekeeper.core.auth.schemas import SessionUser
from gatekeeper.core.permissions.dependencies import (
    Checker,
    permission_required,
    session_required,
)
from gatekeeper.core.permissions.schemas import AuthSuccess


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


class PermissionCheckResponse(BaseModel):
    """Result of checking one permission for the caller."""

    permission: str
    granted: bool


# Create root API router
api_router = APIRouter()

# Health check endpoints (no /api/v1 prefix)
health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def liveness() -> HealthResponse:
    """Liveness probe endpoint."""
    return HealthResponse(status="alive")


auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.get(
    "/me",
    response_model=SessionUser,
    summary="Current principal",
    description="Returns the authenticated user. Requires `user:read`.",
)
async def read_me(
    auth: Annotated[AuthSuccess, Depends(permission_required("user:read"))],
) -> SessionUser:
    """Return the principal attached to the request."""
    return auth.user


permissions_router = APIRouter(prefix="/permissions", tags=["permissions"])


@permissions_router.get(
    "/check",
    response_model=PermissionCheckResponse,
    summary="Check a permission",
    description="Reports whether the authenticated caller holds a permission.",
)
async def check_permission(
    auth: Annotated[AuthSuccess, Depends(session_required())],
    checker: Checker,
    permission: Annotated[str, Query(min_length=1)],
) -> PermissionCheckResponse:
    """Check one permission for the authenticated caller."""
    granted = await checker.has_permission(auth.user.id, permission)
    return PermissionCheckResponse(permission=permission, granted=granted)


# Create versioned API router
v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(auth_router)
v1_router.include_router(permissions_router)

api_router.include_router(health_router)
api_router.include_router(v1_router)
