"""Permission system for role-based access control (RBAC)."""

from gatekeeper.core.permissions.checker import PermissionChecker
from gatekeeper.core.permissions.middleware import (
    AuthorizationMiddleware,
    PermissionHandler,
)
from gatekeeper.core.permissions.models import (
    Permission,
    Role,
    UserRole,
    role_permissions,
)
from gatekeeper.core.permissions.names import is_valid_permission_name, wildcard_parent
from gatekeeper.core.permissions.schemas import AuthFailure, AuthResult, AuthSuccess
from gatekeeper.core.permissions.store import (
    InMemoryPermissionStore,
    PermissionStore,
    SQLAlchemyPermissionStore,
)


__all__ = [
    # Results
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    # Middleware
    "AuthorizationMiddleware",
    # Stores
    "InMemoryPermissionStore",
    # Models
    "Permission",
    # Checker
    "PermissionChecker",
    "PermissionHandler",
    "PermissionStore",
    "Role",
    "SQLAlchemyPermissionStore",
    "UserRole",
    # Names
    "is_valid_permission_name",
    "role_permissions",
    "wildcard_parent",
]
