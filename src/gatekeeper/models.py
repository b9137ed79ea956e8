"""Import every model so that Base.metadata and the mapper registry are complete."""

from gatekeeper.core.database.base import Base
from gatekeeper.core.permissions.models import (
    Permission,
    Role,
    UserRole,
    role_permissions,
)
from gatekeeper.modules.users.models import User, UserSession


__all__ = [
    "Base",
    "Permission",
    "Role",
    "User",
    "UserRole",
    "UserSession",
    "role_permissions",
]
