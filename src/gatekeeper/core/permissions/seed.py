"""Default permission catalog and role seeding.

Seeding is an administrative operation run from the CLI; permission
checks never write. Every operation here is idempotent.
"""

from dataclasses import dataclass, field

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.core.errors import NotFoundError, ValidationError
from gatekeeper.core.permissions.models import Permission, Role, UserRole
from gatekeeper.core.permissions.names import is_valid_permission_name
from gatekeeper.modules.users.models import User


logger = structlog.get_logger()


@dataclass(frozen=True)
class PermissionDefinition:
    """A permission to create if it does not exist."""

    name: str
    description: str


@dataclass(frozen=True)
class RoleDefinition:
    """A role and the permission names it should carry."""

    name: str
    description: str
    permissions: tuple[str, ...]


@dataclass
class SeedReport:
    """Names of the rows created by a seeding run."""

    permissions_created: list[str] = field(default_factory=list)
    roles_created: list[str] = field(default_factory=list)
    grants_created: list[tuple[str, str]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Whether the run created anything."""
        return bool(
            self.permissions_created or self.roles_created or self.grants_created
        )


DEFAULT_PERMISSIONS: tuple[PermissionDefinition, ...] = (
    # User permissions
    PermissionDefinition("user:*", "All user permissions"),
    PermissionDefinition("user:read", "Read user information"),
    PermissionDefinition("user:create", "Create users"),
    PermissionDefinition("user:update", "Update user information"),
    PermissionDefinition("user:delete", "Delete users"),
    # Container permissions
    PermissionDefinition("container:*", "All container permissions"),
    PermissionDefinition("container:own:*", "All permissions for own containers"),
    PermissionDefinition("container:own:create", "Create own containers"),
    PermissionDefinition("container:own:start", "Start own containers"),
    PermissionDefinition("container:own:stop", "Stop own containers"),
    PermissionDefinition("container:own:restart", "Restart own containers"),
    PermissionDefinition("container:own:delete", "Delete own containers"),
    PermissionDefinition("container:own:logs", "View logs of own containers"),
    PermissionDefinition("container:own:exec", "Execute commands in own containers"),
    PermissionDefinition("container:read", "Read container information"),
    PermissionDefinition("container:update", "Update container settings"),
    PermissionDefinition("container:ha:create", "Create HA containers"),
    # Node permissions
    PermissionDefinition("node:*", "All node permissions"),
    PermissionDefinition("node:read", "Read node information"),
    PermissionDefinition("node:create", "Create nodes"),
    PermissionDefinition("node:update", "Update node settings"),
    PermissionDefinition("node:delete", "Delete nodes"),
    PermissionDefinition("node:manage", "Manage node resources"),
    # Cluster permissions
    PermissionDefinition("cluster:*", "All cluster permissions"),
    PermissionDefinition("cluster:read", "Read cluster information"),
    PermissionDefinition("cluster:create", "Create clusters"),
    PermissionDefinition("cluster:update", "Update cluster settings"),
    PermissionDefinition("cluster:delete", "Delete clusters"),
    # Egg permissions
    PermissionDefinition("egg:*", "All egg permissions"),
    PermissionDefinition("egg:read", "Read egg information"),
    PermissionDefinition("egg:create", "Create eggs"),
    PermissionDefinition("egg:update", "Update egg settings"),
    PermissionDefinition("egg:delete", "Delete eggs"),
    # Role permissions
    PermissionDefinition("role:*", "All role permissions"),
    PermissionDefinition("role:read", "Read role information"),
    PermissionDefinition("role:create", "Create roles"),
    PermissionDefinition("role:update", "Update role settings"),
    PermissionDefinition("role:delete", "Delete roles"),
    PermissionDefinition("role:assign", "Assign roles to users"),
    # Permission permissions
    PermissionDefinition("permission:*", "All permission permissions"),
    PermissionDefinition("permission:read", "Read permission information"),
    PermissionDefinition("permission:create", "Create permissions"),
    PermissionDefinition("permission:update", "Update permissions"),
    PermissionDefinition("permission:delete", "Delete permissions"),
    # Migration permissions
    PermissionDefinition("migration:*", "All migration permissions"),
    PermissionDefinition("migration:manage", "Manage container migrations"),
)

DEFAULT_ROLES: tuple[RoleDefinition, ...] = (
    RoleDefinition(
        name="superadmin",
        description="Super administrator with all permissions",
        permissions=(
            "user:*",
            "container:*",
            "node:*",
            "cluster:*",
            "egg:*",
            "role:*",
            "permission:*",
            "migration:*",
        ),
    ),
    RoleDefinition(
        name="user",
        description="Regular user with basic permissions",
        permissions=("container:own:*", "user:read"),
    ),
)


def validate_catalog(
    permissions: tuple[PermissionDefinition, ...],
    roles: tuple[RoleDefinition, ...],
) -> None:
    """Check that every name is grantable and every role references the catalog.

    Raises:
        ValidationError: Listing each offending name
    """
    known = {p.name for p in permissions}
    errors = [
        {"field": "permission", "message": f"Invalid permission name '{p.name}'"}
        for p in permissions
        if not is_valid_permission_name(p.name)
    ]
    errors.extend(
        {
            "field": "role",
            "message": f"Role '{role.name}' references unknown permission '{name}'",
        }
        for role in roles
        for name in role.permissions
        if name not in known
    )
    if errors:
        raise ValidationError("Invalid permission catalog", errors=errors)


async def seed_permissions(
    session: AsyncSession,
    permissions: tuple[PermissionDefinition, ...] = DEFAULT_PERMISSIONS,
    roles: tuple[RoleDefinition, ...] = DEFAULT_ROLES,
) -> SeedReport:
    """Create missing permissions and roles, and attach role grants.

    Existing rows are left untouched; running twice creates nothing the
    second time. The caller owns the transaction.

    Args:
        session: Database session
        permissions: Permission catalog to ensure
        roles: Roles to ensure, with their permission names

    Returns:
        What was created

    Raises:
        ValidationError: If the catalog contains ungrantable names
    """
    validate_catalog(permissions, roles)
    report = SeedReport()

    result = await session.execute(select(Permission))
    by_name = {p.name: p for p in result.scalars().all()}

    for definition in permissions:
        if definition.name in by_name:
            continue
        permission = Permission(name=definition.name, description=definition.description)
        session.add(permission)
        by_name[definition.name] = permission
        report.permissions_created.append(definition.name)
        logger.info("permission_seeded", permission=definition.name)

    for definition in roles:
        result = await session.execute(select(Role).where(Role.name == definition.name))
        role = result.scalar_one_or_none()

        if role is None:
            role = Role(
                name=definition.name,
                description=definition.description,
                permissions=[],
            )
            session.add(role)
            report.roles_created.append(definition.name)
            logger.info("role_seeded", role=definition.name)

        granted = {p.name for p in role.permissions}
        for name in definition.permissions:
            if name in granted:
                continue
            role.permissions.append(by_name[name])
            report.grants_created.append((definition.name, name))

    await session.flush()
    return report


async def assign_role(session: AsyncSession, user_id: str, role_name: str) -> bool:
    """Assign a role to a user if not already assigned.

    Args:
        session: Database session
        user_id: The user's ID
        role_name: Name of the role to assign

    Returns:
        True if a new assignment was created

    Raises:
        NotFoundError: If the user or the role does not exist
    """
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found", resource="user", resource_id=user_id)

    result = await session.execute(select(Role).where(Role.name == role_name))
    role = result.scalar_one_or_none()
    if role is None:
        raise NotFoundError("Role not found", resource="role", resource_id=role_name)

    existing = await session.get(UserRole, (user_id, role.id))
    if existing is not None:
        return False

    session.add(UserRole(user_id=user_id, role_id=role.id))
    await session.flush()
    logger.info("role_assigned", user_id=user_id, role=role_name)
    return True
