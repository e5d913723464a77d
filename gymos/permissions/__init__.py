"""
GymOS Permissions - Public API
==============================
"""

from gymos.permissions.actions import (
    ACTION_PERMISSIONS,
    PermissionGateResult,
    can_perform_action,
    check_permissions,
)
from gymos.permissions.catalog import (
    DEFAULT_ROLE_DEFINITIONS,
    PERMISSION_CATALOG,
    PermissionDefinition,
    RoleDefinition,
    catalog_permission_names,
    get_permission_definition,
    get_role_definition,
    permissions_for_module,
    role_capabilities,
    role_display_name,
)
from gymos.permissions.constants import (
    GRANT_STATUS_ACTIVE,
    GRANT_STATUS_INACTIVE,
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_MEMBER,
    ROLE_STAFF,
    ROLE_SUPER_ADMIN,
    ROLE_TRAINER,
    SCOPE_GRANT_BRANCH,
    SCOPE_GRANT_TENANT,
    WILDCARD_ALL,
    is_well_formed_permission,
)
from gymos.permissions.db_provider import DbPermissionProvider
from gymos.permissions.errors import (
    AccessError,
    Forbidden,
    Unauthenticated,
    Unavailable,
)
from gymos.permissions.evaluator import (
    has_all_permissions,
    has_any_permission,
    has_permission,
    wildcard_candidates,
)
from gymos.permissions.models import Role, RoleAssignment
from gymos.permissions.provider import (
    InMemoryPermissionProvider,
    PermissionProvider,
)

__all__ = [
    "WILDCARD_ALL",
    "SCOPE_GRANT_TENANT",
    "SCOPE_GRANT_BRANCH",
    "GRANT_STATUS_ACTIVE",
    "GRANT_STATUS_INACTIVE",
    "ROLE_SUPER_ADMIN",
    "ROLE_ADMIN",
    "ROLE_MANAGER",
    "ROLE_TRAINER",
    "ROLE_STAFF",
    "ROLE_MEMBER",
    "is_well_formed_permission",
    "PermissionDefinition",
    "RoleDefinition",
    "PERMISSION_CATALOG",
    "DEFAULT_ROLE_DEFINITIONS",
    "catalog_permission_names",
    "get_permission_definition",
    "get_role_definition",
    "permissions_for_module",
    "role_display_name",
    "role_capabilities",
    "ACTION_PERMISSIONS",
    "PermissionGateResult",
    "can_perform_action",
    "check_permissions",
    "has_permission",
    "has_any_permission",
    "has_all_permissions",
    "wildcard_candidates",
    "AccessError",
    "Unauthenticated",
    "Forbidden",
    "Unavailable",
    "Role",
    "RoleAssignment",
    "PermissionProvider",
    "InMemoryPermissionProvider",
    "DbPermissionProvider",
]
