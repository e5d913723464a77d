"""
GymOS HTTP API - Public API
===========================
"""

from gymos.http_api.contracts import (
    HttpApiErrorBody,
    HttpApiResponse,
    RoleAssignHttpRequest,
    RoleRevokeHttpRequest,
    UserAccessReadRequest,
)
from gymos.http_api.dependencies import (
    BranchRecord,
    DbTenantDirectory,
    HttpApiDependencies,
    InMemoryTenantDirectory,
    TenantDirectory,
)
from gymos.http_api.errors import (
    access_error_response,
    error_response,
    success_response,
)
from gymos.http_api.handlers import (
    get_my_access,
    get_navigation,
    get_user_access,
    list_branches,
    list_permission_catalog,
    post_role_assign,
    post_role_revoke,
)

__all__ = [
    "HttpApiErrorBody",
    "HttpApiResponse",
    "RoleAssignHttpRequest",
    "RoleRevokeHttpRequest",
    "UserAccessReadRequest",
    "BranchRecord",
    "TenantDirectory",
    "InMemoryTenantDirectory",
    "DbTenantDirectory",
    "HttpApiDependencies",
    "access_error_response",
    "error_response",
    "success_response",
    "get_my_access",
    "get_navigation",
    "get_user_access",
    "list_branches",
    "list_permission_catalog",
    "post_role_assign",
    "post_role_revoke",
]
