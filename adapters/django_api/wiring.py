"""
GymOS Django Adapter Wiring
===========================
Constructs HttpApiDependencies for local/staging live runs.

Backends (settings.GYMOS_AUTHZ_BACKEND):
- "memory": dev fixtures with fixed tokens, one tenant and two branches
- "db": DbPermissionProvider and the relational tenant directory

Session tokens are dev fixtures in both backends; credential
verification belongs to the upstream auth provider.
"""

from __future__ import annotations

import logging
import threading
import uuid

from django.conf import settings

from gymos.access import (
    AccessGate,
    ActorContextResolver,
    InMemorySessionProvider,
    SessionPrincipal,
)
from gymos.http_api.dependencies import (
    BranchRecord,
    DbTenantDirectory,
    HttpApiDependencies,
    InMemoryTenantDirectory,
)
from gymos.permissions import (
    DEFAULT_ROLE_DEFINITIONS,
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_MEMBER,
    ROLE_STAFF,
    DbPermissionProvider,
    InMemoryPermissionProvider,
    Role,
    RoleAssignment,
)

logger = logging.getLogger("gymos.http")

AUTHZ_BACKEND_MEMORY = "memory"
AUTHZ_BACKEND_DB = "db"

DEV_ADMIN_TOKEN = "dev-admin-token"
DEV_MANAGER_TOKEN = "dev-manager-token"
DEV_STAFF_TOKEN = "dev-staff-token"
DEV_MEMBER_TOKEN = "dev-member-token"

DEV_TENANT_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
DEV_MAIN_BRANCH_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")
DEV_ANNEX_BRANCH_ID = uuid.UUID("33333333-3333-3333-3333-333333333333")

DEV_ADMIN_USER_ID = "live-admin-user"
DEV_MANAGER_USER_ID = "live-manager-user"
DEV_STAFF_USER_ID = "live-staff-user"
DEV_MEMBER_USER_ID = "live-member-user"

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _build_session_provider() -> InMemorySessionProvider:
    return InMemorySessionProvider(
        {
            DEV_ADMIN_TOKEN: SessionPrincipal(DEV_ADMIN_USER_ID, DEV_TENANT_ID),
            DEV_MANAGER_TOKEN: SessionPrincipal(DEV_MANAGER_USER_ID, DEV_TENANT_ID),
            DEV_STAFF_TOKEN: SessionPrincipal(DEV_STAFF_USER_ID, DEV_TENANT_ID),
            DEV_MEMBER_TOKEN: SessionPrincipal(DEV_MEMBER_USER_ID, DEV_TENANT_ID),
        }
    )


def _build_dev_branches() -> tuple[BranchRecord, ...]:
    return (
        BranchRecord(branch_id=DEV_MAIN_BRANCH_ID, tenant_id=DEV_TENANT_ID, name="Main"),
        BranchRecord(branch_id=DEV_ANNEX_BRANCH_ID, tenant_id=DEV_TENANT_ID, name="Annex"),
    )


def _build_permission_provider() -> InMemoryPermissionProvider:
    roles = tuple(
        Role(name=definition.name, permissions=frozenset(definition.permissions))
        for definition in DEFAULT_ROLE_DEFINITIONS
    )
    assignments = (
        RoleAssignment(
            user_id=DEV_ADMIN_USER_ID,
            role_name=ROLE_ADMIN,
            tenant_id=DEV_TENANT_ID,
        ),
        RoleAssignment(
            user_id=DEV_MANAGER_USER_ID,
            role_name=ROLE_MANAGER,
            tenant_id=DEV_TENANT_ID,
            branch_id=DEV_MAIN_BRANCH_ID,
        ),
        RoleAssignment(
            user_id=DEV_STAFF_USER_ID,
            role_name=ROLE_STAFF,
            tenant_id=DEV_TENANT_ID,
            branch_id=DEV_ANNEX_BRANCH_ID,
        ),
        RoleAssignment(
            user_id=DEV_MEMBER_USER_ID,
            role_name=ROLE_MEMBER,
            tenant_id=DEV_TENANT_ID,
            branch_id=DEV_MAIN_BRANCH_ID,
        ),
    )
    return InMemoryPermissionProvider(roles=roles, assignments=assignments)


def _create_memory_dependencies() -> HttpApiDependencies:
    permission_provider = _build_permission_provider()
    return HttpApiDependencies(
        session_provider=_build_session_provider(),
        access_gate=AccessGate(ActorContextResolver(permission_provider)),
        directory=InMemoryTenantDirectory(
            permission_provider=permission_provider,
            branches=_build_dev_branches(),
        ),
    )


def _create_db_dependencies() -> HttpApiDependencies:
    return HttpApiDependencies(
        session_provider=_build_session_provider(),
        access_gate=AccessGate(ActorContextResolver(DbPermissionProvider())),
        directory=DbTenantDirectory(),
    )


def _create_dependencies() -> HttpApiDependencies:
    backend = str(
        getattr(settings, "GYMOS_AUTHZ_BACKEND", AUTHZ_BACKEND_MEMORY)
    ).strip().lower()
    if backend == AUTHZ_BACKEND_DB:
        dependencies = _create_db_dependencies()
    elif backend == AUTHZ_BACKEND_MEMORY:
        dependencies = _create_memory_dependencies()
    else:
        raise ValueError(
            f"GYMOS_AUTHZ_BACKEND '{backend}' not valid. "
            f"Must be one of: {[AUTHZ_BACKEND_DB, AUTHZ_BACKEND_MEMORY]}"
        )
    logger.info(f"Wired HTTP dependencies with '{backend}' authorization backend")
    return dependencies


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the cached wiring so the next call rebuilds it from settings."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
