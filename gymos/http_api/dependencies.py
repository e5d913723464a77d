"""
GymOS HTTP API - Dependencies
=============================
Injected collaborators for handler wiring: session lookup, the access gate
and the tenant directory that backs the admin endpoints.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol

from gymos.access.gate import AccessGate
from gymos.access.session import SessionProvider
from gymos.permissions.catalog import (
    DEFAULT_ROLE_DEFINITIONS,
    PERMISSION_CATALOG,
    PermissionDefinition,
    RoleDefinition,
)
from gymos.permissions.models import RoleAssignment
from gymos.permissions.provider import InMemoryPermissionProvider


class TenantDirectory(Protocol):
    def list_branches(self, tenant_id: uuid.UUID) -> tuple[dict[str, Any], ...]:
        ...

    def assign_role(
        self,
        *,
        tenant_id: uuid.UUID,
        user_id: str,
        role_name: str,
        branch_id: Optional[uuid.UUID] = None,
        display_name: Optional[str] = None,
    ) -> dict[str, Any]:
        ...

    def revoke_role(
        self,
        *,
        tenant_id: uuid.UUID,
        user_id: str,
        role_name: str,
        branch_id: Optional[uuid.UUID] = None,
    ) -> dict[str, Any]:
        ...

    def list_permission_catalog(self) -> tuple[dict[str, Any], ...]:
        ...


@dataclass(frozen=True)
class BranchRecord:
    branch_id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    timezone: str = "UTC"

    def __post_init__(self):
        if not isinstance(self.branch_id, uuid.UUID):
            raise ValueError("branch_id must be UUID.")
        if not isinstance(self.tenant_id, uuid.UUID):
            raise ValueError("tenant_id must be UUID.")
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be a non-empty string.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "branch_id": str(self.branch_id),
            "tenant_id": str(self.tenant_id),
            "name": self.name,
            "timezone": self.timezone,
        }


def _serialize_assignment(assignment: RoleAssignment) -> dict[str, Any]:
    return {
        "tenant_id": str(assignment.tenant_id),
        "branch_id": None if assignment.branch_id is None else str(assignment.branch_id),
        "user_id": assignment.user_id,
        "role_name": assignment.role_name,
        "status": assignment.status,
    }


def _serialize_catalog(
    permission_catalog: Iterable[PermissionDefinition],
    role_definitions: Iterable[RoleDefinition],
) -> tuple[dict[str, Any], ...]:
    assigned_to: dict[str, list[str]] = {}
    for role in sorted(role_definitions, key=lambda r: r.name):
        for permission in role.permissions:
            assigned_to.setdefault(permission, []).append(role.name)

    return tuple(
        {
            "name": definition.name,
            "description": definition.description,
            "module": definition.module,
            "action": definition.action,
            "assigned_to": tuple(assigned_to.get(definition.name, ())),
        }
        for definition in sorted(permission_catalog, key=lambda d: d.name)
    )


class InMemoryTenantDirectory:
    """
    Deterministic in-memory directory for dev wiring/tests. Role changes go
    straight into the shared in-memory permission provider, so the next
    resolution sees them.
    """

    def __init__(
        self,
        *,
        permission_provider: InMemoryPermissionProvider,
        branches: Iterable[BranchRecord] = (),
        permission_catalog: Iterable[PermissionDefinition] = PERMISSION_CATALOG,
        role_definitions: Iterable[RoleDefinition] = DEFAULT_ROLE_DEFINITIONS,
    ):
        self._provider = permission_provider
        self._branches: dict[uuid.UUID, BranchRecord] = {}
        for branch in branches:
            if branch.branch_id in self._branches:
                raise ValueError(f"Duplicate branch_id '{branch.branch_id}'.")
            self._branches[branch.branch_id] = branch
        self._catalog = _serialize_catalog(permission_catalog, role_definitions)

    def _check_branch(
        self,
        tenant_id: uuid.UUID,
        branch_id: Optional[uuid.UUID],
    ) -> None:
        if branch_id is None:
            return
        branch = self._branches.get(branch_id)
        if branch is None or branch.tenant_id != tenant_id:
            raise ValueError(
                f"branch_id '{branch_id}' is not in tenant '{tenant_id}'."
            )

    def list_branches(self, tenant_id: uuid.UUID) -> tuple[dict[str, Any], ...]:
        return tuple(
            branch.to_dict()
            for branch in sorted(self._branches.values(), key=lambda b: str(b.branch_id))
            if branch.tenant_id == tenant_id
        )

    def assign_role(
        self,
        *,
        tenant_id: uuid.UUID,
        user_id: str,
        role_name: str,
        branch_id: Optional[uuid.UUID] = None,
        display_name: Optional[str] = None,
    ) -> dict[str, Any]:
        self._check_branch(tenant_id, branch_id)
        assignment = self._provider.upsert_assignment(
            RoleAssignment(
                user_id=user_id,
                role_name=role_name,
                tenant_id=tenant_id,
                branch_id=branch_id,
            )
        )
        return _serialize_assignment(assignment)

    def revoke_role(
        self,
        *,
        tenant_id: uuid.UUID,
        user_id: str,
        role_name: str,
        branch_id: Optional[uuid.UUID] = None,
    ) -> dict[str, Any]:
        self._check_branch(tenant_id, branch_id)
        assignment = self._provider.deactivate_assignment(
            user_id=user_id,
            tenant_id=tenant_id,
            role_name=role_name,
            branch_id=branch_id,
        )
        return _serialize_assignment(assignment)

    def list_permission_catalog(self) -> tuple[dict[str, Any], ...]:
        return self._catalog


class DbTenantDirectory:
    """Directory over the relational identity store service."""

    def list_branches(self, tenant_id: uuid.UUID) -> tuple[dict[str, Any], ...]:
        from gymos.identity_store.service import list_branches_for_tenant

        return list_branches_for_tenant(tenant_id)

    def assign_role(
        self,
        *,
        tenant_id: uuid.UUID,
        user_id: str,
        role_name: str,
        branch_id: Optional[uuid.UUID] = None,
        display_name: Optional[str] = None,
    ) -> dict[str, Any]:
        from gymos.identity_store.service import assign_role

        return assign_role(
            tenant_id=tenant_id,
            user_id=user_id,
            role_name=role_name,
            branch_id=branch_id,
            display_name=display_name,
        )

    def revoke_role(
        self,
        *,
        tenant_id: uuid.UUID,
        user_id: str,
        role_name: str,
        branch_id: Optional[uuid.UUID] = None,
    ) -> dict[str, Any]:
        from gymos.identity_store.service import revoke_role

        return revoke_role(
            tenant_id=tenant_id,
            user_id=user_id,
            role_name=role_name,
            branch_id=branch_id,
        )

    def list_permission_catalog(self) -> tuple[dict[str, Any], ...]:
        from gymos.identity_store.service import list_permission_catalog

        return list_permission_catalog()


@dataclass(frozen=True)
class HttpApiDependencies:
    session_provider: SessionProvider
    access_gate: AccessGate
    directory: TenantDirectory
