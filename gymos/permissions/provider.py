"""
GymOS Permissions - Provider Protocol and In-Memory Provider
============================================================
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Iterable, Protocol

from gymos.permissions.constants import GRANT_STATUS_INACTIVE
from gymos.permissions.models import Role, RoleAssignment


class PermissionProvider(Protocol):
    def get_assignments_for_user(
        self,
        user_id: str,
        tenant_id: uuid.UUID,
    ) -> tuple[RoleAssignment, ...]:
        ...

    def get_role(self, role_name: str) -> Role | None:
        ...


class InMemoryPermissionProvider:
    """
    Deterministic in-memory provider used for dev wiring/tests.

    Roles are fixed at construction. Assignments may be upserted at runtime
    by the in-memory tenant directory.
    """

    def __init__(
        self,
        roles: Iterable[Role] | None = None,
        assignments: Iterable[RoleAssignment] | None = None,
    ):
        self._lock = threading.Lock()
        self._roles: dict[str, Role] = {}
        self._assignments_by_user_tenant: dict[
            tuple[str, uuid.UUID], tuple[RoleAssignment, ...]
        ] = {}

        for role in roles or ():
            if role.name in self._roles:
                raise ValueError(f"Duplicate role name '{role.name}'.")
            self._roles[role.name] = role

        temp_index: dict[tuple[str, uuid.UUID], list[RoleAssignment]] = {}
        for assignment in assignments or ():
            key = (assignment.user_id, assignment.tenant_id)
            temp_index.setdefault(key, []).append(assignment)

        for key, key_assignments in temp_index.items():
            ordered = tuple(sorted(key_assignments, key=lambda a: a.sort_key()))
            self._assignments_by_user_tenant[key] = ordered

    def get_assignments_for_user(
        self,
        user_id: str,
        tenant_id: uuid.UUID,
    ) -> tuple[RoleAssignment, ...]:
        with self._lock:
            return self._assignments_by_user_tenant.get(
                (user_id, tenant_id), tuple()
            )

    def get_role(self, role_name: str) -> Role | None:
        return self._roles.get(role_name)

    def list_roles(self) -> tuple[Role, ...]:
        return tuple(self._roles[name] for name in sorted(self._roles))

    def list_assignments_for_tenant(
        self,
        tenant_id: uuid.UUID,
    ) -> tuple[RoleAssignment, ...]:
        with self._lock:
            collected = [
                assignment
                for (_, assignment_tenant_id), assignments in (
                    self._assignments_by_user_tenant.items()
                )
                if assignment_tenant_id == tenant_id
                for assignment in assignments
            ]
        return tuple(sorted(collected, key=lambda a: a.sort_key()))

    def upsert_assignment(self, assignment: RoleAssignment) -> RoleAssignment:
        """
        Insert or replace the assignment with the same user, tenant, branch
        and role.
        """
        if not isinstance(assignment, RoleAssignment):
            raise ValueError("assignment must be RoleAssignment.")
        if assignment.role_name not in self._roles:
            raise ValueError(f"role_name '{assignment.role_name}' was not found.")

        key = (assignment.user_id, assignment.tenant_id)
        with self._lock:
            kept = [
                existing
                for existing in self._assignments_by_user_tenant.get(key, ())
                if (existing.branch_id, existing.role_name)
                != (assignment.branch_id, assignment.role_name)
            ]
            kept.append(assignment)
            self._assignments_by_user_tenant[key] = tuple(
                sorted(kept, key=lambda a: a.sort_key())
            )
        return assignment

    def deactivate_assignment(
        self,
        *,
        user_id: str,
        tenant_id: uuid.UUID,
        role_name: str,
        branch_id: uuid.UUID | None = None,
    ) -> RoleAssignment:
        for assignment in self.get_assignments_for_user(user_id, tenant_id):
            if assignment.role_name == role_name and assignment.branch_id == branch_id:
                return self.upsert_assignment(
                    replace(assignment, status=GRANT_STATUS_INACTIVE)
                )
        raise ValueError(
            f"user '{user_id}' has no '{role_name}' assignment "
            "for the requested scope."
        )
