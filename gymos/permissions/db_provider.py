"""
GymOS Permissions - DB-backed Provider
======================================
Resolves role assignments and role permissions from the relational
identity and permission stores.

Store failures surface as Unavailable; an empty answer is only returned
when the store actually holds no assignments.
"""

from __future__ import annotations

import logging
import uuid

from django.db import DatabaseError

from gymos.permissions.errors import Unavailable
from gymos.permissions.models import Role, RoleAssignment

logger = logging.getLogger("gymos.access")


class DbPermissionProvider:
    def get_assignments_for_user(
        self,
        user_id: str,
        tenant_id: uuid.UUID,
    ) -> tuple[RoleAssignment, ...]:
        if not isinstance(user_id, str) or not user_id.strip():
            return tuple()
        if not isinstance(tenant_id, uuid.UUID):
            return tuple()

        from gymos.identity_store.models import RoleAssignment as StoredAssignment

        try:
            rows = list(
                StoredAssignment.objects.filter(
                    user_id=user_id.strip(),
                    tenant_id=tenant_id,
                )
                .select_related("role")
                .order_by("tenant_id", "user_id", "branch_id", "role__name", "id")
            )
        except DatabaseError as exc:
            logger.error(
                f"Role assignment lookup failed for user '{user_id}' "
                f"in tenant '{tenant_id}': {exc}"
            )
            raise Unavailable("Role assignment store is unavailable.") from exc

        assignments = tuple(
            RoleAssignment(
                user_id=row.user_id,
                role_name=row.role.name,
                tenant_id=row.tenant_id,
                branch_id=row.branch_id,
                status=row.status,
            )
            for row in rows
        )
        return tuple(sorted(assignments, key=lambda a: a.sort_key()))

    def get_role(self, role_name: str) -> Role | None:
        if not isinstance(role_name, str) or not role_name.strip():
            return None

        from gymos.identity_store.models import Role as StoredRole
        from gymos.permissions_store.models import RolePermission

        try:
            role = StoredRole.objects.filter(name=role_name.strip()).first()
            if role is None:
                return None
            permission_names = tuple(
                RolePermission.objects.filter(role_id=role.role_id)
                .order_by("permission__name")
                .values_list("permission__name", flat=True)
            )
        except DatabaseError as exc:
            logger.error(f"Role lookup failed for role '{role_name}': {exc}")
            raise Unavailable("Role permission store is unavailable.") from exc

        return Role(name=role.name, permissions=frozenset(permission_names))
