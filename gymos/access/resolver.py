"""
GymOS Access - Actor Context Resolver
=====================================
Builds the ActorContext for one request from the principal's active role
assignments in the current tenant.

- Permissions are the union over every active assignment's role.
- Any tenant-wide assignment makes the context tenant-wide (branch_id None).
- Nothing is cached; every call re-reads the store.
- Store failures propagate as Unavailable, never as an empty context.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from gymos.access.session import SessionPrincipal
from gymos.context.actor_context import ActorContext
from gymos.permissions.errors import AccessError, Unauthenticated, Unavailable
from gymos.permissions.models import RoleAssignment
from gymos.permissions.provider import PermissionProvider

logger = logging.getLogger("gymos.access")


class ActorContextResolver:
    def __init__(self, permission_provider: PermissionProvider):
        if permission_provider is None:
            raise ValueError("permission_provider is required.")
        self._provider = permission_provider

    def resolve(self, principal: Optional[SessionPrincipal]) -> ActorContext:
        if principal is None:
            raise Unauthenticated()
        return self.resolve_for_user(principal.subject_id, principal.tenant_id)

    def resolve_for_user(self, user_id: str, tenant_id: uuid.UUID) -> ActorContext:
        if not user_id or not isinstance(tenant_id, uuid.UUID):
            raise Unauthenticated("Session is missing user or tenant identity.")

        assignments = self._load_assignments(user_id, tenant_id)

        permissions: set[str] = set()
        role_names: list[str] = []
        branch_ids: list[uuid.UUID] = []
        tenant_wide = False

        for assignment in assignments:
            if not assignment.is_active or assignment.tenant_id != tenant_id:
                continue

            role = self._load_role(assignment.role_name)
            if role is None:
                logger.warning(
                    f"Role '{assignment.role_name}' assigned to user "
                    f"'{user_id}' was not found; assignment ignored."
                )
                continue

            permissions.update(role.permissions)
            if role.name not in role_names:
                role_names.append(role.name)

            if assignment.branch_id is None:
                tenant_wide = True
            elif assignment.branch_id not in branch_ids:
                branch_ids.append(assignment.branch_id)

        default_branch_id = None
        if not tenant_wide and branch_ids:
            default_branch_id = branch_ids[0]

        return ActorContext(
            user_id=user_id,
            tenant_id=tenant_id,
            branch_id=default_branch_id,
            permissions=frozenset(permissions),
            roles=tuple(role_names),
            branch_ids=tuple(sorted(branch_ids, key=str)),
            tenant_wide=tenant_wide,
        )

    def get_role(self, role_name: str):
        """Look up a role definition, failing closed on store errors."""
        return self._load_role(role_name)

    def _load_assignments(
        self,
        user_id: str,
        tenant_id: uuid.UUID,
    ) -> tuple[RoleAssignment, ...]:
        try:
            assignments = self._provider.get_assignments_for_user(user_id, tenant_id)
        except AccessError:
            raise
        except Exception as exc:
            logger.error(
                f"Permission provider failed for user '{user_id}' "
                f"in tenant '{tenant_id}': {exc}",
                exc_info=True,
            )
            raise Unavailable() from exc
        return tuple(sorted(assignments, key=lambda a: a.sort_key()))

    def _load_role(self, role_name: str):
        try:
            return self._provider.get_role(role_name)
        except AccessError:
            raise
        except Exception as exc:
            logger.error(
                f"Permission provider failed for role '{role_name}': {exc}",
                exc_info=True,
            )
            raise Unavailable() from exc
