"""
GymOS Permissions - Immutable Role/Assignment Models
====================================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from gymos.permissions.constants import (
    GRANT_STATUS_ACTIVE,
    SCOPE_GRANT_BRANCH,
    SCOPE_GRANT_TENANT,
    VALID_GRANT_STATUSES,
    is_well_formed_permission,
)


@dataclass(frozen=True)
class Role:
    """
    Tenant-agnostic permission bundle. Wildcards are stored unexpanded.
    """

    name: str
    permissions: frozenset[str]

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be a non-empty string.")

        if isinstance(self.permissions, str):
            raise ValueError("permissions must be a collection of strings.")
        normalized = frozenset(self.permissions)

        for permission in normalized:
            if not is_well_formed_permission(permission):
                raise ValueError(
                    f"permission '{permission}' is not a valid permission string."
                )

        object.__setattr__(self, "permissions", normalized)


@dataclass(frozen=True)
class RoleAssignment:
    user_id: str
    role_name: str
    tenant_id: uuid.UUID
    branch_id: Optional[uuid.UUID] = None
    status: str = GRANT_STATUS_ACTIVE

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")

        if not self.role_name or not isinstance(self.role_name, str):
            raise ValueError("role_name must be a non-empty string.")

        if not isinstance(self.tenant_id, uuid.UUID):
            raise ValueError("tenant_id must be UUID.")

        if self.branch_id is not None and not isinstance(self.branch_id, uuid.UUID):
            raise ValueError("branch_id must be UUID or None.")

        if self.status not in VALID_GRANT_STATUSES:
            raise ValueError(
                f"status '{self.status}' not valid. "
                f"Must be one of: {sorted(VALID_GRANT_STATUSES)}"
            )

    @property
    def scope_type(self) -> str:
        if self.branch_id is None:
            return SCOPE_GRANT_TENANT
        return SCOPE_GRANT_BRANCH

    @property
    def is_active(self) -> bool:
        return self.status == GRANT_STATUS_ACTIVE

    def sort_key(self) -> tuple[str, str, str, str, str]:
        return (
            self.user_id,
            str(self.tenant_id),
            "" if self.branch_id is None else str(self.branch_id),
            self.role_name,
            self.status,
        )
