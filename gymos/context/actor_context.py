"""
GymOS Context - ActorContext
============================
Per-request identity plus the resolved permission set. Never persisted.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from gymos.permissions.evaluator import has_any_permission, has_permission


@dataclass(frozen=True)
class ActorContext:
    """
    Canonical actor context handed back by the access gate.

    permissions keeps wildcard entries unexpanded.
    branch_id is the advisory default branch (None means tenant-wide);
    branch_ids lists every branch the actor holds a branch-scoped grant at.
    """

    user_id: str
    tenant_id: uuid.UUID
    branch_id: Optional[uuid.UUID] = None
    permissions: frozenset[str] = field(default_factory=frozenset)
    roles: tuple[str, ...] = field(default_factory=tuple)
    branch_ids: tuple[uuid.UUID, ...] = field(default_factory=tuple)
    tenant_wide: bool = False

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")

        if not isinstance(self.tenant_id, uuid.UUID):
            raise ValueError("tenant_id must be UUID.")

        if self.branch_id is not None and not isinstance(self.branch_id, uuid.UUID):
            raise ValueError("branch_id must be UUID or None.")

        if isinstance(self.permissions, str):
            raise ValueError("permissions must be a collection of strings.")
        object.__setattr__(self, "permissions", frozenset(self.permissions))

        if not isinstance(self.roles, tuple):
            raise ValueError("roles must be a tuple.")

        if not isinstance(self.branch_ids, tuple):
            raise ValueError("branch_ids must be a tuple.")

        if self.tenant_wide and self.branch_id is not None:
            raise ValueError("branch_id must be None for tenant-wide context.")

    def has_permission(self, required: str) -> bool:
        return has_permission(self.permissions, required)

    def has_any_permission(self, alternatives: Iterable[str]) -> bool:
        return has_any_permission(self.permissions, alternatives)

    def can_access_tenant(self, tenant_id) -> bool:
        return tenant_id == self.tenant_id

    def can_access_branch(self, branch_id: Optional[uuid.UUID]) -> bool:
        if self.tenant_wide:
            return True
        return branch_id is not None and branch_id in self.branch_ids

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "tenant_id": str(self.tenant_id),
            "branch_id": None if self.branch_id is None else str(self.branch_id),
            "branch_ids": [str(branch_id) for branch_id in self.branch_ids],
            "tenant_wide": self.tenant_wide,
            "roles": list(self.roles),
            "permissions": sorted(self.permissions),
        }
