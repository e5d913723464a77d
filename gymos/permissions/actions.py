"""
GymOS Permissions - Named Action Gates
======================================
UI-level capabilities expressed as permission alternatives.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from gymos.permissions.evaluator import has_all_permissions, has_any_permission

ACTION_PERMISSIONS: dict[str, tuple[str, ...]] = {
    "view_financial_reports": (
        "finance.view",
        "reports.financial",
        "analytics.revenue",
    ),
    "manage_system_settings": ("settings.update", "settings.backup.manage"),
    "override_bookings": ("bookings.override",),
    "process_membership_freeze": ("memberships.freeze",),
    "assign_lockers": ("lockers.update", "lockers.assign"),
    "perform_checkins": ("checkin.create", "attendance.create"),
    "view_class_schedules": ("classes.view",),
    "manage_classes": ("classes.create", "classes.update", "classes.delete"),
    "view_member_profiles": ("members.view",),
    "create_members": ("members.create",),
    "view_attendance": ("attendance.view",),
    "mark_attendance": ("attendance.create", "bookings.markAttended"),
    "export_data": ("reports.export", "audit.export"),
    "view_analytics": ("analytics.view", "reports.view"),
    "view_branch_analytics": ("analytics.branch", "reports.branch"),
}


@dataclass(frozen=True)
class PermissionGateResult:
    can_access: bool
    reason: Optional[str] = None


def can_perform_action(
    permissions: Iterable[str],
    action: str,
) -> PermissionGateResult:
    required = ACTION_PERMISSIONS.get(action)
    if required is None:
        return PermissionGateResult(
            can_access=False,
            reason=f"Unknown action '{action}'.",
        )

    if has_any_permission(permissions, required):
        return PermissionGateResult(can_access=True)
    return PermissionGateResult(
        can_access=False,
        reason=f"Missing permission for action '{action}'.",
    )


def check_permissions(
    permissions: Iterable[str],
    required: Iterable[str],
    *,
    require_all: bool = False,
) -> PermissionGateResult:
    required = tuple(required)
    if require_all:
        if has_all_permissions(permissions, required):
            return PermissionGateResult(can_access=True)
        return PermissionGateResult(
            can_access=False,
            reason="Missing required permissions.",
        )

    if has_any_permission(permissions, required):
        return PermissionGateResult(can_access=True)
    return PermissionGateResult(
        can_access=False,
        reason="Lacks any of the required permissions.",
    )
