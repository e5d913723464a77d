"""
GymOS Permissions - Permission Catalog
======================================
Seeded set of recognized permission strings and the default roles that
bundle them. Catalog entries are immutable; they change through seeding,
never at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gymos.permissions.constants import (
    PERMISSION_SEPARATOR,
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_MEMBER,
    ROLE_STAFF,
    ROLE_SUPER_ADMIN,
    ROLE_TRAINER,
    WILDCARD_ALL,
    WILDCARD_SEGMENT,
    is_well_formed_permission,
)


@dataclass(frozen=True)
class PermissionDefinition:
    name: str
    description: str
    module: str
    action: str

    def __post_init__(self):
        if not is_well_formed_permission(self.name):
            raise ValueError(f"permission '{self.name}' is not well formed.")
        if not self.module or not self.action:
            raise ValueError("module and action must be non-empty strings.")


@dataclass(frozen=True)
class RoleDefinition:
    name: str
    description: str
    permissions: tuple[str, ...]
    is_system: bool = True

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("role name must be a non-empty string.")
        if not isinstance(self.permissions, tuple):
            raise ValueError("permissions must be a tuple.")
        # Source bundles repeat entries; keep first occurrence order.
        object.__setattr__(
            self, "permissions", tuple(dict.fromkeys(self.permissions))
        )


_ACTION_VERBS = {
    "view": "View",
    "create": "Create",
    "update": "Update",
    "delete": "Delete",
}


def _module_permissions(
    module: str,
    noun: str,
    actions: tuple[str, ...] = ("view", "create", "update", "delete"),
    extra: tuple[tuple[str, str], ...] = (),
) -> tuple[PermissionDefinition, ...]:
    definitions = [
        PermissionDefinition(
            name=f"{module}.{action}",
            description=f"{_ACTION_VERBS[action]} {noun}",
            module=module,
            action=action,
        )
        for action in actions
    ]
    for action, description in extra:
        definitions.append(
            PermissionDefinition(
                name=f"{module}.{action}",
                description=description,
                module=module,
                action=action,
            )
        )
    return tuple(definitions)


def _module_wildcard(module: str, noun: str) -> PermissionDefinition:
    return PermissionDefinition(
        name=f"{module}{PERMISSION_SEPARATOR}{WILDCARD_SEGMENT}",
        description=f"All {noun} permissions",
        module=module,
        action="all",
    )


_VIEW_CREATE = ("view", "create")
_VIEW_CREATE_UPDATE = ("view", "create", "update")

PERMISSION_CATALOG: tuple[PermissionDefinition, ...] = (
    PermissionDefinition(
        name=WILDCARD_ALL,
        description="All permissions",
        module="system",
        action="all",
    ),
    *_module_permissions("tenants", "tenants"),
    *_module_permissions("branches", "branches"),
    *_module_permissions("users", "users"),
    *_module_permissions(
        "roles",
        "roles",
        extra=(("manage", "Manage roles and their permissions"),),
    ),
    *_module_permissions("members", "members"),
    *_module_permissions(
        "memberships",
        "memberships",
        extra=(
            ("freeze", "Freeze memberships"),
            ("unfreeze", "Unfreeze memberships"),
            ("lifecycle", "Manage membership lifecycle"),
        ),
    ),
    *_module_permissions("membership_plans", "membership plans"),
    *_module_permissions("attendance", "attendance records"),
    *_module_permissions("rooms", "rooms"),
    *_module_permissions(
        "access_control",
        "access control",
        actions=("view",),
        extra=(("manage", "Manage access control"),),
    ),
    *_module_permissions("trainers", "trainers"),
    *_module_permissions(
        "trainer_assignments",
        "trainer assignments",
        actions=_VIEW_CREATE_UPDATE,
        extra=(("approve", "Approve trainer assignments"),),
    ),
    *_module_permissions(
        "training_sessions", "training sessions", actions=_VIEW_CREATE_UPDATE
    ),
    *_module_permissions(
        "plans",
        "plans",
        extra=(
            ("assign", "Assign plans to members"),
            ("manage", "Manage plan templates"),
        ),
    ),
    *_module_permissions(
        "finance",
        "financial records",
        extra=(("manage", "Manage finance settings"),),
    ),
    *_module_permissions("invoices", "invoices"),
    *_module_permissions(
        "products",
        "products",
        extra=(("manage", "Manage product catalog"),),
    ),
    *_module_permissions("pos", "POS sales", actions=_VIEW_CREATE),
    *_module_permissions(
        "expenses",
        "expenses",
        extra=(("approve", "Approve expenses"),),
    ),
    *_module_permissions(
        "communication",
        "templates and campaigns",
        extra=(
            ("send", "Send messages"),
            ("manage", "Manage communication settings"),
        ),
    ),
    *_module_permissions("announcements", "announcements"),
    *_module_permissions(
        "feedback",
        "feedback",
        actions=_VIEW_CREATE,
        extra=(("respond", "Respond to feedback"),),
    ),
    *_module_permissions(
        "reports",
        "reports",
        actions=_VIEW_CREATE,
        extra=(
            ("export", "Export reports"),
            ("branch", "View branch-level reports"),
            ("financial", "View financial reports"),
        ),
    ),
    *_module_permissions(
        "audit",
        "audit logs",
        actions=("view",),
        extra=(("export", "Export audit logs"),),
    ),
    *_module_permissions(
        "referrals",
        "referrals",
        actions=_VIEW_CREATE,
        extra=(("process", "Process referral bonuses"),),
    ),
    *_module_permissions(
        "measurements", "measurements", actions=_VIEW_CREATE_UPDATE
    ),
    *_module_permissions(
        "lockers",
        "lockers",
        extra=(("assign", "Assign lockers to members"),),
    ),
    *_module_permissions(
        "inventory",
        "inventory",
        extra=(("stock_adjust", "Adjust stock levels"),),
    ),
    *_module_permissions("vendors", "vendors"),
    *_module_permissions(
        "classes",
        "classes",
        extra=(
            ("schedule", "Schedule classes"),
            ("book", "Book classes"),
            ("cancel", "Cancel class bookings"),
            ("attendees", "View class attendees"),
        ),
    ),
    *_module_permissions(
        "bookings",
        "bookings",
        actions=_VIEW_CREATE_UPDATE,
        extra=(
            ("override", "Override booking rules"),
            ("markAttended", "Mark bookings as attended"),
        ),
    ),
    *_module_permissions(
        "checkin", "check-ins", actions=_VIEW_CREATE
    ),
    *_module_permissions("coupons", "coupons"),
    *_module_permissions("tasks", "tasks", actions=_VIEW_CREATE_UPDATE),
    PermissionDefinition(
        name="settings.view",
        description="View settings",
        module="settings",
        action="view",
    ),
    PermissionDefinition(
        name="settings.update",
        description="Update settings",
        module="settings",
        action="update",
    ),
    PermissionDefinition(
        name="settings.payment.update",
        description="Update payment gateway settings",
        module="settings",
        action="payment_update",
    ),
    PermissionDefinition(
        name="settings.templates.update",
        description="Update communication templates settings",
        module="settings",
        action="templates_update",
    ),
    PermissionDefinition(
        name="settings.backup.manage",
        description="Manage backup settings and trigger backups",
        module="settings",
        action="backup_manage",
    ),
    *_module_permissions(
        "permissions",
        "permissions",
        actions=("view",),
        extra=(("manage", "Manage permissions"),),
    ),
    *_module_permissions(
        "doors",
        "door access logs",
        actions=("view",),
        extra=(("manage", "Manage door access controls"),),
    ),
    PermissionDefinition(
        name="checkout.process",
        description="Process checkout and payments",
        module="checkout",
        action="process",
    ),
    PermissionDefinition(
        name="payment.webhook",
        description="Handle payment gateway webhooks",
        module="payment",
        action="webhook",
    ),
    *_module_permissions(
        "payroll",
        "payroll",
        actions=_VIEW_CREATE_UPDATE,
        extra=(
            ("approve", "Approve payroll"),
            ("process", "Process payroll payments"),
        ),
    ),
    PermissionDefinition(
        name="dashboard.view",
        description="Access operational dashboards",
        module="dashboard",
        action="view",
    ),
    PermissionDefinition(
        name="dashboard.super_admin",
        description="Access Super Admin Dashboard",
        module="dashboard",
        action="super_admin",
    ),
    PermissionDefinition(
        name="dashboard.admin",
        description="Access Admin Dashboard",
        module="dashboard",
        action="admin",
    ),
    *_module_permissions(
        "analytics",
        "analytics",
        actions=("view",),
        extra=(
            ("branch", "View branch analytics"),
            ("revenue", "View revenue analytics"),
        ),
    ),
    *_module_permissions("staff", "staff", actions=("view",)),
    PermissionDefinition(
        name="self.view",
        description="View own member profile",
        module="self",
        action="view",
    ),
    _module_wildcard("members", "member"),
    _module_wildcard("memberships", "membership"),
    _module_wildcard("lockers", "locker"),
    _module_wildcard("bookings", "booking"),
    _module_wildcard("attendance", "attendance"),
    _module_wildcard("classes", "class"),
    _module_wildcard("checkin", "check-in"),
    _module_wildcard("training_sessions", "training session"),
    _module_wildcard("member-portal", "member portal"),
)


_MANAGER_PERMISSIONS = (
    "members.*",
    "memberships.*",
    "lockers.*",
    "bookings.*",
    "attendance.*",
    "classes.*",
    "staff.view",
    "reports.view",
    "reports.branch",
    "analytics.branch",
    "branches.view",
    "trainers.view",
    "dashboard.view",
)

DEFAULT_ROLE_DEFINITIONS: tuple[RoleDefinition, ...] = (
    RoleDefinition(
        name=ROLE_SUPER_ADMIN,
        description="Super Administrator with full system access",
        permissions=(WILDCARD_ALL,),
    ),
    RoleDefinition(
        name=ROLE_ADMIN,
        description="Administrator with tenant-level access",
        permissions=(
            "branches.view", "branches.create", "branches.update",
            "users.view", "users.create", "users.update",
            "roles.view", "roles.create", "roles.update", "roles.manage",
            "members.view", "members.create", "members.update",
            "memberships.view", "memberships.create", "memberships.update",
            "membership_plans.view", "membership_plans.create",
            "membership_plans.update",
            "attendance.view", "attendance.create", "attendance.update",
            "rooms.view", "rooms.create", "rooms.update",
            "access_control.view", "access_control.manage",
            "trainers.view", "trainers.create", "trainers.update",
            "trainer_assignments.view", "trainer_assignments.create",
            "trainer_assignments.update", "trainer_assignments.approve",
            "plans.view", "plans.create", "plans.update", "plans.delete",
            "plans.assign",
            "finance.view", "finance.create", "finance.update",
            "finance.manage",
            "expenses.view", "expenses.create", "expenses.update",
            "expenses.approve", "expenses.delete",
            "invoices.view", "invoices.create", "invoices.update",
            "products.view", "products.create", "products.update",
            "pos.view", "pos.create",
            "communication.view", "communication.create",
            "communication.update", "communication.delete",
            "communication.send", "communication.manage",
            "announcements.view", "announcements.create",
            "announcements.update", "announcements.delete",
            "feedback.view", "feedback.create", "feedback.respond",
            "lockers.view", "lockers.create", "lockers.update",
            "lockers.delete", "lockers.assign",
            "inventory.view", "inventory.create", "inventory.update",
            "inventory.delete", "inventory.stock_adjust",
            "vendors.view", "vendors.create", "vendors.update",
            "vendors.delete",
            "reports.view", "reports.create", "reports.export",
            "audit.view", "audit.export",
            "referrals.view", "referrals.create", "referrals.process",
            "measurements.view", "measurements.create",
            "measurements.update",
            "payroll.view", "payroll.create", "payroll.update",
            "payroll.approve", "payroll.process",
            "classes.view", "classes.create", "classes.update",
            "classes.delete", "classes.schedule", "classes.book",
            "classes.cancel", "classes.attendees",
            "bookings.view", "bookings.create", "bookings.markAttended",
            "checkin.*",
            "training_sessions.view", "training_sessions.create",
            "training_sessions.update",
            "self.view", "member-portal.*",
            "settings.view", "settings.update", "settings.payment.update",
            "settings.templates.update", "settings.backup.manage",
            "permissions.view", "permissions.manage",
            "doors.view", "doors.manage",
            "checkout.process",
            "payment.webhook",
            "dashboard.admin", "dashboard.view",
        ),
    ),
    RoleDefinition(
        name=ROLE_MANAGER,
        description="Branch manager with operational module access",
        permissions=_MANAGER_PERMISSIONS,
    ),
    RoleDefinition(
        name=ROLE_TRAINER,
        description="Trainer with access to assigned members and sessions",
        permissions=(
            "members.view",
            "trainer_assignments.view", "trainer_assignments.update",
            "plans.view", "plans.create", "plans.update", "plans.assign",
            "training_sessions.view", "training_sessions.create",
            "training_sessions.update",
            "classes.view", "classes.schedule", "classes.attendees",
            "attendance.view", "attendance.create",
            "lockers.view",
            "inventory.view",
            "measurements.view", "measurements.create",
            "referrals.view",
        ),
    ),
    RoleDefinition(
        name=ROLE_STAFF,
        description="Staff member with basic operational access",
        permissions=(
            "members.view", "members.create", "members.update",
            "memberships.view", "memberships.create",
            "attendance.view", "attendance.create", "attendance.update",
            "checkin.*",
            "bookings.view", "bookings.create", "bookings.markAttended",
            "trainers.view",
            "trainer_assignments.view", "trainer_assignments.create",
            "plans.view", "plans.create",
            "products.view",
            "pos.view", "pos.create",
            "invoices.view",
            "communication.view", "communication.send",
            "announcements.view",
            "feedback.view", "feedback.create",
            "lockers.view", "lockers.assign",
            "inventory.view", "inventory.create", "inventory.update",
            "inventory.stock_adjust",
            "classes.view",
        ),
    ),
    RoleDefinition(
        name=ROLE_MEMBER,
        description="Gym member with self-service access",
        permissions=(
            "self.view",
            "member-portal.*",
            "members.view",
            "trainer_assignments.view",
            "plans.view",
            "attendance.view",
            "invoices.view",
            "classes.view",
            "classes.book",
            "classes.cancel",
            "measurements.view",
            "referrals.view",
        ),
    ),
)

_ROLE_DISPLAY_NAMES = {
    ROLE_SUPER_ADMIN: "Super Administrator",
    ROLE_ADMIN: "Administrator",
    ROLE_MANAGER: "Branch Manager",
    ROLE_TRAINER: "Trainer",
    ROLE_STAFF: "Front Desk Staff",
    ROLE_MEMBER: "Member",
}

_ROLE_CAPABILITIES: dict[str, tuple[str, ...]] = {
    ROLE_SUPER_ADMIN: (
        "Full system access",
        "Tenant management",
    ),
    ROLE_ADMIN: (
        "Financial reports and analytics",
        "System settings management",
        "User and role management",
        "Data export",
    ),
    ROLE_MANAGER: (
        "Member management",
        "Booking overrides",
        "Membership freeze/unfreeze",
        "Locker assignments",
        "Branch-level reports",
        "Staff supervision",
    ),
    ROLE_STAFF: (
        "Member check-ins",
        "View member profiles",
        "Create new members",
        "View and create bookings",
        "Mark attendance",
    ),
    ROLE_TRAINER: (
        "View class schedules",
        "View class attendees",
        "View member profiles",
        "Session tracking",
    ),
    ROLE_MEMBER: (
        "Own profile and plans",
        "Class booking",
    ),
}

_PERMISSIONS_BY_NAME = {
    definition.name: definition for definition in PERMISSION_CATALOG
}
_ROLES_BY_NAME = {
    definition.name: definition for definition in DEFAULT_ROLE_DEFINITIONS
}

if len(_PERMISSIONS_BY_NAME) != len(PERMISSION_CATALOG):
    raise ValueError("PERMISSION_CATALOG contains duplicate permission names.")


def catalog_permission_names() -> frozenset[str]:
    return frozenset(_PERMISSIONS_BY_NAME)


def get_permission_definition(name: str) -> Optional[PermissionDefinition]:
    return _PERMISSIONS_BY_NAME.get(name)


def get_role_definition(name: str) -> Optional[RoleDefinition]:
    return _ROLES_BY_NAME.get(name)


def permissions_for_module(module: str) -> tuple[PermissionDefinition, ...]:
    return tuple(
        definition
        for definition in PERMISSION_CATALOG
        if definition.module == module
    )


def role_display_name(name: str) -> str:
    return _ROLE_DISPLAY_NAMES.get(name, name)


def role_capabilities(name: str) -> tuple[str, ...]:
    return _ROLE_CAPABILITIES.get(name, tuple())
