"""
GymOS Navigation - Back-office Navigation Tree
==============================================
"""

from __future__ import annotations

from gymos.navigation.models import MenuItem, MenuNode, MenuSection, MenuSubmenu

DEFAULT_NAVIGATION: tuple[MenuNode, ...] = (
    MenuSubmenu(
        label="Dashboards",
        icon="tabler-smart-home",
        children=(
            MenuItem(
                label="Manager Dashboard",
                href="/dashboards/manager",
                icon="tabler-building",
                permissions=("dashboard.view",),
            ),
            MenuItem(
                label="Staff Dashboard",
                href="/dashboards/staff",
                icon="tabler-clipboard-check",
                permissions=("attendance.view",),
            ),
            MenuItem(
                label="Finance Dashboard",
                href="/dashboards/finance",
                icon="tabler-report-money",
                permissions=("finance.view",),
            ),
        ),
    ),
    MenuItem(
        label="My Portal",
        href="/member-portal",
        icon="tabler-user-circle",
        permissions=("member-portal.*", "self.view"),
    ),
    MenuSection(
        label="Gym Operations",
        children=(
            MenuSubmenu(
                label="Members",
                icon="tabler-users",
                permissions=("members.view",),
                children=(
                    MenuItem("All Members", "/apps/members", ("members.view",)),
                    MenuItem("Member Profile", "/apps/member", ("members.view",)),
                    MenuItem("Member Goals", "/apps/goals", ("members.view",)),
                    MenuItem("Leads", "/apps/pipeline", ("members.create",)),
                ),
            ),
            MenuSubmenu(
                label="Sales & POS",
                icon="tabler-shopping-cart",
                permissions=("pos.view",),
                children=(
                    MenuItem("POS Dashboard", "/apps/ecommerce/dashboard", ("pos.view",)),
                    MenuItem("Products", "/apps/products", ("products.view",)),
                    MenuItem(
                        "Manage Products",
                        "/apps/ecommerce/products/list",
                        ("products.manage",),
                    ),
                    MenuItem("Orders", "/apps/ecommerce/orders/list", ("pos.view",)),
                    MenuItem("Invoices", "/apps/invoice/list", ("finance.view",)),
                ),
            ),
            MenuSubmenu(
                label="Memberships & Plans",
                icon="tabler-id-badge",
                permissions=("membership_plans.view",),
                children=(
                    MenuItem("Plan Catalog", "/apps/plans", ("plans.view",)),
                    MenuItem(
                        "Membership Plans",
                        "/apps/membership-plans",
                        ("membership_plans.view",),
                    ),
                    MenuItem("Benefits Dashboard", "/apps/benefits", ("members.view",)),
                    MenuItem(
                        "Lifecycle Management",
                        "/apps/lifecycle",
                        ("memberships.lifecycle",),
                    ),
                ),
            ),
            MenuSubmenu(
                label="Promotions",
                icon="tabler-discount",
                permissions=("coupons.view",),
                children=(MenuItem("Coupons", "/apps/coupons", ("coupons.view",)),),
            ),
            MenuSubmenu(
                label="Trainers & PT",
                icon="tabler-barbell",
                permissions=("trainers.view",),
                children=(
                    MenuItem("All Trainers", "/apps/trainers", ("trainers.view",)),
                    MenuItem(
                        "Trainer Assignments",
                        "/apps/trainers/assignments",
                        ("trainers.view",),
                    ),
                    MenuItem(
                        "Utilization Report",
                        "/apps/trainers/utilization",
                        ("reports.view",),
                    ),
                ),
            ),
            MenuSubmenu(
                label="Classes & Schedule",
                icon="tabler-calendar",
                permissions=("classes.view",),
                children=(
                    MenuItem("All Classes", "/apps/classes", ("classes.view",)),
                    MenuItem("Calendar", "/apps/facility-calendar", ("classes.view",)),
                    MenuItem(
                        "Class Bookings",
                        "/member-portal/bookings",
                        ("classes.view",),
                    ),
                ),
            ),
            MenuSubmenu(
                label="Attendance & Access",
                icon="tabler-door-enter",
                permissions=("attendance.view",),
                children=(
                    MenuItem("Attendance", "/apps/attendance", ("attendance.view",)),
                    MenuItem("Access Control", "/apps/access-control", ("doors.view",)),
                    MenuItem("Check-in Logs", "/apps/checkin", ("attendance.view",)),
                ),
            ),
            MenuSubmenu(
                label="Inventory & Lockers",
                icon="tabler-box",
                permissions=("inventory.view", "lockers.view"),
                children=(
                    MenuItem("Inventory", "/apps/inventory", ("inventory.view",)),
                    MenuItem("Lockers", "/apps/lockers/grid", ("lockers.view",)),
                    MenuItem(
                        "Equipment Maintenance",
                        "/apps/equipment",
                        ("inventory.view",),
                    ),
                ),
            ),
            MenuItem(
                label="Tasks",
                href="/apps/tasks",
                icon="tabler-checklist",
                permissions=("tasks.view",),
            ),
            MenuSubmenu(
                label="Diet & Workout",
                icon="tabler-salad",
                permissions=("plans.view",),
                children=(
                    MenuItem("Workout Plans", "/apps/plans/workout", ("plans.view",)),
                    MenuItem("Diet Plans", "/apps/plans/diet", ("plans.view",)),
                    MenuItem(
                        "Plan Templates",
                        "/apps/plans/templates",
                        ("plans.manage",),
                    ),
                ),
            ),
        ),
    ),
    MenuSection(
        label="Management",
        children=(
            MenuSubmenu(
                label="Finance",
                icon="tabler-report-money",
                permissions=("finance.view",),
                children=(
                    MenuItem(
                        "Financial Overview",
                        "/dashboards/finance",
                        ("finance.view",),
                    ),
                    MenuItem("Expenses", "/apps/expenses", ("expenses.view",)),
                    MenuItem("Payroll", "/apps/payroll", ("payroll.view",)),
                ),
            ),
            MenuSubmenu(
                label="Reports",
                icon="tabler-chart-bar",
                permissions=("reports.view",),
                children=(
                    MenuItem("All Reports", "/apps/reports", ("reports.view",)),
                    MenuItem("Audit Logs", "/apps/audit", ("audit.view",)),
                ),
            ),
            MenuSubmenu(
                label="Facilities",
                icon="tabler-building-community",
                permissions=("branches.view",),
                children=(
                    MenuItem("Branches", "/apps/branches", ("branches.view",)),
                    MenuItem("Rooms & Spaces", "/apps/rooms", ("doors.view",)),
                ),
            ),
            MenuSubmenu(
                label="Communication",
                icon="tabler-message",
                permissions=("communication.view",),
                children=(
                    MenuItem("Email", "/apps/email", ("communication.view",)),
                    MenuItem("Chat", "/apps/chat", ("communication.view",)),
                    MenuItem("Referrals", "/apps/referrals", ("referrals.view",)),
                ),
            ),
            MenuSubmenu(
                label="Administration",
                icon="tabler-settings",
                permissions=("users.view", "roles.view", "settings.view"),
                children=(
                    MenuItem("Team Management", "/apps/staff", ("users.view",)),
                    MenuItem("Roles & Permissions", "/apps/roles", ("roles.view",)),
                    MenuItem("Settings", "/apps/settings", ("settings.view",)),
                ),
            ),
        ),
    ),
)
