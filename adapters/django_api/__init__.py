"""
GymOS Django HTTP adapter.
Thin framework glue over gymos/http_api handlers.
"""

from adapters.django_api.wiring import (
    DEV_ADMIN_TOKEN,
    DEV_ANNEX_BRANCH_ID,
    DEV_MAIN_BRANCH_ID,
    DEV_MANAGER_TOKEN,
    DEV_MEMBER_TOKEN,
    DEV_STAFF_TOKEN,
    DEV_TENANT_ID,
    build_dependencies,
    reset_dependencies,
)

__all__ = [
    "DEV_ADMIN_TOKEN",
    "DEV_MANAGER_TOKEN",
    "DEV_STAFF_TOKEN",
    "DEV_MEMBER_TOKEN",
    "DEV_TENANT_ID",
    "DEV_MAIN_BRANCH_ID",
    "DEV_ANNEX_BRANCH_ID",
    "build_dependencies",
    "reset_dependencies",
]
