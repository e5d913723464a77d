"""
GymOS Permissions - Constants
=============================
Permission grammar, grant scopes and default role names.

Grammar (closed):
    *                   super-admin wildcard
    module.action       concrete permission (more segments allowed)
    module.*            every action under module
"""

from __future__ import annotations

WILDCARD_ALL = "*"
WILDCARD_SEGMENT = "*"
PERMISSION_SEPARATOR = "."

SCOPE_GRANT_TENANT = "TENANT"
SCOPE_GRANT_BRANCH = "BRANCH"

VALID_SCOPE_TYPES = frozenset({SCOPE_GRANT_TENANT, SCOPE_GRANT_BRANCH})

GRANT_STATUS_ACTIVE = "ACTIVE"
GRANT_STATUS_INACTIVE = "INACTIVE"

VALID_GRANT_STATUSES = frozenset({GRANT_STATUS_ACTIVE, GRANT_STATUS_INACTIVE})

ROLE_SUPER_ADMIN = "super_admin"
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_TRAINER = "trainer"
ROLE_STAFF = "staff"
ROLE_MEMBER = "member"

DEFAULT_ROLE_NAMES = (
    ROLE_SUPER_ADMIN,
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_TRAINER,
    ROLE_STAFF,
    ROLE_MEMBER,
)


def is_well_formed_permission(value) -> bool:
    """
    Grammar check used when permissions are stored, never when evaluated.
    """
    if not isinstance(value, str) or not value:
        return False
    if value == WILDCARD_ALL:
        return True

    segments = value.split(PERMISSION_SEPARATOR)
    if len(segments) < 2:
        return False
    if any(not segment for segment in segments):
        return False
    return WILDCARD_SEGMENT not in segments[:-1]
