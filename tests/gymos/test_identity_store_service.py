from __future__ import annotations

import uuid

import pytest
from django.core.management import call_command

from gymos.identity_store.models import Role as StoredRole
from gymos.identity_store.models import RoleAssignment as StoredAssignment
from gymos.identity_store.service import (
    assign_role,
    bootstrap_tenant,
    get_user_permissions,
    list_branches_for_tenant,
    list_permission_catalog,
    list_role_assignments_for_tenant,
    revoke_role,
    seed_roles_and_permissions,
)
from gymos.permissions.catalog import (
    DEFAULT_ROLE_DEFINITIONS,
    PERMISSION_CATALOG,
    RoleDefinition,
)
from gymos.permissions_store.models import Permission, RolePermission

pytestmark = pytest.mark.django_db(transaction=True)


TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-identity-tenant")
OTHER_TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-identity-other-tenant")
MAIN_BRANCH_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-identity-main-branch")
ANNEX_BRANCH_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-identity-annex-branch")


def _bootstrap() -> None:
    seed_roles_and_permissions()
    bootstrap_tenant(
        tenant_id=TENANT_ID,
        name="Downtown Gym",
        branches=(
            {"branch_id": str(MAIN_BRANCH_ID), "name": "Main"},
            {"branch_id": str(ANNEX_BRANCH_ID), "name": "Annex", "timezone": "Europe/Oslo"},
        ),
    )


def test_seed_is_idempotent_and_complete() -> None:
    first = seed_roles_and_permissions()
    second = seed_roles_and_permissions()

    assert first == second
    assert Permission.objects.count() == len(PERMISSION_CATALOG)
    assert StoredRole.objects.count() == len(DEFAULT_ROLE_DEFINITIONS)
    expected_links = sum(len(role.permissions) for role in DEFAULT_ROLE_DEFINITIONS)
    assert RolePermission.objects.count() == expected_links


def test_seed_replaces_a_roles_permission_set() -> None:
    seed_roles_and_permissions()
    seed_roles_and_permissions(
        role_definitions=(
            RoleDefinition(
                name="manager",
                description="Trimmed manager",
                permissions=("members.view",),
            ),
        ),
    )

    manager = StoredRole.objects.get(name="manager")
    names = set(
        RolePermission.objects.filter(role=manager).values_list("permission__name", flat=True)
    )
    assert names == {"members.view"}
    assert manager.description == "Trimmed manager"


def test_seed_rejects_permission_outside_catalog() -> None:
    with pytest.raises(ValueError, match="not in the permission catalog"):
        seed_roles_and_permissions(
            role_definitions=(
                RoleDefinition(name="rogue", description="", permissions=("rockets.launch",)),
            ),
        )


def test_bootstrap_tenant_is_idempotent() -> None:
    first = bootstrap_tenant(tenant_id=TENANT_ID, name="Downtown Gym")
    second = bootstrap_tenant(tenant_id=TENANT_ID, name="Downtown Gym")

    assert first == second
    assert len(first["branches"]) == 1
    assert first["branches"][0]["name"] == "MAIN"


def test_bootstrap_tenant_validates_input() -> None:
    with pytest.raises(ValueError, match="tenant_id"):
        bootstrap_tenant(tenant_id="not-a-uuid", name="Bad")
    with pytest.raises(ValueError, match="name"):
        bootstrap_tenant(tenant_id=TENANT_ID, name="  ")


def test_branch_cannot_move_between_tenants() -> None:
    _bootstrap()
    with pytest.raises(ValueError, match="different tenant"):
        bootstrap_tenant(
            tenant_id=OTHER_TENANT_ID,
            name="Other Gym",
            branches=({"branch_id": str(MAIN_BRANCH_ID), "name": "Stolen"},),
        )


def test_assign_and_revoke_role() -> None:
    _bootstrap()

    assignment = assign_role(
        tenant_id=TENANT_ID,
        user_id="coach-1",
        role_name="trainer",
        branch_id=MAIN_BRANCH_ID,
        display_name="Coach One",
    )
    assert assignment["status"] == "ACTIVE"
    assert assignment["branch_id"] == str(MAIN_BRANCH_ID)

    again = assign_role(
        tenant_id=TENANT_ID,
        user_id="coach-1",
        role_name="trainer",
        branch_id=MAIN_BRANCH_ID,
    )
    assert again["id"] == assignment["id"]
    assert StoredAssignment.objects.count() == 1

    revoked = revoke_role(
        tenant_id=TENANT_ID,
        user_id="coach-1",
        role_name="trainer",
        branch_id=MAIN_BRANCH_ID,
    )
    assert revoked["status"] == "INACTIVE"
    assert get_user_permissions(user_id="coach-1", tenant_id=TENANT_ID) == tuple()


def test_assign_role_validation_errors() -> None:
    _bootstrap()
    with pytest.raises(ValueError, match="role_name"):
        assign_role(tenant_id=TENANT_ID, user_id="u1", role_name="wizard")
    with pytest.raises(ValueError, match="tenant_id"):
        assign_role(tenant_id=OTHER_TENANT_ID, user_id="u1", role_name="staff")
    with pytest.raises(ValueError, match="branch_id"):
        assign_role(
            tenant_id=TENANT_ID,
            user_id="u1",
            role_name="staff",
            branch_id=uuid.uuid5(uuid.NAMESPACE_URL, "gymos-identity-missing-branch"),
        )
    with pytest.raises(ValueError, match="no 'staff' assignment"):
        revoke_role(tenant_id=TENANT_ID, user_id="u1", role_name="staff")


def test_get_user_permissions_union_and_branch_restriction() -> None:
    _bootstrap()
    assign_role(tenant_id=TENANT_ID, user_id="u1", role_name="member", branch_id=MAIN_BRANCH_ID)
    assign_role(tenant_id=TENANT_ID, user_id="u1", role_name="staff", branch_id=ANNEX_BRANCH_ID)

    everything = get_user_permissions(user_id="u1", tenant_id=TENANT_ID)
    assert everything == tuple(sorted(everything))
    assert "self.view" in everything
    assert "checkin.*" in everything

    annex_only = get_user_permissions(
        user_id="u1",
        tenant_id=TENANT_ID,
        branch_id=ANNEX_BRANCH_ID,
    )
    assert "checkin.*" in annex_only
    assert "self.view" not in annex_only

    assert get_user_permissions(user_id="u1", tenant_id=OTHER_TENANT_ID) == tuple()


def test_listings_are_deterministic() -> None:
    _bootstrap()
    assign_role(tenant_id=TENANT_ID, user_id="b-user", role_name="staff")
    assign_role(tenant_id=TENANT_ID, user_id="a-user", role_name="admin")

    branches = list_branches_for_tenant(TENANT_ID)
    assert {branch["name"] for branch in branches} == {"Main", "Annex"}
    assert [b["branch_id"] for b in branches] == sorted(b["branch_id"] for b in branches)

    assignments = list_role_assignments_for_tenant(TENANT_ID)
    assert [a["user_id"] for a in assignments] == ["a-user", "b-user"]

    catalog = list_permission_catalog()
    by_name = {entry["name"]: entry for entry in catalog}
    assert [entry["name"] for entry in catalog] == sorted(by_name)
    assert by_name["roles.manage"]["assigned_to"] == ("admin",)
    assert by_name["*"]["assigned_to"] == ("super_admin",)


def test_seed_rbac_command_bootstraps_tenant_admin() -> None:
    call_command(
        "seed_rbac",
        "--tenant-id",
        str(TENANT_ID),
        "--tenant-name",
        "Downtown Gym",
        "--branch",
        "Main",
        "--admin-user",
        "owner-1",
    )

    assert Permission.objects.count() == len(PERMISSION_CATALOG)
    assert "roles.manage" in get_user_permissions(user_id="owner-1", tenant_id=TENANT_ID)
    assert len(list_branches_for_tenant(TENANT_ID)) == 1
