from __future__ import annotations

import uuid

from gymos.access import (
    AccessGate,
    ActorContextResolver,
    InMemorySessionProvider,
    SessionPrincipal,
)
from gymos.http_api import (
    BranchRecord,
    HttpApiDependencies,
    InMemoryTenantDirectory,
    RoleAssignHttpRequest,
    RoleRevokeHttpRequest,
    UserAccessReadRequest,
    get_my_access,
    get_navigation,
    get_user_access,
    list_branches,
    list_permission_catalog,
    post_role_assign,
    post_role_revoke,
)
from gymos.permissions import (
    DEFAULT_ROLE_DEFINITIONS,
    InMemoryPermissionProvider,
    Role,
    RoleAssignment,
)


TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-http-tenant")
OTHER_TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-http-other-tenant")
MAIN_BRANCH_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-http-main-branch")
ANNEX_BRANCH_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-http-annex-branch")
FOREIGN_BRANCH_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-http-foreign-branch")

ADMIN_HEADERS = {"Authorization": "Bearer admin-token"}
MANAGER_HEADERS = {"Authorization": "Bearer manager-token"}
MEMBER_HEADERS = {"Authorization": "Bearer member-token"}
BRANCH_ADMIN_HEADERS = {"Authorization": "Bearer branch-admin-token"}


class FailingProvider:
    def get_assignments_for_user(self, user_id, tenant_id):
        raise ConnectionError("store down")

    def get_role(self, role_name):
        raise ConnectionError("store down")


def _build_dependencies(permission_provider=None) -> HttpApiDependencies:
    provider = InMemoryPermissionProvider(
        roles=tuple(
            Role(name=definition.name, permissions=frozenset(definition.permissions))
            for definition in DEFAULT_ROLE_DEFINITIONS
        ),
        assignments=(
            RoleAssignment("admin-user", "admin", TENANT_ID),
            RoleAssignment("branch-admin", "admin", TENANT_ID, branch_id=MAIN_BRANCH_ID),
            RoleAssignment("manager-user", "manager", TENANT_ID, branch_id=MAIN_BRANCH_ID),
            RoleAssignment("member-user", "member", TENANT_ID, branch_id=MAIN_BRANCH_ID),
        ),
    )
    return HttpApiDependencies(
        session_provider=InMemorySessionProvider(
            {
                "admin-token": SessionPrincipal("admin-user", TENANT_ID),
                "manager-token": SessionPrincipal("manager-user", TENANT_ID),
                "member-token": SessionPrincipal("member-user", TENANT_ID),
                "branch-admin-token": SessionPrincipal("branch-admin", TENANT_ID),
            }
        ),
        access_gate=AccessGate(ActorContextResolver(permission_provider or provider)),
        directory=InMemoryTenantDirectory(
            permission_provider=provider,
            branches=(
                BranchRecord(MAIN_BRANCH_ID, TENANT_ID, "Main"),
                BranchRecord(ANNEX_BRANCH_ID, TENANT_ID, "Annex"),
                BranchRecord(FOREIGN_BRANCH_ID, OTHER_TENANT_ID, "Elsewhere"),
            ),
        ),
    )


def test_my_access_requires_a_session() -> None:
    status, body = get_my_access(_build_dependencies(), headers={})
    assert status == 401
    assert body["ok"] is False
    assert body["error"]["code"] == "UNAUTHENTICATED"


def test_my_access_returns_resolved_context() -> None:
    status, body = get_my_access(_build_dependencies(), headers=MANAGER_HEADERS)

    assert status == 200
    access = body["data"]["access"]
    assert access["user_id"] == "manager-user"
    assert access["tenant_id"] == str(TENANT_ID)
    assert access["branch_id"] == str(MAIN_BRANCH_ID)
    assert "members.*" in access["permissions"]
    assert access["role_details"][0]["display_name"] == "Branch Manager"


def test_navigation_is_filtered_for_the_actor() -> None:
    status, body = get_navigation(_build_dependencies(), headers=MEMBER_HEADERS)

    assert status == 200
    labels = [node["label"] for node in body["data"]["navigation"]]
    assert "My Portal" in labels
    assert "Management" not in labels


def test_permission_catalog_denied_without_permission() -> None:
    status, body = list_permission_catalog(_build_dependencies(), headers=MANAGER_HEADERS)

    assert status == 403
    assert body["error"] == {
        "code": "FORBIDDEN",
        "message": "Access denied.",
        "details": {},
    }


def test_permission_catalog_lists_entries_with_roles() -> None:
    status, body = list_permission_catalog(_build_dependencies(), headers=ADMIN_HEADERS)

    assert status == 200
    by_name = {entry["name"]: entry for entry in body["data"]["permissions"]}
    assert by_name["*"]["assigned_to"] == ("super_admin",)
    assert "manager" in by_name["members.*"]["assigned_to"]


def test_branches_are_scoped_to_tenant_and_branch() -> None:
    dependencies = _build_dependencies()

    status, body = list_branches(dependencies, headers=ADMIN_HEADERS)
    assert status == 200
    assert {b["name"] for b in body["data"]["branches"]} == {"Main", "Annex"}

    status, body = list_branches(dependencies, headers=MANAGER_HEADERS)
    assert status == 200
    assert [b["name"] for b in body["data"]["branches"]] == ["Main"]


def test_user_access_resolves_within_callers_tenant() -> None:
    status, body = get_user_access(
        UserAccessReadRequest(user_id="member-user"),
        _build_dependencies(),
        headers=ADMIN_HEADERS,
    )

    assert status == 200
    assert body["data"]["access"]["user_id"] == "member-user"
    assert "self.view" in body["data"]["access"]["permissions"]

    status, _ = get_user_access(
        UserAccessReadRequest(user_id="admin-user"),
        _build_dependencies(),
        headers=MEMBER_HEADERS,
    )
    assert status == 403


def test_role_assign_denied_before_any_mutation() -> None:
    dependencies = _build_dependencies()
    status, body = post_role_assign(
        RoleAssignHttpRequest(user_id="member-user", role_name="admin"),
        dependencies,
        headers=MANAGER_HEADERS,
    )
    assert status == 403
    assert body["error"]["code"] == "FORBIDDEN"

    status, body = get_my_access(dependencies, headers=MEMBER_HEADERS)
    assert "admin" not in body["data"]["access"]["roles"]


def test_role_assign_and_revoke_take_effect_on_next_request() -> None:
    dependencies = _build_dependencies()

    status, body = post_role_assign(
        RoleAssignHttpRequest(
            user_id="member-user",
            role_name="staff",
            branch_id=ANNEX_BRANCH_ID,
        ),
        dependencies,
        headers=ADMIN_HEADERS,
    )
    assert status == 200
    assert body["data"]["assignment"]["status"] == "ACTIVE"
    assert body["data"]["assignment"]["tenant_id"] == str(TENANT_ID)

    _, body = get_my_access(dependencies, headers=MEMBER_HEADERS)
    assert "checkin.*" in body["data"]["access"]["permissions"]

    status, body = post_role_revoke(
        RoleRevokeHttpRequest(
            user_id="member-user",
            role_name="staff",
            branch_id=ANNEX_BRANCH_ID,
        ),
        dependencies,
        headers=ADMIN_HEADERS,
    )
    assert status == 200
    assert body["data"]["assignment"]["status"] == "INACTIVE"

    _, body = get_my_access(dependencies, headers=MEMBER_HEADERS)
    assert "checkin.*" not in body["data"]["access"]["permissions"]


def test_role_assign_rejects_branch_of_another_tenant() -> None:
    status, body = post_role_assign(
        RoleAssignHttpRequest(
            user_id="member-user",
            role_name="staff",
            branch_id=FOREIGN_BRANCH_ID,
        ),
        _build_dependencies(),
        headers=ADMIN_HEADERS,
    )
    assert status == 400
    assert body["error"]["code"] == "INVALID_REQUEST"


def test_branch_admin_cannot_grant_tenant_wide_roles() -> None:
    dependencies = _build_dependencies()
    status, body = post_role_assign(
        RoleAssignHttpRequest(user_id="branch-admin", role_name="super_admin"),
        dependencies,
        headers=BRANCH_ADMIN_HEADERS,
    )
    assert status == 403
    assert body["error"]["code"] == "FORBIDDEN"

    _, body = get_my_access(dependencies, headers=BRANCH_ADMIN_HEADERS)
    assert body["data"]["access"]["roles"] == ["admin"]
    assert body["data"]["access"]["tenant_wide"] is False


def test_branch_admin_manages_roles_only_at_own_branch() -> None:
    dependencies = _build_dependencies()

    status, _ = post_role_assign(
        RoleAssignHttpRequest(
            user_id="member-user",
            role_name="staff",
            branch_id=ANNEX_BRANCH_ID,
        ),
        dependencies,
        headers=BRANCH_ADMIN_HEADERS,
    )
    assert status == 403

    status, body = post_role_assign(
        RoleAssignHttpRequest(
            user_id="member-user",
            role_name="staff",
            branch_id=MAIN_BRANCH_ID,
        ),
        dependencies,
        headers=BRANCH_ADMIN_HEADERS,
    )
    assert status == 200
    assert body["data"]["assignment"]["branch_id"] == str(MAIN_BRANCH_ID)

    status, _ = post_role_revoke(
        RoleRevokeHttpRequest(user_id="admin-user", role_name="admin"),
        dependencies,
        headers=BRANCH_ADMIN_HEADERS,
    )
    assert status == 403

    _, body = get_my_access(dependencies, headers=ADMIN_HEADERS)
    assert body["data"]["access"]["roles"] == ["admin"]


def test_role_assign_requires_covering_every_granted_permission() -> None:
    dependencies = _build_dependencies()

    for role_name in ("super_admin", "manager"):
        status, body = post_role_assign(
            RoleAssignHttpRequest(user_id="member-user", role_name=role_name),
            dependencies,
            headers=ADMIN_HEADERS,
        )
        assert status == 403
        assert body["error"]["message"] == "Access denied."

    _, body = get_my_access(dependencies, headers=MEMBER_HEADERS)
    assert body["data"]["access"]["roles"] == ["member"]


def test_role_assign_rejects_unknown_role_and_revoke_unknown_assignment() -> None:
    dependencies = _build_dependencies()
    status, _ = post_role_assign(
        RoleAssignHttpRequest(user_id="member-user", role_name="wizard"),
        dependencies,
        headers=ADMIN_HEADERS,
    )
    assert status == 400

    status, _ = post_role_revoke(
        RoleRevokeHttpRequest(user_id="member-user", role_name="trainer"),
        dependencies,
        headers=ADMIN_HEADERS,
    )
    assert status == 400


def test_store_failure_maps_to_503() -> None:
    status, body = get_my_access(
        _build_dependencies(permission_provider=FailingProvider()),
        headers=ADMIN_HEADERS,
    )
    assert status == 503
    assert body["error"]["code"] == "PERMISSION_STORE_UNAVAILABLE"
