from __future__ import annotations

import uuid
from dataclasses import dataclass

from gymos.access import AccessGate, ActorContextResolver, SessionPrincipal
from gymos.context import ActorContext, filter_records_for_actor, is_record_visible
from gymos.permissions import InMemoryPermissionProvider, Role, RoleAssignment


TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-scope-tenant")
OTHER_TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-scope-other-tenant")
BRANCH_A = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-scope-branch-a")
BRANCH_B = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-scope-branch-b")


@dataclass(frozen=True)
class MemberRow:
    member_id: str
    tenant_id: uuid.UUID
    branch_id: uuid.UUID | None


MEMBERS = (
    MemberRow("m-a", TENANT_ID, BRANCH_A),
    MemberRow("m-b", TENANT_ID, BRANCH_B),
    MemberRow("m-tenant", TENANT_ID, None),
    MemberRow("m-foreign", OTHER_TENANT_ID, BRANCH_A),
)


def _context_for(assignment: RoleAssignment) -> ActorContext:
    provider = InMemoryPermissionProvider(
        roles=(Role(name="manager", permissions=frozenset({"members.*"})),),
        assignments=(assignment,),
    )
    gate = AccessGate(ActorContextResolver(provider))
    return gate.require_permission(
        SessionPrincipal(assignment.user_id, TENANT_ID),
        "members.view",
    )


def test_branch_manager_only_sees_own_branch_members() -> None:
    context = _context_for(RoleAssignment("mgr-a", "manager", TENANT_ID, branch_id=BRANCH_A))

    visible = filter_records_for_actor(MEMBERS, context)
    assert [row.member_id for row in visible] == ["m-a"]


def test_tenant_wide_manager_sees_every_member_of_the_tenant() -> None:
    context = _context_for(RoleAssignment("mgr-all", "manager", TENANT_ID))

    visible = filter_records_for_actor(MEMBERS, context)
    assert [row.member_id for row in visible] == ["m-a", "m-b", "m-tenant"]


def test_mapping_records_and_string_ids_are_supported() -> None:
    context = _context_for(RoleAssignment("mgr-b", "manager", TENANT_ID, branch_id=BRANCH_B))
    records = (
        {"tenant_id": str(TENANT_ID), "branch_id": str(BRANCH_B), "name": "Annex"},
        {"tenant_id": str(TENANT_ID), "branch_id": str(BRANCH_A), "name": "Main"},
        {"name": "no tenant"},
    )

    visible = filter_records_for_actor(records, context)
    assert [record["name"] for record in visible] == ["Annex"]


def test_custom_field_names() -> None:
    context = _context_for(RoleAssignment("mgr-a", "manager", TENANT_ID, branch_id=BRANCH_A))
    record = {"gym": TENANT_ID, "location": BRANCH_A}
    assert is_record_visible(record, context, tenant_field="gym", branch_field="location")
    assert not is_record_visible(record, context)


def test_actor_without_grants_sees_no_branch_records() -> None:
    provider = InMemoryPermissionProvider(
        roles=(Role(name="manager", permissions=frozenset({"members.*"})),),
    )
    gate = AccessGate(ActorContextResolver(provider))
    context = gate.require_any_permission(SessionPrincipal("nobody", TENANT_ID), ())

    assert context.tenant_wide is False
    assert filter_records_for_actor(MEMBERS, context) == ()
