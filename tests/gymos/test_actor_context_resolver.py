from __future__ import annotations

import logging
import uuid

import pytest

from gymos.access.resolver import ActorContextResolver
from gymos.access.session import SessionPrincipal
from gymos.context.actor_context import ActorContext
from gymos.permissions import (
    GRANT_STATUS_INACTIVE,
    InMemoryPermissionProvider,
    Role,
    RoleAssignment,
    Unauthenticated,
    Unavailable,
)


TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-resolver-tenant")
OTHER_TENANT_ID = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-resolver-other-tenant")
BRANCH_A = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-resolver-branch-a")
BRANCH_B = uuid.uuid5(uuid.NAMESPACE_URL, "gymos-resolver-branch-b")

ROLES = (
    Role(name="manager", permissions=frozenset({"members.*", "reports.view"})),
    Role(name="staff", permissions=frozenset({"checkin.*", "members.view"})),
    Role(name="finance", permissions=frozenset({"finance.view"})),
)


class FailingProvider:
    def get_assignments_for_user(self, user_id, tenant_id):
        raise ConnectionError("store down")

    def get_role(self, role_name):
        raise ConnectionError("store down")


def _resolver(*assignments: RoleAssignment) -> ActorContextResolver:
    return ActorContextResolver(
        InMemoryPermissionProvider(roles=ROLES, assignments=assignments)
    )


def test_missing_principal_is_unauthenticated() -> None:
    with pytest.raises(Unauthenticated):
        _resolver().resolve(None)


def test_permissions_are_the_union_over_active_assignments() -> None:
    resolver = _resolver(
        RoleAssignment("u1", "manager", TENANT_ID, branch_id=BRANCH_A),
        RoleAssignment("u1", "staff", TENANT_ID, branch_id=BRANCH_A),
    )
    context = resolver.resolve(SessionPrincipal("u1", TENANT_ID))

    assert isinstance(context, ActorContext)
    assert context.permissions == frozenset(
        {"members.*", "reports.view", "checkin.*", "members.view"}
    )
    assert context.roles == ("manager", "staff")


def test_inactive_and_foreign_tenant_assignments_never_contribute() -> None:
    resolver = _resolver(
        RoleAssignment("u1", "staff", TENANT_ID),
        RoleAssignment("u1", "finance", TENANT_ID, status=GRANT_STATUS_INACTIVE),
        RoleAssignment("u1", "manager", OTHER_TENANT_ID),
    )
    context = resolver.resolve(SessionPrincipal("u1", TENANT_ID))

    assert context.permissions == frozenset({"checkin.*", "members.view"})
    assert context.roles == ("staff",)


def test_user_without_assignments_resolves_to_empty_permissions() -> None:
    context = _resolver().resolve(SessionPrincipal("nobody", TENANT_ID))
    assert context.permissions == frozenset()
    assert context.roles == ()
    assert context.branch_id is None
    assert context.tenant_wide is False
    assert context.branch_ids == ()
    assert context.can_access_branch(BRANCH_A) is False


def test_only_missing_roles_grant_no_branch_scope() -> None:
    context = _resolver(RoleAssignment("u1", "ghost", TENANT_ID)).resolve(
        SessionPrincipal("u1", TENANT_ID)
    )
    assert context.permissions == frozenset()
    assert context.tenant_wide is False
    assert context.can_access_branch(BRANCH_A) is False


def test_tenant_wide_assignment_wins_branch_precedence() -> None:
    resolver = _resolver(
        RoleAssignment("u1", "staff", TENANT_ID, branch_id=BRANCH_A),
        RoleAssignment("u1", "finance", TENANT_ID),
    )
    context = resolver.resolve(SessionPrincipal("u1", TENANT_ID))

    assert context.tenant_wide is True
    assert context.branch_id is None
    assert context.branch_ids == (BRANCH_A,)
    assert context.can_access_branch(BRANCH_B) is True


def test_branch_scoped_actor_gets_deterministic_default_branch() -> None:
    resolver = _resolver(
        RoleAssignment("u1", "staff", TENANT_ID, branch_id=BRANCH_B),
        RoleAssignment("u1", "manager", TENANT_ID, branch_id=BRANCH_A),
    )
    context = resolver.resolve(SessionPrincipal("u1", TENANT_ID))

    expected_branches = tuple(sorted((BRANCH_A, BRANCH_B), key=str))
    assert context.tenant_wide is False
    assert context.branch_ids == expected_branches
    assert context.branch_id == expected_branches[0]
    assert context.permissions == frozenset(
        {"members.*", "reports.view", "checkin.*", "members.view"}
    )


def test_missing_role_is_skipped_with_warning(caplog) -> None:
    resolver = _resolver(
        RoleAssignment("u1", "ghost", TENANT_ID),
        RoleAssignment("u1", "staff", TENANT_ID),
    )
    with caplog.at_level(logging.WARNING, logger="gymos.access"):
        context = resolver.resolve(SessionPrincipal("u1", TENANT_ID))

    assert context.permissions == frozenset({"checkin.*", "members.view"})
    assert "ghost" in caplog.text


def test_store_failure_surfaces_as_unavailable() -> None:
    resolver = ActorContextResolver(FailingProvider())
    with pytest.raises(Unavailable):
        resolver.resolve(SessionPrincipal("u1", TENANT_ID))


def test_resolution_reads_store_on_every_call() -> None:
    provider = InMemoryPermissionProvider(
        roles=ROLES,
        assignments=(RoleAssignment("u1", "staff", TENANT_ID),),
    )
    resolver = ActorContextResolver(provider)
    principal = SessionPrincipal("u1", TENANT_ID)
    assert resolver.resolve(principal).has_permission("finance.view") is False

    provider.upsert_assignment(RoleAssignment("u1", "finance", TENANT_ID))
    assert resolver.resolve(principal).has_permission("finance.view") is True

    provider.deactivate_assignment(user_id="u1", tenant_id=TENANT_ID, role_name="finance")
    assert resolver.resolve(principal).has_permission("finance.view") is False


def test_actor_context_serializes_sorted_permissions() -> None:
    context = ActorContext(
        user_id="u1",
        tenant_id=TENANT_ID,
        branch_id=BRANCH_A,
        permissions=frozenset({"members.view", "checkin.*"}),
        roles=("staff",),
        branch_ids=(BRANCH_A,),
        tenant_wide=False,
    )
    assert context.to_dict() == {
        "user_id": "u1",
        "tenant_id": str(TENANT_ID),
        "branch_id": str(BRANCH_A),
        "branch_ids": [str(BRANCH_A)],
        "tenant_wide": False,
        "roles": ["staff"],
        "permissions": ["checkin.*", "members.view"],
    }


def test_actor_context_rejects_branch_on_tenant_wide_context() -> None:
    with pytest.raises(ValueError):
        ActorContext(
            user_id="u1",
            tenant_id=TENANT_ID,
            branch_id=BRANCH_A,
            tenant_wide=True,
        )
