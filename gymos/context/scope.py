"""
GymOS Context - Tenant/Branch Query Scoping
===========================================
Downstream helpers that narrow data access to the values handed back by
the access gate. The gate itself never filters data.

Doctrine: a record from another tenant is never returned, and a
branch-scoped actor only sees records of its own branches.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, TypeVar

from gymos.context.actor_context import ActorContext

T = TypeVar("T")

_MISSING = object()


def _field_value(record: Any, field_name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field_name, _MISSING)
    return getattr(record, field_name, _MISSING)


def _same_id(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is right
    return str(left) == str(right)


def is_record_visible(
    record: Any,
    actor_context: ActorContext,
    *,
    tenant_field: str = "tenant_id",
    branch_field: str = "branch_id",
) -> bool:
    tenant_value = _field_value(record, tenant_field)
    if tenant_value is _MISSING or not _same_id(tenant_value, actor_context.tenant_id):
        return False

    if actor_context.tenant_wide:
        return True

    branch_value = _field_value(record, branch_field)
    if branch_value is _MISSING or branch_value is None:
        return False
    return any(_same_id(branch_value, branch_id) for branch_id in actor_context.branch_ids)


def filter_records_for_actor(
    records: Iterable[T],
    actor_context: ActorContext,
    *,
    tenant_field: str = "tenant_id",
    branch_field: str = "branch_id",
) -> tuple[T, ...]:
    return tuple(
        record
        for record in records
        if is_record_visible(
            record,
            actor_context,
            tenant_field=tenant_field,
            branch_field=branch_field,
        )
    )


def scope_queryset(
    queryset,
    actor_context: ActorContext,
    *,
    tenant_field: str = "tenant_id",
    branch_field: str = "branch_id",
):
    """
    Narrow a Django queryset to the actor's tenant and branches.
    """
    scoped = queryset.filter(**{tenant_field: actor_context.tenant_id})
    if actor_context.tenant_wide:
        return scoped
    return scoped.filter(**{f"{branch_field}__in": list(actor_context.branch_ids)})
