"""
GymOS Identity Store - Deterministic Service Layer
==================================================
DB-backed seeding and identity administration used by the management
command, the DB directory and tests.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import Any

from django.db import IntegrityError, transaction

from gymos.identity_store.models import (
    Branch,
    Role,
    RoleAssignment,
    RoleAssignmentStatus,
    Tenant,
    User,
)
from gymos.permissions.catalog import (
    DEFAULT_ROLE_DEFINITIONS,
    PERMISSION_CATALOG,
    PermissionDefinition,
    RoleDefinition,
)
from gymos.permissions_store.models import Permission, RolePermission

logger = logging.getLogger("gymos.identity")


def _clean_string(value: Any, *, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{field_name} must be a non-empty string.")
    return cleaned


def _clean_optional_string(value: Any, *, default: str) -> str:
    if value is None:
        return default
    cleaned = str(value).strip()
    return cleaned or default


def _canonical_uuid(value: Any, *, field_name: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value).strip())
    except Exception as exc:
        raise ValueError(f"{field_name} must be a valid UUID.") from exc


def _canonical_optional_uuid(value: Any, *, field_name: str) -> uuid.UUID | None:
    if value is None:
        return None
    return _canonical_uuid(value, field_name=field_name)


def _deterministic_uuid(seed: str) -> uuid.UUID:
    return uuid.uuid5(uuid.NAMESPACE_URL, seed)


def _deterministic_role_id(role_name: str) -> uuid.UUID:
    return _deterministic_uuid(f"gymos.identity.role:{role_name}")


def _deterministic_branch_id(
    *,
    tenant_id: uuid.UUID,
    branch_name: str,
    index: int,
) -> uuid.UUID:
    return _deterministic_uuid(
        f"gymos.identity.branch:{tenant_id}:{index}:{branch_name.upper()}"
    )


def _deterministic_assignment_id(
    *,
    tenant_id: uuid.UUID,
    branch_id: uuid.UUID | None,
    user_id: str,
    role_id: uuid.UUID,
) -> uuid.UUID:
    branch_token = str(branch_id) if branch_id is not None else "TENANT"
    return _deterministic_uuid(
        f"gymos.identity.assignment:{tenant_id}:{branch_token}:{user_id}:{role_id}"
    )


# ── Serializers ───────────────────────────────────────────────


def serialize_tenant(tenant: Tenant) -> dict[str, Any]:
    return {
        "tenant_id": str(tenant.tenant_id),
        "name": tenant.name,
    }


def serialize_branch(branch: Branch) -> dict[str, Any]:
    return {
        "branch_id": str(branch.branch_id),
        "tenant_id": str(branch.tenant_id),
        "name": branch.name,
        "timezone": branch.timezone,
    }


def serialize_role(role: Role, *, permissions: tuple[str, ...]) -> dict[str, Any]:
    return {
        "role_id": str(role.role_id),
        "name": role.name,
        "description": role.description,
        "is_system": role.is_system,
        "permissions": tuple(permissions),
    }


def serialize_role_assignment(assignment: RoleAssignment) -> dict[str, Any]:
    return {
        "id": str(assignment.id),
        "tenant_id": str(assignment.tenant_id),
        "branch_id": None if assignment.branch_id is None else str(assignment.branch_id),
        "user_id": assignment.user_id,
        "role_id": str(assignment.role_id),
        "role_name": assignment.role.name,
        "status": assignment.status,
    }


# ── Permission catalog seeding ────────────────────────────────


def _upsert_permission(definition: PermissionDefinition) -> Permission:
    permission, created = Permission.objects.get_or_create(
        name=definition.name,
        defaults={
            "description": definition.description,
            "module": definition.module,
            "action": definition.action,
        },
    )
    if created:
        return permission

    update_fields: list[str] = []
    for field_name in ("description", "module", "action"):
        value = getattr(definition, field_name)
        if getattr(permission, field_name) != value:
            setattr(permission, field_name, value)
            update_fields.append(field_name)
    if update_fields:
        permission.save(update_fields=update_fields)
    return permission


def _upsert_role(definition: RoleDefinition) -> Role:
    role, created = Role.objects.get_or_create(
        name=definition.name,
        defaults={
            "role_id": _deterministic_role_id(definition.name),
            "description": definition.description,
            "is_system": definition.is_system,
        },
    )
    if created:
        return role

    update_fields: list[str] = []
    if role.description != definition.description:
        role.description = definition.description
        update_fields.append("description")
    if role.is_system != definition.is_system:
        role.is_system = definition.is_system
        update_fields.append("is_system")
    if update_fields:
        update_fields.append("updated_at")
        role.save(update_fields=update_fields)
    return role


def _sync_role_permissions(
    *,
    role: Role,
    permission_names: Iterable[str],
    permissions_by_name: Mapping[str, Permission],
) -> tuple[str, ...]:
    desired = set()
    for permission_name in permission_names:
        if permission_name not in permissions_by_name:
            raise ValueError(
                f"role '{role.name}' references permission '{permission_name}' "
                "which is not in the permission catalog."
            )
        desired.add(permission_name)

    RolePermission.objects.filter(role=role).exclude(
        permission__name__in=desired
    ).delete()
    for permission_name in sorted(desired):
        RolePermission.objects.get_or_create(
            role=role,
            permission=permissions_by_name[permission_name],
        )
    return tuple(sorted(desired))


def seed_roles_and_permissions(
    *,
    permission_catalog: Iterable[PermissionDefinition] = PERMISSION_CATALOG,
    role_definitions: Iterable[RoleDefinition] = DEFAULT_ROLE_DEFINITIONS,
) -> dict[str, Any]:
    """
    Idempotently upsert the permission catalog and default roles.

    A seeded role's permission set is replaced by its definition.
    """
    with transaction.atomic():
        permissions_by_name = {
            definition.name: _upsert_permission(definition)
            for definition in permission_catalog
        }

        seeded_roles: list[dict[str, Any]] = []
        for definition in role_definitions:
            role = _upsert_role(definition)
            permission_names = _sync_role_permissions(
                role=role,
                permission_names=definition.permissions,
                permissions_by_name=permissions_by_name,
            )
            seeded_roles.append(serialize_role(role, permissions=permission_names))

    logger.info(
        f"Seeded {len(permissions_by_name)} permissions and "
        f"{len(seeded_roles)} roles"
    )
    return {
        "permissions": tuple(sorted(permissions_by_name)),
        "roles": tuple(seeded_roles),
    }


# ── Tenant bootstrap ──────────────────────────────────────────


def _normalize_branch_specs(
    *,
    tenant_id: uuid.UUID,
    branches: Iterable[Mapping[str, Any]] | None,
) -> tuple[dict[str, Any], ...]:
    if branches is None:
        branches = ({"name": "MAIN", "timezone": "UTC"},)

    if isinstance(branches, (str, bytes)):
        raise ValueError("branches must be a list/tuple of objects.")

    normalized: dict[uuid.UUID, dict[str, Any]] = {}
    for index, raw in enumerate(branches):
        if not isinstance(raw, Mapping):
            raise ValueError("branches items must be objects.")
        branch_name = _clean_string(
            raw.get("name"),
            field_name=f"branches[{index}].name",
        )
        raw_branch_id = raw.get("branch_id")
        if raw_branch_id is None:
            branch_id = _deterministic_branch_id(
                tenant_id=tenant_id,
                branch_name=branch_name,
                index=index,
            )
        else:
            branch_id = _canonical_uuid(
                raw_branch_id,
                field_name=f"branches[{index}].branch_id",
            )
        normalized.setdefault(
            branch_id,
            {
                "branch_id": branch_id,
                "name": branch_name,
                "timezone": _clean_optional_string(raw.get("timezone"), default="UTC"),
            },
        )
    return tuple(sorted(normalized.values(), key=lambda item: str(item["branch_id"])))


def _upsert_tenant(*, tenant_id: uuid.UUID, name: str) -> Tenant:
    tenant, created = Tenant.objects.get_or_create(
        tenant_id=tenant_id,
        defaults={"name": name},
    )
    if not created and tenant.name != name:
        tenant.name = name
        tenant.save(update_fields=["name", "updated_at"])
    return tenant


def _upsert_branch(
    *,
    tenant: Tenant,
    branch_id: uuid.UUID,
    name: str,
    timezone_value: str,
) -> Branch:
    branch, created = Branch.objects.get_or_create(
        branch_id=branch_id,
        defaults={
            "tenant": tenant,
            "name": name,
            "timezone": timezone_value,
        },
    )
    if created:
        return branch

    if branch.tenant_id != tenant.tenant_id:
        raise ValueError("branch_id already belongs to a different tenant.")

    update_fields: list[str] = []
    if branch.name != name:
        branch.name = name
        update_fields.append("name")
    if branch.timezone != timezone_value:
        branch.timezone = timezone_value
        update_fields.append("timezone")
    if update_fields:
        update_fields.append("updated_at")
        branch.save(update_fields=update_fields)
    return branch


def bootstrap_tenant(
    *,
    tenant_id: uuid.UUID | str,
    name: str,
    branches: Iterable[Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    canonical_tenant_id = _canonical_uuid(tenant_id, field_name="tenant_id")
    tenant_name = _clean_string(name, field_name="name")
    branch_specs = _normalize_branch_specs(
        tenant_id=canonical_tenant_id,
        branches=branches,
    )

    with transaction.atomic():
        tenant = _upsert_tenant(tenant_id=canonical_tenant_id, name=tenant_name)
        stored_branches = tuple(
            _upsert_branch(
                tenant=tenant,
                branch_id=spec["branch_id"],
                name=spec["name"],
                timezone_value=spec["timezone"],
            )
            for spec in branch_specs
        )

    logger.info(
        f"Bootstrapped tenant '{canonical_tenant_id}' with "
        f"{len(stored_branches)} branches"
    )
    return {
        "tenant": serialize_tenant(tenant),
        "branches": tuple(serialize_branch(branch) for branch in stored_branches),
    }


# ── Role assignment ───────────────────────────────────────────


def _resolve_tenant(tenant_id: uuid.UUID | str) -> Tenant:
    canonical_tenant_id = _canonical_uuid(tenant_id, field_name="tenant_id")
    tenant = Tenant.objects.filter(tenant_id=canonical_tenant_id).first()
    if tenant is None:
        raise ValueError(f"tenant_id '{canonical_tenant_id}' was not found.")
    return tenant


def _resolve_branch_for_tenant(
    *,
    tenant: Tenant,
    branch_id: uuid.UUID | str | None,
) -> Branch | None:
    canonical_branch_id = _canonical_optional_uuid(branch_id, field_name="branch_id")
    if canonical_branch_id is None:
        return None

    branch = Branch.objects.filter(
        branch_id=canonical_branch_id,
        tenant_id=tenant.tenant_id,
    ).first()
    if branch is None:
        raise ValueError(
            f"branch_id '{canonical_branch_id}' is not in tenant '{tenant.tenant_id}'."
        )
    return branch


def _resolve_role(role_name: str) -> Role:
    normalized_role_name = _clean_string(role_name, field_name="role_name")
    role = Role.objects.filter(name=normalized_role_name).first()
    if role is None:
        raise ValueError(f"role_name '{normalized_role_name}' was not found.")
    return role


def _get_or_create_user(*, user_id: str, display_name: str | None) -> User:
    normalized_user_id = _clean_string(user_id, field_name="user_id")
    user, created = User.objects.get_or_create(
        user_id=normalized_user_id,
        defaults={
            "display_name": _clean_optional_string(
                display_name, default=normalized_user_id
            ),
        },
    )
    if not created and display_name is not None:
        cleaned = _clean_optional_string(display_name, default=user.display_name)
        if cleaned != user.display_name:
            user.display_name = cleaned
            user.save(update_fields=["display_name", "updated_at"])
    return user


def _upsert_assignment(
    *,
    tenant: Tenant,
    branch: Branch | None,
    user: User,
    role: Role,
    status: str,
) -> RoleAssignment:
    qs = RoleAssignment.objects.filter(
        tenant=tenant,
        branch=branch,
        user=user,
        role=role,
    ).order_by("id")
    assignment = qs.first()
    if assignment is None:
        try:
            assignment = RoleAssignment.objects.create(
                id=_deterministic_assignment_id(
                    tenant_id=tenant.tenant_id,
                    branch_id=None if branch is None else branch.branch_id,
                    user_id=user.user_id,
                    role_id=role.role_id,
                ),
                tenant=tenant,
                branch=branch,
                user=user,
                role=role,
                status=status,
            )
        except IntegrityError:
            assignment = qs.first()
            if assignment is None:
                raise

    if assignment.status != status:
        assignment.status = status
        assignment.save(update_fields=["status", "updated_at"])
    return assignment


def assign_role(
    *,
    tenant_id: uuid.UUID | str,
    user_id: str,
    role_name: str,
    branch_id: uuid.UUID | str | None = None,
    display_name: str | None = None,
) -> dict[str, Any]:
    with transaction.atomic():
        tenant = _resolve_tenant(tenant_id)
        branch = _resolve_branch_for_tenant(tenant=tenant, branch_id=branch_id)
        role = _resolve_role(role_name)
        user = _get_or_create_user(user_id=user_id, display_name=display_name)
        assignment = _upsert_assignment(
            tenant=tenant,
            branch=branch,
            user=user,
            role=role,
            status=RoleAssignmentStatus.ACTIVE,
        )

    logger.info(
        f"Assigned role '{role.name}' to user '{user.user_id}' in tenant "
        f"'{tenant.tenant_id}' (branch={assignment.branch_id})"
    )
    return serialize_role_assignment(assignment)


def revoke_role(
    *,
    tenant_id: uuid.UUID | str,
    user_id: str,
    role_name: str,
    branch_id: uuid.UUID | str | None = None,
) -> dict[str, Any]:
    with transaction.atomic():
        tenant = _resolve_tenant(tenant_id)
        branch = _resolve_branch_for_tenant(tenant=tenant, branch_id=branch_id)
        role = _resolve_role(role_name)
        normalized_user_id = _clean_string(user_id, field_name="user_id")
        assignment = (
            RoleAssignment.objects.filter(
                tenant=tenant,
                branch=branch,
                user_id=normalized_user_id,
                role=role,
            )
            .select_related("role")
            .first()
        )
        if assignment is None:
            raise ValueError(
                f"user '{normalized_user_id}' has no '{role.name}' assignment "
                "for the requested scope."
            )
        if assignment.status != RoleAssignmentStatus.INACTIVE:
            assignment.status = RoleAssignmentStatus.INACTIVE
            assignment.save(update_fields=["status", "updated_at"])

    logger.info(
        f"Revoked role '{role.name}' from user '{normalized_user_id}' in tenant "
        f"'{tenant.tenant_id}' (branch={assignment.branch_id})"
    )
    return serialize_role_assignment(assignment)


# ── Reads ─────────────────────────────────────────────────────


def list_branches_for_tenant(tenant_id: uuid.UUID | str) -> tuple[dict[str, Any], ...]:
    tenant = _resolve_tenant(tenant_id)
    rows = Branch.objects.filter(tenant=tenant).order_by("branch_id")
    return tuple(serialize_branch(row) for row in rows)


def list_role_assignments_for_tenant(
    tenant_id: uuid.UUID | str,
) -> tuple[dict[str, Any], ...]:
    tenant = _resolve_tenant(tenant_id)
    rows = (
        RoleAssignment.objects.filter(tenant=tenant)
        .select_related("role")
        .order_by("user_id", "branch_id", "role__name", "id")
    )
    return tuple(serialize_role_assignment(row) for row in rows)


def list_permission_catalog() -> tuple[dict[str, Any], ...]:
    assigned_to: dict[int, list[str]] = defaultdict(list)
    for permission_id, role_name in (
        RolePermission.objects.order_by("role__name")
        .values_list("permission_id", "role__name")
    ):
        assigned_to[permission_id].append(role_name)

    return tuple(
        {
            "name": permission.name,
            "description": permission.description,
            "module": permission.module,
            "action": permission.action,
            "assigned_to": tuple(assigned_to.get(permission.id, ())),
        }
        for permission in Permission.objects.order_by("name")
    )


def get_user_permissions(
    *,
    user_id: str,
    tenant_id: uuid.UUID | str,
    branch_id: uuid.UUID | str | None = None,
) -> tuple[str, ...]:
    """
    Sorted permission union over the user's active assignments. With a
    branch_id only assignments made at that branch contribute.
    """
    normalized_user_id = _clean_string(user_id, field_name="user_id")
    canonical_tenant_id = _canonical_uuid(tenant_id, field_name="tenant_id")
    canonical_branch_id = _canonical_optional_uuid(branch_id, field_name="branch_id")

    assignments = RoleAssignment.objects.filter(
        user_id=normalized_user_id,
        tenant_id=canonical_tenant_id,
        status=RoleAssignmentStatus.ACTIVE,
    )
    if canonical_branch_id is not None:
        assignments = assignments.filter(branch_id=canonical_branch_id)

    names = RolePermission.objects.filter(
        role_id__in=assignments.values("role_id")
    ).values_list("permission__name", flat=True)
    return tuple(sorted(set(names)))
