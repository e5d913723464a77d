"""
GymOS HTTP API - Framework-Agnostic Handlers
============================================
Pure handler functions over contracts and injected dependencies.

Every handler runs the access gate first, before any read or mutation, and
returns (status, body). Tenant and branch scoping always come from the
resolved ActorContext.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from gymos.access.session import resolve_session_principal
from gymos.context.actor_context import ActorContext
from gymos.context.scope import filter_records_for_actor
from gymos.http_api.contracts import (
    RoleAssignHttpRequest,
    RoleRevokeHttpRequest,
    UserAccessReadRequest,
)
from gymos.http_api.errors import (
    HandlerResult,
    access_error_response,
    error_response,
    success_response,
)
from gymos.navigation.default_menu import DEFAULT_NAVIGATION
from gymos.navigation.filter import filter_menu_by_permissions, menu_to_dict
from gymos.permissions.catalog import role_capabilities, role_display_name
from gymos.permissions.errors import AccessError, Forbidden
from gymos.permissions.evaluator import has_permission

logger = logging.getLogger("gymos.http")

PERMISSION_CATALOG_VIEW = "permissions.view"
PERMISSION_BRANCHES_VIEW = "branches.view"
PERMISSION_USERS_VIEW = "users.view"
PERMISSION_ROLES_MANAGE = "roles.manage"

USER_ACCESS_VIEW_ALTERNATIVES = (PERMISSION_USERS_VIEW, PERMISSION_CATALOG_VIEW)


def _require_any(
    dependencies,
    headers: Mapping[str, Any] | None,
    alternatives: Iterable[str],
) -> ActorContext:
    principal = resolve_session_principal(headers, dependencies.session_provider)
    return dependencies.access_gate.require_any_permission(principal, alternatives)


def _serialize_access(context: ActorContext) -> dict[str, Any]:
    data = context.to_dict()
    data["role_details"] = [
        {
            "name": role_name,
            "display_name": role_display_name(role_name),
            "capabilities": list(role_capabilities(role_name)),
        }
        for role_name in context.roles
    ]
    return data


def _handler_failure(message: str, exc: Exception) -> HandlerResult:
    logger.error(f"{message} ({type(exc).__name__}: {exc})", exc_info=True)
    return 500, error_response(
        code="HANDLER_EXECUTION_FAILED",
        message=message,
        details={"error_type": type(exc).__name__},
    )


def _invalid_request(exc: ValueError) -> HandlerResult:
    return 400, error_response(code="INVALID_REQUEST", message=str(exc), details={})


def _authorize_role_change(
    dependencies,
    context: ActorContext,
    *,
    role_name: str,
    branch_id,
) -> None:
    """
    Branch-scoped managers act only at their own branches, and nobody hands
    out a role carrying permissions they do not hold themselves.
    """
    if not context.tenant_wide and (
        branch_id is None or not context.can_access_branch(branch_id)
    ):
        logger.warning(
            f"User '{context.user_id}' may not change roles at branch "
            f"'{branch_id}' in tenant '{context.tenant_id}'"
        )
        raise Forbidden((PERMISSION_ROLES_MANAGE,))

    role = dependencies.access_gate.resolver.get_role(role_name)
    if role is None:
        return
    missing = sorted(
        permission
        for permission in role.permissions
        if not has_permission(context.permissions, permission)
    )
    if missing:
        logger.warning(
            f"User '{context.user_id}' may not change role '{role_name}': "
            f"lacks {missing}"
        )
        raise Forbidden(missing)


# ── Reads ─────────────────────────────────────────────────────


def get_my_access(
    dependencies,
    headers: Optional[Mapping[str, Any]] = None,
) -> HandlerResult:
    try:
        context = _require_any(dependencies, headers, ())
    except AccessError as exc:
        return access_error_response(exc)
    return 200, success_response({"access": _serialize_access(context)})


def get_navigation(
    dependencies,
    headers: Optional[Mapping[str, Any]] = None,
) -> HandlerResult:
    try:
        context = _require_any(dependencies, headers, ())
    except AccessError as exc:
        return access_error_response(exc)

    visible = filter_menu_by_permissions(DEFAULT_NAVIGATION, context.permissions)
    return 200, success_response({"navigation": menu_to_dict(visible)})


def list_permission_catalog(
    dependencies,
    headers: Optional[Mapping[str, Any]] = None,
) -> HandlerResult:
    try:
        _require_any(dependencies, headers, (PERMISSION_CATALOG_VIEW,))
    except AccessError as exc:
        return access_error_response(exc)

    try:
        permissions = dependencies.directory.list_permission_catalog()
    except Exception as exc:
        return _handler_failure("Failed to list permission catalog.", exc)
    return 200, success_response({"permissions": list(permissions)})


def list_branches(
    dependencies,
    headers: Optional[Mapping[str, Any]] = None,
) -> HandlerResult:
    try:
        context = _require_any(dependencies, headers, (PERMISSION_BRANCHES_VIEW,))
    except AccessError as exc:
        return access_error_response(exc)

    try:
        branches = dependencies.directory.list_branches(context.tenant_id)
    except ValueError as exc:
        return _invalid_request(exc)
    except Exception as exc:
        return _handler_failure("Failed to list branches.", exc)

    visible = filter_records_for_actor(branches, context)
    return 200, success_response({"branches": list(visible)})


def get_user_access(
    request: UserAccessReadRequest,
    dependencies,
    headers: Optional[Mapping[str, Any]] = None,
) -> HandlerResult:
    try:
        context = _require_any(dependencies, headers, USER_ACCESS_VIEW_ALTERNATIVES)
        target = dependencies.access_gate.resolver.resolve_for_user(
            request.user_id,
            context.tenant_id,
        )
    except AccessError as exc:
        return access_error_response(exc)
    return 200, success_response({"access": _serialize_access(target)})


# ── Writes ────────────────────────────────────────────────────


def post_role_assign(
    request: RoleAssignHttpRequest,
    dependencies,
    headers: Optional[Mapping[str, Any]] = None,
) -> HandlerResult:
    try:
        context = _require_any(dependencies, headers, (PERMISSION_ROLES_MANAGE,))
        _authorize_role_change(
            dependencies,
            context,
            role_name=request.role_name,
            branch_id=request.branch_id,
        )
    except AccessError as exc:
        return access_error_response(exc)

    try:
        assignment = dependencies.directory.assign_role(
            tenant_id=context.tenant_id,
            user_id=request.user_id,
            role_name=request.role_name,
            branch_id=request.branch_id,
            display_name=request.display_name,
        )
    except ValueError as exc:
        return _invalid_request(exc)
    except Exception as exc:
        return _handler_failure("Failed to assign role.", exc)

    logger.info(
        f"User '{context.user_id}' assigned role '{request.role_name}' to "
        f"'{request.user_id}' in tenant '{context.tenant_id}'"
    )
    return 200, success_response({"assignment": assignment})


def post_role_revoke(
    request: RoleRevokeHttpRequest,
    dependencies,
    headers: Optional[Mapping[str, Any]] = None,
) -> HandlerResult:
    try:
        context = _require_any(dependencies, headers, (PERMISSION_ROLES_MANAGE,))
        _authorize_role_change(
            dependencies,
            context,
            role_name=request.role_name,
            branch_id=request.branch_id,
        )
    except AccessError as exc:
        return access_error_response(exc)

    try:
        assignment = dependencies.directory.revoke_role(
            tenant_id=context.tenant_id,
            user_id=request.user_id,
            role_name=request.role_name,
            branch_id=request.branch_id,
        )
    except ValueError as exc:
        return _invalid_request(exc)
    except Exception as exc:
        return _handler_failure("Failed to revoke role.", exc)

    logger.info(
        f"User '{context.user_id}' revoked role '{request.role_name}' from "
        f"'{request.user_id}' in tenant '{context.tenant_id}'"
    )
    return 200, success_response({"assignment": assignment})
