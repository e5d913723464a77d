"""
GymOS Django Adapter Views
==========================
Pass-through HTTP views over gymos/http_api handlers.
"""

from __future__ import annotations

import json
import uuid
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.decorators import headers_from_request, permission_required
from adapters.django_api.wiring import build_dependencies
from gymos.http_api.contracts import (
    RoleAssignHttpRequest,
    RoleRevokeHttpRequest,
    UserAccessReadRequest,
)
from gymos.http_api.errors import error_response, success_response
from gymos.http_api.handlers import (
    get_my_access,
    get_navigation,
    get_user_access,
    list_branches,
    list_permission_catalog,
    post_role_assign,
    post_role_revoke,
)
from gymos.permissions.actions import ACTION_PERMISSIONS, can_perform_action


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _parse_uuid(value: Any, field_name: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except Exception as exc:
        raise ValueError(f"{field_name} must be a valid UUID.") from exc


def _parse_optional_uuid(value: Any, field_name: str) -> uuid.UUID | None:
    if value is None or value == "":
        return None
    return _parse_uuid(value, field_name)


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _respond(result: tuple[int, dict[str, Any]]) -> JsonResponse:
    status, payload = result
    return JsonResponse(payload, status=status)


def _dispatch_read(read_handler, request: HttpRequest) -> JsonResponse:
    return _respond(
        read_handler(
            build_dependencies(),
            headers=headers_from_request(request),
        )
    )


def _dispatch_write(write_handler, request_contract_factory, request: HttpRequest):
    headers = headers_from_request(request)
    try:
        body = _parse_json_body(request)
        contract = request_contract_factory(
            body=body,
            branch_id=_parse_optional_uuid(body.get("branch_id"), "branch_id"),
        )
    except (ValueError, KeyError) as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)

    return _respond(
        write_handler(
            contract,
            build_dependencies(),
            headers=headers,
        )
    )


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _role_assign_contract_factory(*, body, branch_id):
    return RoleAssignHttpRequest(
        user_id=body["user_id"],
        role_name=body["role_name"],
        branch_id=branch_id,
        display_name=body.get("display_name"),
    )


def _role_revoke_contract_factory(*, body, branch_id):
    return RoleRevokeHttpRequest(
        user_id=body["user_id"],
        role_name=body["role_name"],
        branch_id=branch_id,
    )


@csrf_exempt
def my_access_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_my_access, request)


@csrf_exempt
def navigation_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_navigation, request)


@csrf_exempt
@permission_required()
def action_check_view(request: HttpRequest, action: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    if action not in ACTION_PERMISSIONS:
        return _json_error("UNKNOWN_ACTION", f"Unknown action '{action}'.", status=404)

    result = can_perform_action(request.actor_context.permissions, action)
    return JsonResponse(
        success_response(
            {
                "action": action,
                "can_access": result.can_access,
                "reason": result.reason,
            }
        )
    )


@csrf_exempt
def permission_catalog_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(list_permission_catalog, request)


@csrf_exempt
def branches_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(list_branches, request)


@csrf_exempt
def user_access_view(request: HttpRequest, user_id: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    try:
        contract = UserAccessReadRequest(user_id=user_id)
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    return _respond(
        get_user_access(
            contract,
            build_dependencies(),
            headers=headers_from_request(request),
        )
    )


@csrf_exempt
def roles_assign_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_role_assign, _role_assign_contract_factory, request)


@csrf_exempt
def roles_revoke_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(post_role_revoke, _role_revoke_contract_factory, request)
