"""
GymOS Django Adapter - View Guard
=================================
"""

from __future__ import annotations

from functools import wraps

from django.http import HttpRequest, JsonResponse

from adapters.django_api.wiring import build_dependencies
from gymos.access.session import resolve_session_principal
from gymos.http_api.errors import access_error_response
from gymos.permissions.errors import AccessError


def headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def permission_required(*permissions: str, require_all: bool = False):
    """
    Gate a Django view. With no permissions only authentication is needed;
    otherwise any one permission suffices unless require_all is set.

    The resolved ActorContext is stored on request.actor_context.
    """

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request: HttpRequest, *args, **kwargs):
            dependencies = build_dependencies()
            gate = dependencies.access_gate
            try:
                principal = resolve_session_principal(
                    headers_from_request(request),
                    dependencies.session_provider,
                )
                if require_all:
                    context = gate.require_all_permissions(principal, permissions)
                else:
                    context = gate.require_any_permission(principal, permissions)
            except AccessError as exc:
                status, body = access_error_response(exc)
                return JsonResponse(body, status=status)

            request.actor_context = context
            return view_func(request, *args, **kwargs)

        return _wrapped

    return decorator
