"""
GymOS HTTP API - Error Mapping
==============================
Stable transport mapping for access decisions and handler failures.
"""

from __future__ import annotations

from typing import Any, Optional

from gymos.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from gymos.permissions.errors import AccessError

HandlerResult = tuple[int, dict[str, Any]]


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def access_error_response(exc: AccessError) -> HandlerResult:
    """
    Map an access decision to (status, body).

    Denials only carry the generic public message; the required permission
    stays in the server log.
    """
    return exc.http_status, error_response(
        code=exc.code,
        message=exc.public_message,
        details={},
    )
