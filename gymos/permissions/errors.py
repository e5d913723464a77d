"""
GymOS Permissions - Access Errors
=================================
Terminal authorization outcomes raised by the resolver and the access gate.

Every error carries a stable machine code and the HTTP status a transport
maps it to. None of them is retried.
"""

from __future__ import annotations

from typing import Iterable


class AccessError(Exception):
    """Base error for access control decisions."""

    code = "ACCESS_ERROR"
    http_status = 500
    public_message = "Access check failed."


class Unauthenticated(AccessError):
    """No resolvable session/principal for the request."""

    code = "UNAUTHENTICATED"
    http_status = 401
    public_message = "Authentication required."

    def __init__(self, message: str = "Authentication required."):
        super().__init__(message)


class Forbidden(AccessError):
    """Authenticated actor lacks the required permission(s)."""

    code = "FORBIDDEN"
    http_status = 403
    public_message = "Access denied."

    def __init__(self, required_permissions: Iterable[str] | str):
        if isinstance(required_permissions, str):
            required_permissions = (required_permissions,)
        self.required_permissions = tuple(required_permissions)
        super().__init__(
            "Missing permission: "
            + (" | ".join(self.required_permissions) or "<none>")
        )

    @property
    def required_permission(self) -> str | None:
        if not self.required_permissions:
            return None
        return self.required_permissions[0]


class Unavailable(AccessError):
    """Role/permission store failed to answer; the gate fails closed."""

    code = "PERMISSION_STORE_UNAVAILABLE"
    http_status = 503
    public_message = "Authorization is temporarily unavailable."

    def __init__(self, message: str = "Permission store is unavailable."):
        super().__init__(message)
