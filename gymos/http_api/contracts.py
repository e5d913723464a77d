"""
GymOS HTTP API - Contracts
==========================
Framework-agnostic request/response DTOs for access-control endpoints.

The tenant of every request comes from the session principal, never from
the request body.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class UserAccessReadRequest:
    user_id: str

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")


@dataclass(frozen=True)
class RoleAssignHttpRequest:
    user_id: str
    role_name: str
    branch_id: Optional[uuid.UUID] = None
    display_name: Optional[str] = None

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if not self.role_name or not isinstance(self.role_name, str):
            raise ValueError("role_name must be a non-empty string.")
        if self.branch_id is not None and not isinstance(self.branch_id, uuid.UUID):
            raise ValueError("branch_id must be UUID or None.")
        if self.display_name is not None and not isinstance(self.display_name, str):
            raise ValueError("display_name must be a string or None.")


@dataclass(frozen=True)
class RoleRevokeHttpRequest:
    user_id: str
    role_name: str
    branch_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if not self.role_name or not isinstance(self.role_name, str):
            raise ValueError("role_name must be a non-empty string.")
        if self.branch_id is not None and not isinstance(self.branch_id, uuid.UUID):
            raise ValueError("branch_id must be UUID or None.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            payload = {"ok": True, "data": self.data}
            if self.meta:
                payload["meta"] = dict(self.meta)
            return payload
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
