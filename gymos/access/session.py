"""
GymOS Access - Session Principal Lookup
=======================================
The session/auth provider is an upstream collaborator: it turns a bearer
token into {subject_id, tenant_id} or nothing. Credentials are never
inspected here beyond that lookup.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

HEADER_AUTHORIZATION = "authorization"
BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class SessionPrincipal:
    subject_id: str
    tenant_id: uuid.UUID

    def __post_init__(self):
        if not self.subject_id or not isinstance(self.subject_id, str):
            raise ValueError("subject_id must be a non-empty string.")
        if not isinstance(self.tenant_id, uuid.UUID):
            raise ValueError("tenant_id must be UUID.")


class SessionProvider(Protocol):
    def resolve_token(self, token: str) -> SessionPrincipal | None:
        ...


class InMemorySessionProvider:
    """
    Deterministic in-memory session provider for dev wiring/tests.
    """

    def __init__(
        self,
        token_to_principal: Mapping[str, SessionPrincipal] | None = None,
    ):
        normalized: dict[str, SessionPrincipal] = {}
        for token, principal in sorted(
            dict(token_to_principal or {}).items(),
            key=lambda item: item[0],
        ):
            if not isinstance(token, str) or not token.strip():
                raise ValueError("Session token must be a non-empty string.")
            if not isinstance(principal, SessionPrincipal):
                raise ValueError("Principal must be SessionPrincipal.")
            normalized[token] = principal
        self._token_to_principal = normalized

    def resolve_token(self, token: str) -> SessionPrincipal | None:
        if not isinstance(token, str):
            return None
        return self._token_to_principal.get(token)


def _normalize_headers(headers: Mapping[str, Any] | None) -> dict[str, str]:
    normalized: dict[str, str] = {}
    for key, value in (headers or {}).items():
        normalized[str(key).strip().lower()] = str(value).strip()
    return normalized


def extract_bearer_token(headers: Mapping[str, Any] | None) -> Optional[str]:
    raw = _normalize_headers(headers).get(HEADER_AUTHORIZATION)
    if not raw or not raw.lower().startswith(BEARER_PREFIX):
        return None
    token = raw[len(BEARER_PREFIX):].strip()
    return token or None


def resolve_session_principal(
    headers: Mapping[str, Any] | None,
    provider: SessionProvider,
) -> SessionPrincipal | None:
    token = extract_bearer_token(headers)
    if token is None:
        return None
    return provider.resolve_token(token)
