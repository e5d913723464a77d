"""
GymOS Access - Public API
=========================
Session lookup, actor context resolution and the access gate.
"""

from gymos.access.gate import AccessGate
from gymos.access.resolver import ActorContextResolver
from gymos.access.session import (
    InMemorySessionProvider,
    SessionPrincipal,
    SessionProvider,
    extract_bearer_token,
    resolve_session_principal,
)

__all__ = [
    "AccessGate",
    "ActorContextResolver",
    "SessionPrincipal",
    "SessionProvider",
    "InMemorySessionProvider",
    "extract_bearer_token",
    "resolve_session_principal",
]
