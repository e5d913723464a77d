"""
GymOS Access - Access Gate
==========================
Single enforcement choke-point for protected operations.

Callers run the gate first, before any mutation, and use the returned
ActorContext to scope their own queries by tenant_id/branch_id.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from gymos.access.resolver import ActorContextResolver
from gymos.access.session import SessionPrincipal
from gymos.context.actor_context import ActorContext
from gymos.permissions.errors import Forbidden
from gymos.permissions.evaluator import (
    has_all_permissions,
    has_any_permission,
    has_permission,
)

logger = logging.getLogger("gymos.access")


class AccessGate:
    def __init__(self, resolver: ActorContextResolver):
        if resolver is None:
            raise ValueError("resolver is required.")
        self._resolver = resolver

    @property
    def resolver(self) -> ActorContextResolver:
        return self._resolver

    def authenticate(self, principal: Optional[SessionPrincipal]) -> ActorContext:
        """Resolve the actor without any permission requirement."""
        return self._resolver.resolve(principal)

    def require_permission(
        self,
        principal: Optional[SessionPrincipal],
        required_permission: str,
    ) -> ActorContext:
        context = self._resolver.resolve(principal)
        if not has_permission(context.permissions, required_permission):
            self._deny(context, (required_permission,))
        return context

    def require_any_permission(
        self,
        principal: Optional[SessionPrincipal],
        required_alternatives: Iterable[str],
    ) -> ActorContext:
        alternatives = tuple(required_alternatives or ())
        context = self._resolver.resolve(principal)
        if not has_any_permission(context.permissions, alternatives):
            self._deny(context, alternatives)
        return context

    def require_all_permissions(
        self,
        principal: Optional[SessionPrincipal],
        required_permissions: Iterable[str],
    ) -> ActorContext:
        required = tuple(required_permissions or ())
        context = self._resolver.resolve(principal)
        if not has_all_permissions(context.permissions, required):
            self._deny(context, required)
        return context

    @staticmethod
    def _deny(context: ActorContext, required: tuple[str, ...]) -> None:
        logger.warning(
            f"Access denied for user '{context.user_id}' in tenant "
            f"'{context.tenant_id}': requires {list(required)}"
        )
        raise Forbidden(required)
