"""
GymOS Context - Public API
==========================
"""

from gymos.context.actor_context import ActorContext
from gymos.context.scope import (
    filter_records_for_actor,
    is_record_visible,
    scope_queryset,
)

__all__ = [
    "ActorContext",
    "filter_records_for_actor",
    "is_record_visible",
    "scope_queryset",
]
