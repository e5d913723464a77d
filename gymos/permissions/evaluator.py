"""
GymOS Permissions - Permission Evaluator
========================================
Pure allow/deny decision over an actor's permission set.

Matching order:
1. "*" in the held set allows everything.
2. Exact match (case-sensitive, verbatim).
3. Dot-segment wildcards, longest prefix first:
   members.profile.update -> members.profile.*, members.*

Requirement-as-wildcard is not a supported input: only a held "*"
short-circuits. Evaluation never raises and performs no I/O.
"""

from __future__ import annotations

from typing import Iterable

from gymos.permissions.constants import (
    PERMISSION_SEPARATOR,
    WILDCARD_ALL,
    WILDCARD_SEGMENT,
)


def _as_set(permissions: Iterable[str] | None) -> frozenset[str] | set[str]:
    if permissions is None:
        return frozenset()
    if isinstance(permissions, (set, frozenset)):
        return permissions
    if isinstance(permissions, str):
        return frozenset({permissions})
    return frozenset(permissions)


def wildcard_candidates(required: str) -> tuple[str, ...]:
    """
    Module wildcards that satisfy `required`, longest prefix first.
    """
    if not isinstance(required, str):
        return tuple()
    segments = required.split(PERMISSION_SEPARATOR)
    candidates: list[str] = []
    for length in range(len(segments) - 1, 0, -1):
        prefix = PERMISSION_SEPARATOR.join(segments[:length])
        candidates.append(f"{prefix}{PERMISSION_SEPARATOR}{WILDCARD_SEGMENT}")
    return tuple(candidates)


def has_permission(permissions: Iterable[str] | None, required: str) -> bool:
    held = _as_set(permissions)
    if WILDCARD_ALL in held:
        return True

    if required in held:
        return True

    for candidate in wildcard_candidates(required):
        if candidate in held:
            return True
    return False


def has_any_permission(
    permissions: Iterable[str] | None,
    required_alternatives: Iterable[str] | None,
) -> bool:
    """
    OR over alternatives. No declared requirement means any authenticated
    actor is allowed.
    """
    alternatives = tuple(required_alternatives or ())
    if not alternatives:
        return True
    held = _as_set(permissions)
    return any(has_permission(held, required) for required in alternatives)


def has_all_permissions(
    permissions: Iterable[str] | None,
    required: Iterable[str] | None,
) -> bool:
    requirements = tuple(required or ())
    held = _as_set(permissions)
    return all(has_permission(held, permission) for permission in requirements)
