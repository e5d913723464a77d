"""
GymOS Navigation - Permission Filter
====================================
Depth-first pruning of a navigation tree. Groups are dropped when their own
requirement fails or when none of their children survive. Sibling order is
preserved and the input tree is never mutated.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Optional

from gymos.navigation.models import MenuItem, MenuNode, MenuSection, MenuSubmenu
from gymos.permissions.evaluator import has_any_permission


def _filter_node(node: MenuNode, permissions: frozenset[str]) -> Optional[MenuNode]:
    if isinstance(node, (MenuSection, MenuSubmenu)):
        children = filter_menu_by_permissions(node.children, permissions)
        if not has_any_permission(permissions, node.permissions):
            return None
        if not children:
            return None
        return dataclasses.replace(node, children=children)

    if isinstance(node, MenuItem):
        if not has_any_permission(permissions, node.permissions):
            return None
        return node

    raise TypeError(f"Unsupported menu node type: {type(node).__name__}.")


def filter_menu_by_permissions(
    nodes: Iterable[MenuNode],
    permissions: Iterable[str],
) -> tuple[MenuNode, ...]:
    held = frozenset(permissions or ())
    filtered: list[MenuNode] = []
    for node in nodes:
        kept = _filter_node(node, held)
        if kept is not None:
            filtered.append(kept)
    return tuple(filtered)


def menu_to_dict(nodes: Iterable[MenuNode]) -> list[dict[str, Any]]:
    serialized: list[dict[str, Any]] = []
    for node in nodes:
        if isinstance(node, MenuSection):
            serialized.append(
                {
                    "type": "section",
                    "label": node.label,
                    "permissions": list(node.permissions),
                    "children": menu_to_dict(node.children),
                }
            )
        elif isinstance(node, MenuSubmenu):
            serialized.append(
                {
                    "type": "submenu",
                    "label": node.label,
                    "icon": node.icon,
                    "permissions": list(node.permissions),
                    "children": menu_to_dict(node.children),
                }
            )
        else:
            serialized.append(
                {
                    "type": "item",
                    "label": node.label,
                    "href": node.href,
                    "icon": node.icon,
                    "permissions": list(node.permissions),
                }
            )
    return serialized
