"""
GymOS Navigation - Menu Node Variants
=====================================
Section (top-level grouping), Submenu (mid-level grouping) and MenuItem
(leaf). A node without declared permissions is visible to everyone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


def _require_label(label) -> None:
    if not label or not isinstance(label, str):
        raise ValueError("label must be a non-empty string.")


def _require_tuple(value, field_name: str) -> None:
    if not isinstance(value, tuple):
        raise ValueError(f"{field_name} must be a tuple.")


@dataclass(frozen=True)
class MenuItem:
    label: str
    href: Optional[str] = None
    permissions: tuple[str, ...] = field(default_factory=tuple)
    icon: Optional[str] = None

    def __post_init__(self):
        _require_label(self.label)
        _require_tuple(self.permissions, "permissions")


@dataclass(frozen=True)
class MenuSubmenu:
    label: str
    children: tuple["MenuNode", ...] = field(default_factory=tuple)
    permissions: tuple[str, ...] = field(default_factory=tuple)
    icon: Optional[str] = None

    def __post_init__(self):
        _require_label(self.label)
        _require_tuple(self.children, "children")
        _require_tuple(self.permissions, "permissions")


@dataclass(frozen=True)
class MenuSection:
    label: str
    children: tuple["MenuNode", ...] = field(default_factory=tuple)
    permissions: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        _require_label(self.label)
        _require_tuple(self.children, "children")
        _require_tuple(self.permissions, "permissions")


MenuNode = Union[MenuSection, MenuSubmenu, MenuItem]
