"""
GymOS Navigation - Public API
=============================
"""

from gymos.navigation.default_menu import DEFAULT_NAVIGATION
from gymos.navigation.filter import filter_menu_by_permissions, menu_to_dict
from gymos.navigation.models import MenuItem, MenuNode, MenuSection, MenuSubmenu

__all__ = [
    "MenuSection",
    "MenuSubmenu",
    "MenuItem",
    "MenuNode",
    "DEFAULT_NAVIGATION",
    "filter_menu_by_permissions",
    "menu_to_dict",
]
