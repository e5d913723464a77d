from __future__ import annotations

import pytest

from gymos.navigation import (
    DEFAULT_NAVIGATION,
    MenuItem,
    MenuSection,
    MenuSubmenu,
    filter_menu_by_permissions,
    menu_to_dict,
)
from gymos.permissions.catalog import get_role_definition


DASHBOARDS = MenuSubmenu(
    label="Dashboards",
    children=(
        MenuItem("Manager Dashboard", "/dashboards/manager", ("dashboard.view",)),
        MenuItem("Staff Dashboard", "/dashboards/staff", ("attendance.view",)),
        MenuItem("Finance Dashboard", "/dashboards/finance", ("finance.view",)),
    ),
)


def _labels(nodes) -> list[str]:
    return [node.label for node in nodes]


def test_submenu_keeps_only_permitted_children_in_order() -> None:
    result = filter_menu_by_permissions((DASHBOARDS,), {"attendance.view"})

    assert len(result) == 1
    assert _labels(result[0].children) == ["Staff Dashboard"]


def test_submenu_without_visible_children_is_dropped() -> None:
    assert filter_menu_by_permissions((DASHBOARDS,), {"members.view"}) == ()


def test_permitted_section_without_visible_children_is_dropped() -> None:
    section = MenuSection(
        label="Reports",
        permissions=("reports.view",),
        children=(MenuItem("Finance Report", "/reports/finance", ("finance.view",)),),
    )
    assert filter_menu_by_permissions((section,), {"reports.view"}) == ()


def test_group_requirement_hides_group_even_with_visible_children() -> None:
    group = MenuSubmenu(
        label="Finance",
        permissions=("finance.view",),
        children=(MenuItem("Public", "/public"),),
    )
    assert filter_menu_by_permissions((group,), set()) == ()
    assert len(filter_menu_by_permissions((group,), {"finance.view"})) == 1


def test_group_with_alternative_requirements() -> None:
    group = MenuSubmenu(
        label="Inventory & Lockers",
        permissions=("inventory.view", "lockers.view"),
        children=(
            MenuItem("Inventory", "/apps/inventory", ("inventory.view",)),
            MenuItem("Lockers", "/apps/lockers", ("lockers.view",)),
        ),
    )
    result = filter_menu_by_permissions((group,), {"lockers.*"})
    assert _labels(result[0].children) == ["Lockers"]


def test_items_without_requirements_are_visible_to_everyone() -> None:
    nodes = (MenuItem("Help", "/help"), MenuItem("Secret", "/secret", ("x.view",)))
    assert _labels(filter_menu_by_permissions(nodes, set())) == ["Help"]


def test_sections_prune_recursively() -> None:
    section = MenuSection(
        label="Management",
        children=(
            MenuSubmenu(
                label="Reports",
                permissions=("reports.view",),
                children=(MenuItem("All Reports", "/apps/reports", ("reports.view",)),),
            ),
            MenuSubmenu(
                label="Finance",
                permissions=("finance.view",),
                children=(MenuItem("Payroll", "/apps/payroll", ("payroll.view",)),),
            ),
        ),
    )
    result = filter_menu_by_permissions((section,), {"reports.view", "finance.view"})
    assert _labels(result[0].children) == ["Reports"]


def test_global_wildcard_keeps_the_whole_default_tree() -> None:
    assert filter_menu_by_permissions(DEFAULT_NAVIGATION, {"*"}) == DEFAULT_NAVIGATION


def test_member_role_sees_portal_but_no_management() -> None:
    member = get_role_definition("member")
    result = filter_menu_by_permissions(DEFAULT_NAVIGATION, member.permissions)
    labels = _labels(result)

    assert "My Portal" in labels
    assert "Management" not in labels


def test_no_permissions_yields_empty_tree() -> None:
    assert filter_menu_by_permissions(DEFAULT_NAVIGATION, set()) == ()


def test_input_tree_is_not_mutated() -> None:
    before = menu_to_dict(DEFAULT_NAVIGATION)
    filter_menu_by_permissions(DEFAULT_NAVIGATION, {"members.view"})
    assert menu_to_dict(DEFAULT_NAVIGATION) == before


def test_menu_to_dict_tags_node_types() -> None:
    serialized = menu_to_dict(filter_menu_by_permissions((DASHBOARDS,), {"finance.view"}))
    assert serialized == [
        {
            "type": "submenu",
            "label": "Dashboards",
            "icon": None,
            "permissions": [],
            "children": [
                {
                    "type": "item",
                    "label": "Finance Dashboard",
                    "href": "/dashboards/finance",
                    "icon": None,
                    "permissions": ["finance.view"],
                }
            ],
        }
    ]


def test_unknown_node_type_raises() -> None:
    with pytest.raises(TypeError):
        filter_menu_by_permissions(("not a node",), {"*"})
