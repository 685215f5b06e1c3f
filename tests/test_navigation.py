import copy

import pytest

from app.core.permissions import Permission, Role
from app.data.navigation import (
    ADMIN_NAVIGATION,
    DASHBOARD_NAVIGATION,
    STAFF_NAVIGATION,
    STUDENT_NAVIGATION,
)
from app.domain.navigation import (
    NavigationItem,
    can_access_navigation_item,
    filter_navigation,
)


def flatten_hrefs(items):
    hrefs = []
    for item in items:
        hrefs.append(item.href)
        hrefs.extend(flatten_hrefs(item.children))
    return hrefs


OPEN = NavigationItem("Help", "/help")
READ_BOOKINGS = NavigationItem("Bookings", "/bookings", permissions=(Permission.BOOKINGS_READ,))
ADMIN_ROLE_ONLY = NavigationItem("Users", "/users", roles=(Role.ADMIN,))
EMPTY_REQUIREMENT = NavigationItem("Nobody", "/nobody", permissions=())

TOOLS = NavigationItem(
    "Tools",
    "/tools",
    children=(
        NavigationItem("Purge", "/tools/purge", permissions=(Permission.ADMIN_DELETE,)),
        NavigationItem("Audit", "/tools/audit", permissions=(Permission.AUDIT_READ,)),
    ),
)


def test_item_without_requirements_is_visible_to_everyone():
    for role in Role:
        assert can_access_navigation_item(role, OPEN)


def test_role_match_grants_access():
    assert can_access_navigation_item(Role.ADMIN, ADMIN_ROLE_ONLY)
    assert not can_access_navigation_item(Role.SUPER_ADMIN, ADMIN_ROLE_ONLY)


def test_explicit_empty_permission_list_grants_nothing():
    assert not can_access_navigation_item(Role.SUPER_ADMIN, EMPTY_REQUIREMENT)
    assert not can_access_navigation_item(Role.SUPER_ADMIN, EMPTY_REQUIREMENT, require_all=True)


def test_require_all_tightens_the_check():
    item = NavigationItem(
        "Approvals", "/approvals", permissions=(Permission.BOOKINGS_READ, Permission.BOOKINGS_APPROVE)
    )
    assert can_access_navigation_item(Role.STAFF, item)
    assert not can_access_navigation_item(Role.STAFF, item, require_all=True)
    assert can_access_navigation_item(Role.HOSTEL_ADMIN, item, require_all=True)


def test_filter_keeps_order():
    items = (READ_BOOKINGS, OPEN, ADMIN_ROLE_ONLY)
    assert [i.title for i in filter_navigation(items, Role.STUDENT)] == ["Bookings", "Help"]
    assert [i.title for i in filter_navigation(items, Role.ADMIN)] == ["Bookings", "Help", "Users"]


def test_no_access_role_sees_only_open_items():
    visible = filter_navigation(STUDENT_NAVIGATION, Role.NONE)
    assert all(item.permissions is None and item.roles is None for item in visible)
    assert "/student/bookings" not in flatten_hrefs(visible)


def test_parent_whose_children_are_all_removed_is_hidden():
    assert filter_navigation((TOOLS, OPEN), Role.STUDENT) == (OPEN,)


def test_empty_parent_can_be_kept():
    visible = filter_navigation((TOOLS,), Role.STUDENT, hide_empty_parents=False)
    assert len(visible) == 1
    assert visible[0].children == ()


def test_leaf_without_children_is_not_an_empty_parent():
    assert filter_navigation((OPEN,), Role.NONE) == (OPEN,)


def test_children_are_filtered_independently_of_parent():
    visible = filter_navigation((TOOLS,), Role.ADMIN)
    assert [child.title for child in visible[0].children] == ["Purge", "Audit"]
    visible = filter_navigation((TOOLS,), Role.HOSTEL_ADMIN)
    assert visible == ()


def test_filter_does_not_mutate_input():
    before = copy.deepcopy(ADMIN_NAVIGATION)
    filter_navigation(ADMIN_NAVIGATION, Role.STUDENT)
    assert ADMIN_NAVIGATION == before


@pytest.mark.parametrize("dashboard", sorted(DASHBOARD_NAVIGATION))
@pytest.mark.parametrize("role", list(Role))
def test_filter_is_idempotent(dashboard, role):
    once = filter_navigation(DASHBOARD_NAVIGATION[dashboard], role)
    assert filter_navigation(once, role) == once


def test_staff_navigation_hides_allocations():
    hrefs = flatten_hrefs(filter_navigation(STAFF_NAVIGATION, Role.STAFF))
    assert "/staff/bookings" in hrefs
    assert "/staff/allocations" not in hrefs
    assert "/staff/settings" not in hrefs


def test_admin_operations_menu_for_accountant():
    visible = filter_navigation(ADMIN_NAVIGATION, Role.ACCOUNTANT)
    operations = next(item for item in visible if item.title == "Operations")
    assert [child.title for child in operations.children] == ["Bookings", "Payments", "Refunds"]
    assert "/admin/security" not in flatten_hrefs(visible)


def test_hostel_admin_does_not_see_security():
    hrefs = flatten_hrefs(filter_navigation(ADMIN_NAVIGATION, Role.HOSTEL_ADMIN))
    assert "/admin/security" not in hrefs
    assert "/admin/security/audit" not in hrefs
    assert "/admin/staff" in hrefs


def test_super_admin_sees_whole_admin_tree():
    visible = filter_navigation(ADMIN_NAVIGATION, Role.SUPER_ADMIN)
    assert flatten_hrefs(visible) == flatten_hrefs(ADMIN_NAVIGATION)
