"""Role-aware navigation filtering.

An item with neither ``permissions`` nor ``roles`` is always visible. ``None``
means the requirement is absent; an empty tuple is a requirement nobody meets
through that branch.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from app.core.permissions import (
    Permission,
    Role,
    has_all_permissions,
    has_any_permission,
    parse_role,
)


@dataclass(frozen=True)
class NavigationItem:
    title: str
    href: str
    icon: str | None = None
    permissions: tuple[Permission, ...] | None = None
    roles: tuple[Role, ...] | None = None
    children: tuple[NavigationItem, ...] = ()


def can_access_navigation_item(
    role: Role | str | None,
    item: NavigationItem,
    require_all: bool = False,
) -> bool:
    """Check if a role may see a navigation item (children not considered)."""
    if item.permissions is None and item.roles is None:
        return True

    role = parse_role(role)

    if item.roles is not None and role in item.roles:
        return True

    if item.permissions is not None:
        check = has_all_permissions if require_all else has_any_permission
        # all-of over an empty list is vacuously true; an explicit empty
        # requirement must not open the item up
        if item.permissions and check(role, item.permissions):
            return True

    return False


def filter_navigation(
    items: Iterable[NavigationItem],
    role: Role | str | None,
    *,
    require_all: bool = False,
    hide_empty_parents: bool = True,
) -> tuple[NavigationItem, ...]:
    """Return a new tree holding only the items ``role`` can access.

    Order is preserved and the input is never modified. Children are filtered
    before the parent is kept; with ``hide_empty_parents`` a parent whose
    children were all removed is dropped too.
    """
    role = parse_role(role)
    visible: list[NavigationItem] = []

    for item in items:
        if not can_access_navigation_item(role, item, require_all=require_all):
            continue

        if item.children:
            children = filter_navigation(
                item.children,
                role,
                require_all=require_all,
                hide_empty_parents=hide_empty_parents,
            )
            if not children and hide_empty_parents:
                continue
            item = replace(item, children=children)

        visible.append(item)

    return tuple(visible)
