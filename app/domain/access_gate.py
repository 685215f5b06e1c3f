"""Render-or-fallback gating for protected dashboard sections."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.core.permissions import (
    ADMIN_ROLES,
    STAFF_ROLES,
    Permission,
    Role,
    has_all_permissions,
    has_any_permission,
    parse_role,
)

ACCESS_DENIED = {
    "title": "Access Denied",
    "message": "You don't have permission to access this content.",
}


class PermissionGate:
    """Decide whether a protected section is shown to a role.

    A matching role wins first. Otherwise the permission list is checked
    (any-of, or all-of with ``require_all``). A gate with no requirement at
    all lets everyone through. Nothing is cached: every call re-evaluates
    against the role it is given.
    """

    def __init__(
        self,
        permission: Permission | str | None = None,
        permissions: Iterable[Permission | str] = (),
        require_all: bool = False,
        role: Role | str | None = None,
        roles: Iterable[Role | str] = (),
        show_error: bool = False,
    ) -> None:
        perms = list(permissions)
        if permission is not None:
            perms.insert(0, permission)
        self.permissions = tuple(perms)
        self.require_all = require_all
        self.role = parse_role(role) if role is not None else None
        self.roles = frozenset(parse_role(r) for r in roles)
        self.show_error = show_error

    def allows(self, user_role: Role | str | None) -> bool:
        user_role = parse_role(user_role)

        if self.role is not None and user_role is self.role:
            return True
        if user_role in self.roles:
            return True

        if not self.permissions:
            # role-only gate that did not match
            if self.role is not None or self.roles:
                return False
            return True

        if self.require_all:
            return has_all_permissions(user_role, self.permissions)
        return has_any_permission(user_role, self.permissions)

    def render(self, user_role: Role | str | None, content: Any, fallback: Any = None) -> Any:
        """Return ``content`` when allowed, else the error payload or ``fallback``."""
        if self.allows(user_role):
            return content
        if self.show_error:
            return dict(ACCESS_DENIED)
        return fallback


ADMIN_ONLY = PermissionGate(roles=ADMIN_ROLES)
STAFF_ONLY = PermissionGate(roles=STAFF_ROLES)
STUDENT_ONLY = PermissionGate(role=Role.STUDENT)
SUPER_ADMIN_ONLY = PermissionGate(role=Role.SUPER_ADMIN)
HOSTEL_ADMIN_ONLY = PermissionGate(roles=[Role.SUPER_ADMIN, Role.HOSTEL_ADMIN])
ACCOUNTANT_ONLY = PermissionGate(role=Role.ACCOUNTANT)
