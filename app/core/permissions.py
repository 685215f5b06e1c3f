"""Role-based access control and permissions.

The role -> permission table mirrors the one the hostel backend enforces. It
is only used to decide what the portal offers; the backend re-checks every
request. Every check is fail-closed: an unknown role or permission is denied,
never raised.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType


class Role(str, Enum):
    """User roles assigned by the backend at authentication time."""

    STUDENT = "STUDENT"
    STAFF = "STAFF"
    ADMIN = "ADMIN"  # legacy general admin
    SUPER_ADMIN = "SUPER_ADMIN"
    HOSTEL_ADMIN = "HOSTEL_ADMIN"
    ACCOUNTANT = "ACCOUNTANT"
    NONE = "NONE"  # no access; stands in for missing or unrecognised roles


class Permission(str, Enum):
    """System permissions in ``resource:action`` form."""

    # Hostel management
    HOSTELS_READ = "hostels:read"
    HOSTELS_CREATE = "hostels:create"
    HOSTELS_UPDATE = "hostels:update"
    HOSTELS_DELETE = "hostels:delete"

    # Student management
    STUDENTS_READ = "students:read"
    STUDENTS_CREATE = "students:create"
    STUDENTS_UPDATE = "students:update"
    STUDENTS_DELETE = "students:delete"

    # Staff management
    STAFF_READ = "staff:read"
    STAFF_CREATE = "staff:create"
    STAFF_UPDATE = "staff:update"
    STAFF_DELETE = "staff:delete"

    # Booking management
    BOOKINGS_READ = "bookings:read"
    BOOKINGS_CREATE = "bookings:create"
    BOOKINGS_UPDATE = "bookings:update"
    BOOKINGS_DELETE = "bookings:delete"
    BOOKINGS_APPROVE = "bookings:approve"
    BOOKINGS_CANCEL = "bookings:cancel"

    # Payment management
    PAYMENTS_READ = "payments:read"
    PAYMENTS_CREATE = "payments:create"
    PAYMENTS_UPDATE = "payments:update"
    PAYMENTS_REFUND = "payments:refund"

    # Reports & analytics
    REPORTS_READ = "reports:read"
    REPORTS_GENERATE = "reports:generate"
    REPORTS_EXPORT = "reports:export"

    # Admin management
    ADMIN_READ = "admin:read"
    ADMIN_CREATE = "admin:create"
    ADMIN_UPDATE = "admin:update"
    ADMIN_DELETE = "admin:delete"

    # Settings
    SETTINGS_READ = "settings:read"
    SETTINGS_UPDATE = "settings:update"

    # Notifications
    NOTIFICATIONS_READ = "notifications:read"
    NOTIFICATIONS_SEND = "notifications:send"

    # Documents
    DOCUMENTS_READ = "documents:read"
    DOCUMENTS_UPLOAD = "documents:upload"
    DOCUMENTS_DELETE = "documents:delete"

    # Security & audit
    SECURITY_READ = "security:read"
    AUDIT_READ = "audit:read"

    # Messages
    MESSAGES_READ = "messages:read"
    MESSAGES_SEND = "messages:send"


P = Permission

_HOSTEL_ADMIN_PERMISSIONS = frozenset({
    P.HOSTELS_READ, P.HOSTELS_CREATE, P.HOSTELS_UPDATE, P.HOSTELS_DELETE,
    P.STUDENTS_READ, P.STUDENTS_CREATE, P.STUDENTS_UPDATE,
    P.STAFF_READ, P.STAFF_CREATE, P.STAFF_UPDATE,
    P.BOOKINGS_READ, P.BOOKINGS_CREATE, P.BOOKINGS_UPDATE, P.BOOKINGS_APPROVE, P.BOOKINGS_CANCEL,
    P.PAYMENTS_READ, P.PAYMENTS_CREATE, P.PAYMENTS_UPDATE,
    P.REPORTS_READ, P.REPORTS_GENERATE,
    P.NOTIFICATIONS_READ, P.NOTIFICATIONS_SEND,
    P.DOCUMENTS_READ, P.DOCUMENTS_UPLOAD,
    P.MESSAGES_READ, P.MESSAGES_SEND,
})

_STAFF_PERMISSIONS = frozenset({
    P.HOSTELS_READ,
    P.STUDENTS_READ, P.STUDENTS_CREATE, P.STUDENTS_UPDATE,
    P.BOOKINGS_READ, P.BOOKINGS_CREATE, P.BOOKINGS_UPDATE,
    P.PAYMENTS_READ,
    P.REPORTS_READ,
    P.NOTIFICATIONS_READ,
    P.DOCUMENTS_READ, P.DOCUMENTS_UPLOAD,
    P.MESSAGES_READ, P.MESSAGES_SEND,
})

_ACCOUNTANT_PERMISSIONS = frozenset({
    P.HOSTELS_READ,
    P.STUDENTS_READ,
    P.BOOKINGS_READ,
    P.PAYMENTS_READ, P.PAYMENTS_CREATE, P.PAYMENTS_UPDATE, P.PAYMENTS_REFUND,
    P.REPORTS_READ, P.REPORTS_GENERATE, P.REPORTS_EXPORT,
    P.DOCUMENTS_READ,
})

_STUDENT_PERMISSIONS = frozenset({
    P.HOSTELS_READ,
    P.BOOKINGS_READ, P.BOOKINGS_CREATE,
    P.PAYMENTS_READ, P.PAYMENTS_CREATE,
    P.DOCUMENTS_READ,
    P.MESSAGES_READ, P.MESSAGES_SEND,
})

# Role to permissions mapping, read-only for the life of the process
ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType({
    # Super admin and the legacy admin role have every permission
    Role.SUPER_ADMIN: frozenset(Permission),
    Role.ADMIN: frozenset(Permission),
    Role.HOSTEL_ADMIN: _HOSTEL_ADMIN_PERMISSIONS,
    Role.STAFF: _STAFF_PERMISSIONS,
    Role.ACCOUNTANT: _ACCOUNTANT_PERMISSIONS,
    Role.STUDENT: _STUDENT_PERMISSIONS,
    Role.NONE: frozenset(),
})

ADMIN_ROLES = frozenset({Role.SUPER_ADMIN, Role.HOSTEL_ADMIN, Role.ADMIN})
STAFF_ROLES = frozenset({Role.STAFF, Role.ACCOUNTANT})

_ROLES_BY_VALUE = {role.value: role for role in Role}
_PERMISSIONS_BY_VALUE = {perm.value: perm for perm in Permission}


def parse_role(value: Role | str | None) -> Role:
    """Coerce a backend role value into a Role; anything unknown is Role.NONE."""
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return Role.NONE
    return _ROLES_BY_VALUE.get(value.strip().upper(), Role.NONE)


def parse_permission(value: Permission | str) -> Permission | None:
    """Coerce a permission string; returns None for strings outside the closed set."""
    if isinstance(value, Permission):
        return value
    if not isinstance(value, str):
        return None
    return _PERMISSIONS_BY_VALUE.get(value.strip())


def permissions_for(role: Role | str | None) -> frozenset[Permission]:
    """Permission set granted to a role."""
    return ROLE_PERMISSIONS.get(parse_role(role), frozenset())


def has_permission(role: Role | str | None, permission: Permission | str) -> bool:
    """Check if a role has a specific permission."""
    perm = parse_permission(permission)
    if perm is None:
        return False
    return perm in permissions_for(role)


def has_any_permission(role: Role | str | None, permissions: Iterable[Permission | str]) -> bool:
    """True if the role holds at least one of the permissions (False for none given)."""
    return any(has_permission(role, perm) for perm in permissions)


def has_all_permissions(role: Role | str | None, permissions: Iterable[Permission | str]) -> bool:
    """True if the role holds every one of the permissions (True for none given)."""
    return all(has_permission(role, perm) for perm in permissions)


def is_admin(role: Role | str | None) -> bool:
    return parse_role(role) in ADMIN_ROLES


def is_staff(role: Role | str | None) -> bool:
    return parse_role(role) in STAFF_ROLES


def is_student(role: Role | str | None) -> bool:
    return parse_role(role) is Role.STUDENT


def capabilities(role: Role | str | None) -> dict[str, bool]:
    """Named capability flags the dashboards use to enable whole feature areas."""
    return {
        "canManageHostels": has_any_permission(
            role, [P.HOSTELS_CREATE, P.HOSTELS_UPDATE, P.HOSTELS_DELETE]
        ),
        "canManageStudents": has_any_permission(
            role, [P.STUDENTS_CREATE, P.STUDENTS_UPDATE, P.STUDENTS_DELETE]
        ),
        "canManageStaff": has_any_permission(
            role, [P.STAFF_CREATE, P.STAFF_UPDATE, P.STAFF_DELETE]
        ),
        "canManageBookings": has_any_permission(
            role, [P.BOOKINGS_CREATE, P.BOOKINGS_UPDATE, P.BOOKINGS_DELETE, P.BOOKINGS_APPROVE]
        ),
        "canManagePayments": has_any_permission(
            role, [P.PAYMENTS_CREATE, P.PAYMENTS_UPDATE, P.PAYMENTS_REFUND]
        ),
        "canViewReports": has_permission(role, P.REPORTS_READ),
        "canGenerateReports": has_permission(role, P.REPORTS_GENERATE),
        "canManageSettings": has_permission(role, P.SETTINGS_UPDATE),
        "canSendNotifications": has_permission(role, P.NOTIFICATIONS_SEND),
        "canUploadDocuments": has_permission(role, P.DOCUMENTS_UPLOAD),
        "canViewAuditLogs": has_permission(role, P.AUDIT_READ),
    }


def home_path(role: Role | str | None) -> str:
    """Dashboard a role lands on, used as the redirect target when a guard denies."""
    parsed = parse_role(role)
    if parsed in ADMIN_ROLES:
        return "/admin"
    if parsed in STAFF_ROLES:
        return "/staff"
    if parsed is Role.STUDENT:
        return "/student"
    return "/auth/login"
