"""Core utilities: errors, permissions, caching and security helpers."""

from app.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    BackendError,
    InvalidBookingStatus,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from app.core.permissions import (
    ROLE_PERMISSIONS,
    Permission,
    Role,
    has_all_permissions,
    has_any_permission,
    has_permission,
    parse_role,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "BackendError",
    "InvalidBookingStatus",
    "NetworkError",
    "NotFoundError",
    "ValidationError",
    "ROLE_PERMISSIONS",
    "Permission",
    "Role",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "parse_role",
]
