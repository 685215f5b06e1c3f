"""API dependencies for authentication, route guards and shared services."""

import logging
from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import AuthorizationError
from app.core.permissions import (
    ADMIN_ROLES,
    STAFF_ROLES,
    Permission,
    Role,
    has_all_permissions,
    has_any_permission,
    home_path,
    parse_role,
)
from app.core.security import bearer_token
from app.services.backend_client import BackendClient, backend_client
from app.services.booking_service import BookingService
from app.services.booking_store import BookingStore, booking_store
from app.services.hostel_service import HostelService
from app.services.session_service import AuthSession, SessionRegistry, session_registry
from app.services.user_service import StaffService, StudentService, UserService

logger = logging.getLogger(__name__)

# Security scheme; missing credentials are reported through AuthenticationError
security = HTTPBearer(auto_error=False)


def get_backend_client() -> BackendClient:
    return backend_client


def get_session_registry() -> SessionRegistry:
    return session_registry


def get_booking_store() -> BookingStore:
    return booking_store


def get_booking_service(
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> BookingService:
    return BookingService(client)


def get_user_service(client: Annotated[BackendClient, Depends(get_backend_client)]) -> UserService:
    return UserService(client)


def get_staff_service(client: Annotated[BackendClient, Depends(get_backend_client)]) -> StaffService:
    return StaffService(client)


def get_student_service(client: Annotated[BackendClient, Depends(get_backend_client)]) -> StudentService:
    return StudentService(client)


def get_hostel_service(client: Annotated[BackendClient, Depends(get_backend_client)]) -> HostelService:
    return HostelService(client)


async def get_current_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> AuthSession:
    """Get the session snapshot for the caller's bearer token."""
    token = bearer_token(credentials)
    return await registry.resolve(token)


class RouteGuard:
    """Admit a session by role or by permission; deny everyone else.

    With no requirement every authenticated session passes. A denied caller
    gets a 403 that names the dashboard its own role lands on.
    """

    def __init__(
        self,
        roles: Iterable[Role | str] = (),
        permissions: Iterable[Permission | str] = (),
        require_all: bool = False,
    ):
        self.roles = frozenset(parse_role(role) for role in roles)
        self.permissions = tuple(permissions)
        self.require_all = require_all

    def allows(self, role: Role | str | None) -> bool:
        role = parse_role(role)
        if not self.roles and not self.permissions:
            return True
        if role in self.roles:
            return True
        if not self.permissions:
            return False
        if self.require_all:
            return has_all_permissions(role, self.permissions)
        return has_any_permission(role, self.permissions)

    async def __call__(
        self,
        session: Annotated[AuthSession, Depends(get_current_session)],
    ) -> AuthSession:
        if self.allows(session.role):
            return session
        logger.warning(f"Access denied for {session.email} ({session.role.value})")
        raise AuthorizationError(redirect_to=home_path(session.role))


def require_permission(*permissions: Permission, require_all: bool = False) -> RouteGuard:
    return RouteGuard(permissions=permissions, require_all=require_all)


# Dashboard guards
require_admin = RouteGuard(roles=ADMIN_ROLES)
require_staff = RouteGuard(roles=[Role.STAFF])
require_teacher = RouteGuard(roles=[Role.STAFF])
require_student = RouteGuard(roles=[Role.STUDENT])
require_admin_or_staff = RouteGuard(roles=ADMIN_ROLES | STAFF_ROLES)

CurrentSession = Annotated[AuthSession, Depends(get_current_session)]
