"""User management endpoints (admin panel)."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_user_service, require_permission
from app.core.permissions import Permission
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.user import (
    AssignableRole,
    BulkRoleUpdate,
    User,
    UserCreate,
    UserRoleUpdate,
    UserStatusUpdate,
)
from app.services.session_service import AuthSession
from app.services.user_service import UserService

router = APIRouter()

Users = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=PaginatedResponse[User])
async def get_users(
    session: Annotated[AuthSession, Depends(require_permission(Permission.ADMIN_READ))],
    service: Users,
    search: str | None = None,
    role: AssignableRole | None = None,
    is_active: bool | None = Query(default=None, alias="isActive"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> PaginatedResponse[User]:
    """List users with optional filters."""
    return await service.list_users(
        session.token, page=page, limit=limit, search=search, role=role, is_active=is_active
    )


@router.get("/{user_id}", response_model=ApiResponse[User])
async def get_user(
    user_id: str,
    session: Annotated[AuthSession, Depends(require_permission(Permission.ADMIN_READ))],
    service: Users,
) -> ApiResponse[User]:
    return ApiResponse[User](data=await service.get_user(session.token, user_id))


@router.post("", response_model=ApiResponse[User], status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    session: Annotated[AuthSession, Depends(require_permission(Permission.ADMIN_CREATE))],
    service: Users,
) -> ApiResponse[User]:
    user = await service.create_user(session.token, data)
    return ApiResponse[User](message="User created successfully", data=user)


@router.patch("/bulk-roles", response_model=ApiResponse[dict[str, Any]])
async def bulk_update_roles(
    data: BulkRoleUpdate,
    session: Annotated[AuthSession, Depends(require_permission(Permission.ADMIN_UPDATE))],
    service: Users,
) -> ApiResponse[dict[str, Any]]:
    """Change several users' roles in one request."""
    result = await service.bulk_update_roles(session.token, data)
    return ApiResponse[dict[str, Any]](message="User roles updated successfully", data=result)


@router.patch("/{user_id}/role", response_model=ApiResponse[User])
async def update_user_role(
    user_id: str,
    data: UserRoleUpdate,
    session: Annotated[AuthSession, Depends(require_permission(Permission.ADMIN_UPDATE))],
    service: Users,
) -> ApiResponse[User]:
    user = await service.update_role(session.token, user_id, data.role)
    return ApiResponse[User](message="User role updated successfully", data=user)


@router.patch("/{user_id}/status", response_model=ApiResponse[User])
async def update_user_status(
    user_id: str,
    data: UserStatusUpdate,
    session: Annotated[AuthSession, Depends(require_permission(Permission.ADMIN_UPDATE))],
    service: Users,
) -> ApiResponse[User]:
    user = await service.update_status(session.token, user_id, data.is_active)
    return ApiResponse[User](message="User status updated successfully", data=user)


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    user_id: str,
    session: Annotated[AuthSession, Depends(require_permission(Permission.ADMIN_DELETE))],
    service: Users,
) -> ApiResponse[None]:
    await service.delete_user(session.token, user_id)
    return ApiResponse[None](message="User deleted successfully")
