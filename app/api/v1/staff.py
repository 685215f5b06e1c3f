"""Staff management endpoints (admin panel)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_staff_service, require_permission
from app.core.permissions import Permission
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.user import (
    Staff,
    StaffCreate,
    StaffPermissionsUpdate,
    StaffUpdate,
    StatusUpdate,
)
from app.services.session_service import AuthSession
from app.services.user_service import StaffService

router = APIRouter()

StaffDirectory = Annotated[StaffService, Depends(get_staff_service)]
CanRead = Annotated[AuthSession, Depends(require_permission(Permission.STAFF_READ))]
CanUpdate = Annotated[AuthSession, Depends(require_permission(Permission.STAFF_UPDATE))]


@router.get("", response_model=PaginatedResponse[Staff])
async def get_staff_list(
    session: CanRead,
    service: StaffDirectory,
    search: str | None = None,
    department: str | None = None,
    is_active: bool | None = Query(default=None, alias="isActive"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> PaginatedResponse[Staff]:
    return await service.list_staff(
        session.token,
        page=page,
        limit=limit,
        search=search,
        department=department,
        is_active=is_active,
    )


@router.get("/employee/{employee_id}", response_model=ApiResponse[Staff])
async def get_staff_by_employee_id(
    employee_id: str,
    session: CanRead,
    service: StaffDirectory,
) -> ApiResponse[Staff]:
    return ApiResponse[Staff](data=await service.get_by_employee_id(session.token, employee_id))


@router.get("/{staff_id}", response_model=ApiResponse[Staff])
async def get_staff(staff_id: str, session: CanRead, service: StaffDirectory) -> ApiResponse[Staff]:
    return ApiResponse[Staff](data=await service.get_staff(session.token, staff_id))


@router.post("", response_model=ApiResponse[Staff], status_code=status.HTTP_201_CREATED)
async def create_staff(
    data: StaffCreate,
    session: Annotated[AuthSession, Depends(require_permission(Permission.STAFF_CREATE))],
    service: StaffDirectory,
) -> ApiResponse[Staff]:
    staff = await service.create_staff(session.token, data)
    return ApiResponse[Staff](message="Staff member created successfully", data=staff)


@router.patch("/{staff_id}", response_model=ApiResponse[Staff])
async def update_staff(
    staff_id: str,
    data: StaffUpdate,
    session: CanUpdate,
    service: StaffDirectory,
) -> ApiResponse[Staff]:
    staff = await service.update_staff(session.token, staff_id, data)
    return ApiResponse[Staff](message="Staff member updated successfully", data=staff)


@router.patch("/{staff_id}/status", response_model=ApiResponse[Staff])
async def update_staff_status(
    staff_id: str,
    data: StatusUpdate,
    session: CanUpdate,
    service: StaffDirectory,
) -> ApiResponse[Staff]:
    staff = await service.update_status(session.token, staff_id, data.is_active)
    return ApiResponse[Staff](message="Staff status updated successfully", data=staff)


@router.patch("/{staff_id}/permissions", response_model=ApiResponse[Staff])
async def update_staff_permissions(
    staff_id: str,
    data: StaffPermissionsUpdate,
    session: CanUpdate,
    service: StaffDirectory,
) -> ApiResponse[Staff]:
    """Replace the permission list stored on a staff record."""
    staff = await service.update_permissions(session.token, staff_id, data)
    return ApiResponse[Staff](message="Staff permissions updated successfully", data=staff)


@router.delete("/{staff_id}", response_model=ApiResponse[None])
async def delete_staff(
    staff_id: str,
    session: Annotated[AuthSession, Depends(require_permission(Permission.STAFF_DELETE))],
    service: StaffDirectory,
) -> ApiResponse[None]:
    await service.delete_staff(session.token, staff_id)
    return ApiResponse[None](message="Staff member deleted successfully")
