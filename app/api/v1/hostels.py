"""Hostel browsing endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_hostel_service, require_permission
from app.core.permissions import Permission
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.hostel import Hostel, Room
from app.services.hostel_service import HostelService
from app.services.session_service import AuthSession

router = APIRouter()

Hostels = Annotated[HostelService, Depends(get_hostel_service)]
CanRead = Annotated[AuthSession, Depends(require_permission(Permission.HOSTELS_READ))]


@router.get("", response_model=PaginatedResponse[Hostel])
async def list_hostels(
    session: CanRead,
    service: Hostels,
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> PaginatedResponse[Hostel]:
    return await service.list_hostels(session.token, page=page, limit=limit, search=search)


@router.get("/search", response_model=ApiResponse[list[Hostel]])
async def search_hostels(
    session: CanRead,
    service: Hostels,
    q: str = Query(..., min_length=1),
) -> ApiResponse[list[Hostel]]:
    return ApiResponse[list[Hostel]](data=await service.search_hostels(session.token, q))


@router.get("/{hostel_id}", response_model=ApiResponse[Hostel])
async def get_hostel(hostel_id: str, session: CanRead, service: Hostels) -> ApiResponse[Hostel]:
    return ApiResponse[Hostel](data=await service.get_hostel(session.token, hostel_id))


@router.get("/{hostel_id}/rooms", response_model=ApiResponse[list[Room]])
async def list_rooms(hostel_id: str, session: CanRead, service: Hostels) -> ApiResponse[list[Room]]:
    return ApiResponse[list[Room]](data=await service.list_rooms(session.token, hostel_id))


@router.get("/{hostel_id}/rooms/available", response_model=ApiResponse[list[Room]])
async def list_available_rooms(
    hostel_id: str,
    session: CanRead,
    service: Hostels,
) -> ApiResponse[list[Room]]:
    rooms = await service.list_rooms(session.token, hostel_id, available_only=True)
    return ApiResponse[list[Room]](data=rooms)
