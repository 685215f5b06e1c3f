"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from app.api.v1 import (
    auth,
    bookings,
    dashboards,
    hostels,
    staff,
    students,
    users,
)
from app.schemas.common import ErrorResponse

# Every error leaves the portal in the same envelope
ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing, expired or rejected token"},
    403: {"model": ErrorResponse, "description": "Role not allowed; carries redirectTo"},
    422: {"model": ErrorResponse, "description": "Request failed validation"},
    503: {"model": ErrorResponse, "description": "Backend unreachable"},
}

api_router = APIRouter(responses=ERROR_RESPONSES)

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Dashboards
api_router.include_router(dashboards.router, prefix="/dashboards", tags=["Dashboards"])

# Bookings
api_router.include_router(
    bookings.router,
    prefix="/bookings",
    tags=["Bookings"],
    responses={400: {"model": ErrorResponse, "description": "Action not allowed in the booking's state"}},
)

# Hostels
api_router.include_router(hostels.router, prefix="/hostels", tags=["Hostels"])

# Admin
api_router.include_router(users.router, prefix="/admin/users", tags=["Admin"])
api_router.include_router(staff.router, prefix="/admin/staff", tags=["Admin"])
api_router.include_router(students.router, prefix="/admin/students", tags=["Admin"])
