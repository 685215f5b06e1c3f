"""Pydantic schemas for the backend contract and portal responses."""

from app.schemas.auth import LoginResponse, SessionResponse, UserLogin
from app.schemas.booking import (
    Booking,
    BookingCancelRequest,
    BookingCreate,
    BookingUpdate,
    BookingView,
    CheckInRequest,
    CheckOutRequest,
    PaymentCreate,
    SpecialRequestCreate,
    SpecialRequestUpdate,
)
from app.schemas.common import ApiResponse, ErrorResponse, PaginatedResponse, Pagination
from app.schemas.hostel import Hostel, Room
from app.schemas.navigation import DashboardResponse, NavigationNode
from app.schemas.user import Staff, Student, User, UserCreate

__all__ = [
    # Envelopes
    "ApiResponse",
    "ErrorResponse",
    "PaginatedResponse",
    "Pagination",
    # Auth
    "UserLogin",
    "LoginResponse",
    "SessionResponse",
    # Booking
    "Booking",
    "BookingCreate",
    "BookingUpdate",
    "BookingView",
    "BookingCancelRequest",
    "CheckInRequest",
    "CheckOutRequest",
    "PaymentCreate",
    "SpecialRequestCreate",
    "SpecialRequestUpdate",
    # Directory
    "User",
    "UserCreate",
    "Staff",
    "Student",
    # Hostels
    "Hostel",
    "Room",
    # Dashboards
    "DashboardResponse",
    "NavigationNode",
]
