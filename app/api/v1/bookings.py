"""Booking endpoints.

Each action is checked here (route guard) and again in the store (booking
state) before it is forwarded; the backend remains the final judge.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import (
    RouteGuard,
    get_booking_service,
    get_booking_store,
    require_admin,
    require_admin_or_staff,
    require_permission,
)
from app.core.permissions import Permission, Role
from app.domain.booking_state import BookingStatus, PaymentStatus
from app.schemas.booking import (
    Booking,
    BookingCancelRequest,
    BookingCreate,
    BookingStatistics,
    BookingUpdate,
    BookingView,
    CheckInRequest,
    CheckOutRequest,
    PaymentCreate,
    PaymentPreview,
    SpecialRequestCreate,
    SpecialRequestUpdate,
)
from app.schemas.common import ApiResponse, PaginatedResponse
from app.services.booking_service import BookingService
from app.services.booking_store import BookingStore
from app.services.session_service import AuthSession

router = APIRouter()

can_read = require_permission(Permission.BOOKINGS_READ)
can_create = require_permission(Permission.BOOKINGS_CREATE)
can_update = require_permission(Permission.BOOKINGS_UPDATE)
can_cancel = RouteGuard(roles=[Role.STUDENT], permissions=[Permission.BOOKINGS_CANCEL])
can_pay = require_permission(Permission.PAYMENTS_CREATE)
can_request = require_permission(Permission.BOOKINGS_CREATE, Permission.BOOKINGS_UPDATE)

Store = Annotated[BookingStore, Depends(get_booking_store)]


def _view(booking: Booking, message: str = "") -> ApiResponse[BookingView]:
    return ApiResponse[BookingView](message=message, data=BookingStore.view(booking))


# ============ READS ============


@router.get("", response_model=PaginatedResponse[Booking])
async def list_bookings(
    session: Annotated[AuthSession, Depends(can_read)],
    store: Store,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    booking_status: BookingStatus | None = Query(default=None, alias="status"),
    payment_status: PaymentStatus | None = Query(default=None, alias="paymentStatus"),
) -> PaginatedResponse[Booking]:
    """List bookings visible to the caller."""
    return await store.list_bookings(
        session,
        page=page,
        limit=limit,
        status=booking_status.value if booking_status else None,
        payment_status=payment_status.value if payment_status else None,
    )


@router.get("/history", response_model=PaginatedResponse[Booking])
async def get_booking_history(
    session: Annotated[AuthSession, Depends(can_read)],
    store: Store,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> PaginatedResponse[Booking]:
    """Get the caller's past bookings."""
    return await store.history(session, page=page, limit=limit)


@router.get("/statistics", response_model=ApiResponse[BookingStatistics])
async def get_booking_statistics(
    session: Annotated[AuthSession, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> ApiResponse[BookingStatistics]:
    return ApiResponse[BookingStatistics](data=await service.get_statistics(session.token))


@router.get("/overdue", response_model=ApiResponse[list[Booking]])
async def get_overdue_bookings(
    session: Annotated[AuthSession, Depends(require_admin_or_staff)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> ApiResponse[list[Booking]]:
    return ApiResponse[list[Booking]](data=await service.get_overdue(session.token))


@router.get("/student/{student_id}", response_model=ApiResponse[list[Booking]])
async def get_student_bookings(
    student_id: str,
    session: Annotated[AuthSession, Depends(can_read)],
    store: Store,
) -> ApiResponse[list[Booking]]:
    return ApiResponse[list[Booking]](data=await store.for_student(session, student_id))


@router.get("/{booking_id}", response_model=ApiResponse[BookingView])
async def get_booking(
    booking_id: str,
    session: Annotated[AuthSession, Depends(can_read)],
    store: Store,
) -> ApiResponse[BookingView]:
    """Get a booking with the actions currently offered on it."""
    return _view(await store.get(session, booking_id))


# ============ MUTATIONS ============


@router.post("", response_model=ApiResponse[BookingView], status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    session: Annotated[AuthSession, Depends(can_create)],
    store: Store,
) -> ApiResponse[BookingView]:
    return _view(await store.create(session, data), "Booking created successfully")


@router.patch("/{booking_id}", response_model=ApiResponse[BookingView])
async def update_booking(
    booking_id: str,
    data: BookingUpdate,
    session: Annotated[AuthSession, Depends(can_update)],
    store: Store,
) -> ApiResponse[BookingView]:
    return _view(await store.update(session, booking_id, data), "Booking updated successfully")


@router.post("/{booking_id}/cancel", response_model=ApiResponse[BookingView])
async def cancel_booking(
    booking_id: str,
    data: BookingCancelRequest,
    session: Annotated[AuthSession, Depends(can_cancel)],
    store: Store,
) -> ApiResponse[BookingView]:
    return _view(await store.cancel(session, booking_id, data), "Booking cancelled successfully")


@router.post("/{booking_id}/check-in", response_model=ApiResponse[BookingView])
async def check_in(
    booking_id: str,
    data: CheckInRequest,
    session: Annotated[AuthSession, Depends(can_update)],
    store: Store,
) -> ApiResponse[BookingView]:
    return _view(await store.check_in(session, booking_id, data), "Checked in successfully")


@router.post("/{booking_id}/check-out", response_model=ApiResponse[BookingView])
async def check_out(
    booking_id: str,
    data: CheckOutRequest,
    session: Annotated[AuthSession, Depends(can_update)],
    store: Store,
) -> ApiResponse[BookingView]:
    return _view(await store.check_out(session, booking_id, data), "Checked out successfully")


@router.get("/{booking_id}/payments/preview", response_model=ApiResponse[PaymentPreview])
async def preview_payment(
    booking_id: str,
    session: Annotated[AuthSession, Depends(can_pay)],
    store: Store,
    amount: Decimal = Query(..., gt=0),
) -> ApiResponse[PaymentPreview]:
    """Show what the booking would look like after paying ``amount``."""
    booking = await store.get(session, booking_id)
    projection = store.preview_payment(booking, amount)
    return ApiResponse[PaymentPreview](
        data=PaymentPreview(
            amount=amount,
            amount_paid=projection.amount_paid,
            amount_due=projection.amount_due,
            payment_status=projection.payment_status,
        )
    )


@router.post("/{booking_id}/payments", response_model=ApiResponse[BookingView])
async def add_payment(
    booking_id: str,
    data: PaymentCreate,
    session: Annotated[AuthSession, Depends(can_pay)],
    store: Store,
) -> ApiResponse[BookingView]:
    return _view(await store.add_payment(session, booking_id, data), "Payment recorded successfully")


@router.post("/{booking_id}/special-requests", response_model=ApiResponse[BookingView])
async def add_special_request(
    booking_id: str,
    data: SpecialRequestCreate,
    session: Annotated[AuthSession, Depends(can_request)],
    store: Store,
) -> ApiResponse[BookingView]:
    booking = await store.add_special_request(session, booking_id, data)
    return _view(booking, "Special request added successfully")


@router.patch("/{booking_id}/special-requests/{index}", response_model=ApiResponse[BookingView])
async def update_special_request(
    booking_id: str,
    index: int,
    data: SpecialRequestUpdate,
    session: Annotated[AuthSession, Depends(can_update)],
    store: Store,
) -> ApiResponse[BookingView]:
    booking = await store.update_special_request(session, booking_id, index, data)
    return _view(booking, "Special request updated successfully")


@router.post("/{booking_id}/accept-terms", response_model=ApiResponse[BookingView])
async def accept_terms(
    booking_id: str,
    session: Annotated[AuthSession, Depends(can_request)],
    store: Store,
) -> ApiResponse[BookingView]:
    return _view(await store.accept_terms(session, booking_id), "Terms accepted successfully")
