"""Cached, gated access to bookings.

Reads go through a per-user ``QueryCache``. Every mutation:

1. loads the current booking and applies the client-side gate, raising before
   anything is sent when the action should not be offered;
2. sends the request; nothing is written to the cache from the request or
   its response;
3. drops the booking's detail entry and the user's lists, whether the backend
   accepted or rejected the request. On success the booking is refetched and
   returned; on failure the error propagates and the next read refetches.
"""

import logging
from collections.abc import Awaitable
from decimal import Decimal

from app.config import settings
from app.core.cache import QueryCache
from app.core.exceptions import BackendError, InvalidBookingStatus, NetworkError, ValidationError
from app.domain.booking_state import (
    BOOKING_STATUS_LABELS,
    PAYMENT_STATUS_LABELS,
    BookingStatus,
    assert_booking_transition,
    available_actions,
    can_cancel,
    can_check_in,
    can_check_out,
    is_active,
    is_overdue,
)
from app.domain.payment_state import PaymentProjection, project_payment, validate_payment_amount
from app.schemas.booking import (
    Booking,
    BookingActionsResponse,
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
from app.schemas.common import PaginatedResponse
from app.services.backend_client import backend_client
from app.services.booking_service import BookingService
from app.services.session_service import AuthSession

logger = logging.getLogger(__name__)

CHECK_IN_DENIED = "Booking cannot be checked in. Payment must be completed and status must be confirmed."
CHECK_OUT_DENIED = "Booking cannot be checked out. Must be checked in first."
CANCEL_DENIED = "Booking cannot be cancelled in its current state"

# Status targets that have their own action gate
STATUS_GATES = {
    BookingStatus.CHECKED_IN: (can_check_in, CHECK_IN_DENIED),
    BookingStatus.CHECKED_OUT: (can_check_out, CHECK_OUT_DENIED),
    BookingStatus.CANCELLED: (can_cancel, CANCEL_DENIED),
}


class BookingStore:
    """Booking reads and mutations on behalf of one portal session at a time."""

    def __init__(
        self,
        service: BookingService,
        cache: QueryCache | None = None,
        detail_ttl: float | None = None,
        history_ttl: float | None = None,
    ) -> None:
        self.service = service
        self.cache = cache if cache is not None else QueryCache(max_entries=settings.query_cache_max_entries)
        self.detail_ttl = detail_ttl if detail_ttl is not None else settings.booking_cache_ttl_seconds
        self.history_ttl = (
            history_ttl if history_ttl is not None else settings.booking_history_cache_ttl_seconds
        )

    # ==================== CACHE KEYS ====================

    @staticmethod
    def user_key(session: AuthSession) -> tuple:
        return ("bookings", session.user_id)

    def detail_key(self, session: AuthSession, booking_id: str) -> tuple:
        return (*self.user_key(session), "detail", booking_id)

    def lists_key(self, session: AuthSession) -> tuple:
        return (*self.user_key(session), "list")

    def invalidate_user(self, user_id: str) -> None:
        self.cache.invalidate(("bookings", user_id))

    # ==================== READS ====================

    async def get(self, session: AuthSession, booking_id: str) -> Booking:
        return await self.cache.fetch(
            self.detail_key(session, booking_id),
            lambda: self.service.get_booking(session.token, booking_id),
            self.detail_ttl,
        )

    async def list_bookings(
        self,
        session: AuthSession,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        payment_status: str | None = None,
    ) -> PaginatedResponse[Booking]:
        key = (*self.lists_key(session), "bookings", page, limit, status, payment_status)
        return await self.cache.fetch(
            key,
            lambda: self.service.list_bookings(session.token, page, limit, status, payment_status),
            self.detail_ttl,
        )

    async def history(self, session: AuthSession, page: int = 1, limit: int = 10) -> PaginatedResponse[Booking]:
        key = (*self.lists_key(session), "history", page, limit)
        return await self.cache.fetch(
            key,
            lambda: self.service.get_history(session.token, page, limit),
            self.history_ttl,
        )

    async def for_student(self, session: AuthSession, student_id: str) -> list[Booking]:
        key = (*self.lists_key(session), "student", student_id)
        return await self.cache.fetch(
            key,
            lambda: self.service.list_for_student(session.token, student_id),
            self.detail_ttl,
        )

    # ==================== GATES ====================

    @staticmethod
    def view(booking: Booking) -> BookingView:
        """Booking plus labels and the actions the portal may offer on it."""
        return BookingView(
            booking=booking,
            status_label=BOOKING_STATUS_LABELS[booking.status],
            payment_status_label=PAYMENT_STATUS_LABELS[booking.payment_status],
            is_active=is_active(booking),
            is_overdue=is_overdue(booking),
            actions=BookingActionsResponse(**available_actions(booking).as_dict()),
        )

    def preview_payment(self, booking: Booking, amount: Decimal) -> PaymentProjection:
        """Expected amounts after paying ``amount``; raises if it would be rejected."""
        return project_payment(booking, amount)

    # ==================== MUTATIONS ====================

    async def create(self, session: AuthSession, data: BookingCreate) -> Booking:
        try:
            booking = await self.service.create_booking(session.token, data)
        finally:
            self.cache.invalidate(self.lists_key(session))
        logger.info(f"Booking {booking.booking_id} created by {session.email}")
        return await self.get(session, booking.id)

    async def update(self, session: AuthSession, booking_id: str, data: BookingUpdate) -> Booking:
        current = await self.get(session, booking_id)
        if current.status in (BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED):
            raise InvalidBookingStatus("Cannot update a completed or cancelled booking")
        if data.status is not None and data.status is not current.status:
            assert_booking_transition(current.status, data.status)
            # a status patch may not bypass the check-in, check-out or cancel gates
            gate = STATUS_GATES.get(data.status)
            if gate is not None and not gate[0](current):
                raise InvalidBookingStatus(gate[1])
        await self._send(session, booking_id, self.service.update_booking(session.token, booking_id, data))
        return await self._settle(session, booking_id, "updated")

    async def cancel(self, session: AuthSession, booking_id: str, data: BookingCancelRequest) -> Booking:
        current = await self.get(session, booking_id)
        if not can_cancel(current):
            raise InvalidBookingStatus(CANCEL_DENIED)
        await self._send(session, booking_id, self.service.cancel_booking(session.token, booking_id, data))
        return await self._settle(session, booking_id, "cancelled")

    async def check_in(self, session: AuthSession, booking_id: str, data: CheckInRequest) -> Booking:
        current = await self.get(session, booking_id)
        if not can_check_in(current):
            raise InvalidBookingStatus(CHECK_IN_DENIED)
        await self._send(session, booking_id, self.service.check_in(session.token, booking_id, data))
        return await self._settle(session, booking_id, "checked in")

    async def check_out(self, session: AuthSession, booking_id: str, data: CheckOutRequest) -> Booking:
        current = await self.get(session, booking_id)
        if not can_check_out(current):
            raise InvalidBookingStatus(CHECK_OUT_DENIED)
        await self._send(session, booking_id, self.service.check_out(session.token, booking_id, data))
        return await self._settle(session, booking_id, "checked out")

    async def add_payment(self, session: AuthSession, booking_id: str, data: PaymentCreate) -> Booking:
        current = await self.get(session, booking_id)
        validate_payment_amount(current, data.amount)
        await self._send(session, booking_id, self.service.add_payment(session.token, booking_id, data))
        return await self._settle(session, booking_id, f"paid {data.amount}")

    async def add_special_request(
        self, session: AuthSession, booking_id: str, data: SpecialRequestCreate
    ) -> Booking:
        await self.get(session, booking_id)
        await self._send(
            session, booking_id, self.service.add_special_request(session.token, booking_id, data)
        )
        return await self._settle(session, booking_id, f"special request {data.type.value} added")

    async def update_special_request(
        self, session: AuthSession, booking_id: str, index: int, data: SpecialRequestUpdate
    ) -> Booking:
        current = await self.get(session, booking_id)
        if index < 0 or index >= len(current.special_requests):
            raise ValidationError("Invalid request index")
        await self._send(
            session,
            booking_id,
            self.service.update_special_request(session.token, booking_id, index, data),
        )
        return await self._settle(session, booking_id, f"special request {index} updated")

    async def accept_terms(self, session: AuthSession, booking_id: str) -> Booking:
        await self.get(session, booking_id)
        await self._send(session, booking_id, self.service.accept_terms(session.token, booking_id))
        return await self._settle(session, booking_id, "terms accepted")

    def _forget(self, session: AuthSession, booking_id: str) -> None:
        self.cache.invalidate(self.detail_key(session, booking_id))
        self.cache.invalidate(self.lists_key(session))

    async def _send(self, session: AuthSession, booking_id: str, request: Awaitable[Booking]) -> None:
        """Await the backend call; a rejection drops the cached copy before propagating."""
        try:
            await request
        except (BackendError, NetworkError) as exc:
            # the cached copy may be what made the action look possible
            self._forget(session, booking_id)
            logger.warning(f"Booking {booking_id} mutation by {session.email} rejected: {exc.detail}")
            raise

    async def _settle(self, session: AuthSession, booking_id: str, what: str) -> Booking:
        self._forget(session, booking_id)
        logger.info(f"Booking {booking_id} {what} by {session.email}")
        return await self.get(session, booking_id)


booking_store = BookingStore(BookingService(backend_client))
