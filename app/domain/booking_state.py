"""Booking state machine.

Happy path: HOLD -> PENDING_PAYMENT -> CONFIRMED -> CHECKED_IN -> CHECKED_OUT.
CANCELLED is reachable from HOLD, PENDING_PAYMENT and CONFIRMED. CHECKED_OUT
and CANCELLED are terminal.

The predicates here only decide which actions the portal offers. The backend
re-validates every mutation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from app.core.exceptions import InvalidBookingStatus

if TYPE_CHECKING:
    from app.schemas.booking import Booking


class BookingStatus(str, Enum):
    HOLD = "HOLD"
    PENDING_PAYMENT = "PENDING_PAYMENT"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.HOLD: frozenset({
        BookingStatus.PENDING_PAYMENT,
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
    }),
    BookingStatus.PENDING_PAYMENT: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CHECKED_IN, BookingStatus.CANCELLED}),
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.CHECKED_OUT}),
    BookingStatus.CHECKED_OUT: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

ACTIVE_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN})
CANCELLABLE_STATUSES = frozenset({
    BookingStatus.HOLD,
    BookingStatus.PENDING_PAYMENT,
    BookingStatus.CONFIRMED,
})
TERMINAL_STATUSES = frozenset({BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED})

BOOKING_STATUS_LABELS = {
    BookingStatus.HOLD: "On Hold",
    BookingStatus.PENDING_PAYMENT: "Pending Payment",
    BookingStatus.CONFIRMED: "Confirmed",
    BookingStatus.CANCELLED: "Cancelled",
    BookingStatus.CHECKED_IN: "Checked In",
    BookingStatus.CHECKED_OUT: "Checked Out",
}

PAYMENT_STATUS_LABELS = {
    PaymentStatus.PENDING: "Pending",
    PaymentStatus.PARTIAL: "Partial",
    PaymentStatus.COMPLETED: "Completed",
    PaymentStatus.FAILED: "Failed",
    PaymentStatus.REFUNDED: "Refunded",
}


def assert_booking_transition(current: BookingStatus | str, target: BookingStatus | str) -> None:
    """Raise InvalidBookingStatus unless ``current -> target`` is a legal move."""
    try:
        current_status = BookingStatus(current)
        target_status = BookingStatus(target)
    except ValueError:
        raise InvalidBookingStatus(f"Unknown booking status: {current} → {target}")

    if target_status not in BOOKING_TRANSITIONS[current_status]:
        raise InvalidBookingStatus(
            f"Invalid booking transition: {current_status.value} → {target_status.value}"
        )


def is_terminal(booking: Booking) -> bool:
    return booking.status in TERMINAL_STATUSES


def is_active(booking: Booking) -> bool:
    return booking.status in ACTIVE_STATUSES


def _as_utc(value: datetime) -> datetime:
    # naive datetimes from the backend are UTC
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def is_overdue(booking: Booking, now: datetime | None = None) -> bool:
    """Payment not completed and the due date has passed."""
    if booking.payment_status is PaymentStatus.COMPLETED:
        return False
    return _as_utc(now or datetime.now(UTC)) > _as_utc(booking.due_date)


def has_cancellation(booking: Booking) -> bool:
    return booking.cancellation is not None and booking.cancellation.requested_at is not None


def can_cancel(booking: Booking) -> bool:
    return not has_cancellation(booking) and booking.status in CANCELLABLE_STATUSES


def can_check_in(booking: Booking) -> bool:
    return (
        booking.status is BookingStatus.CONFIRMED
        and booking.payment_status is PaymentStatus.COMPLETED
    )


def can_check_out(booking: Booking) -> bool:
    return booking.status is BookingStatus.CHECKED_IN


def can_pay(booking: Booking) -> bool:
    return booking.amount_due > 0


@dataclass(frozen=True)
class BookingActions:
    """Which booking actions the portal should offer for the current state."""

    pay: bool
    check_in: bool
    check_out: bool
    cancel: bool
    add_special_request: bool
    accept_terms: bool

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


def available_actions(booking: Booking) -> BookingActions:
    """Evaluate every action predicate against one booking snapshot."""
    return BookingActions(
        pay=can_pay(booking),
        check_in=can_check_in(booking),
        check_out=can_check_out(booking),
        cancel=can_cancel(booking),
        add_special_request=True,
        accept_terms=not booking.terms.accepted,
    )
