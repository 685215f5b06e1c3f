"""Payment state machine and client-side payment checks."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from app.core.exceptions import ValidationError
from app.domain.booking_state import PaymentStatus

if TYPE_CHECKING:
    from app.schemas.booking import Booking

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({
        PaymentStatus.PARTIAL,
        PaymentStatus.COMPLETED,
        PaymentStatus.FAILED,
    }),
    PaymentStatus.PARTIAL: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    PaymentStatus.FAILED: frozenset({
        PaymentStatus.PENDING,
        PaymentStatus.PARTIAL,
        PaymentStatus.COMPLETED,
    }),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.REFUNDED: frozenset(),
}


def assert_payment_transition(current: PaymentStatus | str, target: PaymentStatus | str) -> None:
    """Raise ValidationError unless the move is legal; staying put is always allowed."""
    current_status = PaymentStatus(current)
    target_status = PaymentStatus(target)
    if current_status is target_status:
        return
    if target_status not in PAYMENT_TRANSITIONS[current_status]:
        raise ValidationError(
            f"Invalid payment transition: {current_status.value} → {target_status.value}"
        )


def remaining_amount(total: Decimal, paid: Decimal) -> Decimal:
    """Amount still owed, floored at zero."""
    return max(Decimal("0"), total - paid)


def derive_payment_status(current: PaymentStatus, total: Decimal, paid: Decimal) -> PaymentStatus:
    """Payment status the backend records after the paid amount changes."""
    due = remaining_amount(total, paid)
    if due == 0:
        return PaymentStatus.COMPLETED
    if paid > 0:
        return PaymentStatus.PARTIAL
    return current


def validate_payment_amount(booking: Booking, amount: Decimal) -> None:
    """Reject a payment before it is submitted.

    Raises:
        ValidationError: If nothing is due, the amount is not positive, or it
            exceeds the amount due.
    """
    if booking.amount_due <= 0:
        raise ValidationError("Nothing is due on this booking")
    if amount <= 0:
        raise ValidationError("Payment amount must be greater than zero")
    if amount > booking.amount_due:
        raise ValidationError(
            f"Payment amount {amount} exceeds the amount due ({booking.amount_due})"
        )


@dataclass(frozen=True)
class PaymentProjection:
    """Expected booking amounts once a payment is recorded."""

    amount_paid: Decimal
    amount_due: Decimal
    payment_status: PaymentStatus


def project_payment(booking: Booking, amount: Decimal) -> PaymentProjection:
    """Compute what the backend should record for ``amount``.

    Only used for previews and checks; the cached booking is never changed
    from this result.
    """
    validate_payment_amount(booking, amount)
    amount_paid = booking.amount_paid + amount
    amount_due = remaining_amount(booking.total_amount, amount_paid)
    status = derive_payment_status(booking.payment_status, booking.total_amount, amount_paid)
    assert_payment_transition(booking.payment_status, status)
    return PaymentProjection(
        amount_paid=amount_paid,
        amount_due=amount_due,
        payment_status=status,
    )
