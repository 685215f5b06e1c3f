"""Booking-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import Field, field_validator

from app.domain.booking_state import BookingStatus, PaymentStatus
from app.schemas.common import CamelModel, Money


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    ONLINE = "ONLINE"


class RoomCondition(str, Enum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"
    DAMAGED = "DAMAGED"


class SpecialRequestType(str, Enum):
    ROOM_CHANGE = "ROOM_CHANGE"
    MAINTENANCE = "MAINTENANCE"
    CLEANING = "CLEANING"
    FURNITURE = "FURNITURE"
    INTERNET = "INTERNET"
    SECURITY = "SECURITY"
    GUEST = "GUEST"
    OTHER = "OTHER"


class PaymentHistory(CamelModel):
    payment_id: str | None = None
    amount: Money
    payment_date: datetime | None = None
    payment_method: str | None = None
    status: str | None = None
    transaction_id: str | None = None


class SpecialRequest(CamelModel):
    type: str
    description: str
    status: str = "OPEN"
    requested_at: datetime | None = None
    processed_at: datetime | None = None
    processed_by: str | None = None
    notes: str | None = None


class BookingDocument(CamelModel):
    type: str
    name: str
    url: str
    uploaded_at: datetime | None = None
    verified: bool = False
    verified_at: datetime | None = None
    verified_by: str | None = None


class Terms(CamelModel):
    accepted: bool = False
    version: str = "1.0"
    accepted_at: datetime | None = None
    accepted_by: str | None = None


class Cancellation(CamelModel):
    requested_at: datetime | None = None
    requested_by: str | None = None
    reason: str | None = None
    refund_amount: Money = Decimal("0")
    refund_status: str | None = None


class CheckInRecord(CamelModel):
    checked_in_at: datetime | None = None
    checked_in_by: str | None = None
    room_condition: str | None = None
    notes: str | None = None


class CheckOutRecord(CamelModel):
    checked_out_at: datetime | None = None
    checked_out_by: str | None = None
    room_condition: str | None = None
    damages: list[str] = []
    notes: str | None = None


class Booking(CamelModel):
    """Read copy of the backend's booking record."""

    id: str = Field(alias="_id")
    booking_id: str
    student_id: str
    hostel_id: str
    room_id: str
    bed_id: str | None = None

    status: BookingStatus = BookingStatus.HOLD
    payment_status: PaymentStatus = PaymentStatus.PENDING

    check_in_date: datetime | None = None
    check_out_date: datetime | None = None
    duration: int | None = None

    total_amount: Money
    amount_paid: Money = Decimal("0")
    amount_due: Money = Decimal("0")
    currency: str = "INR"
    due_date: datetime

    payment_history: list[PaymentHistory] = []
    special_requests: list[SpecialRequest] = []
    documents: list[BookingDocument] = []
    terms: Terms = Terms()

    cancellation: Cancellation | None = None
    check_in: CheckInRecord | None = None
    check_out: CheckOutRecord | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("student_id", "hostel_id", "room_id", "bed_id", mode="before")
    @classmethod
    def unwrap_populated_reference(cls, v):
        # populated references arrive as objects carrying their own _id
        if isinstance(v, dict):
            return v.get("_id") or v.get("id")
        return v


class BookingCreate(CamelModel):
    """Schema for creating a booking."""

    student_id: str = Field(..., min_length=1)
    hostel_id: str = Field(..., min_length=1)
    room_id: str = Field(..., min_length=1)
    bed_id: str | None = None
    start_date: datetime
    end_date: datetime | None = None

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v: datetime | None, info) -> datetime | None:
        start = info.data.get("start_date")
        if v is not None and start is not None and v <= start:
            raise ValueError("endDate must be after startDate")
        return v


class BookingUpdate(CamelModel):
    """Schema for updating a booking (admin status changes, date moves)."""

    status: BookingStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class PaymentCreate(CamelModel):
    amount: Decimal = Field(..., gt=0)
    payment_method: PaymentMethod
    transaction_id: str | None = Field(None, max_length=100)


class CheckInRequest(CamelModel):
    room_condition: RoomCondition
    notes: str | None = Field(None, max_length=1000)


class CheckOutRequest(CamelModel):
    room_condition: RoomCondition
    damages: list[str] | None = None
    notes: str | None = Field(None, max_length=1000)

    @field_validator("damages")
    @classmethod
    def dedupe_damages(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        cleaned: list[str] = []
        for damage in v:
            damage = damage.strip()
            if damage and damage not in cleaned:
                cleaned.append(damage)
        return cleaned or None


class BookingCancelRequest(CamelModel):
    reason: str = Field(..., min_length=1, max_length=1000)


class SpecialRequestCreate(CamelModel):
    type: SpecialRequestType
    description: str = Field(..., min_length=1, max_length=1000)


class SpecialRequestUpdate(CamelModel):
    status: str = Field(..., min_length=1)
    notes: str | None = Field(None, max_length=1000)


class BookingActionsResponse(CamelModel):
    pay: bool
    check_in: bool
    check_out: bool
    cancel: bool
    add_special_request: bool
    accept_terms: bool


class BookingView(CamelModel):
    """A booking plus the predicates the dashboards use to enable actions."""

    booking: Booking
    status_label: str
    payment_status_label: str
    is_active: bool
    is_overdue: bool
    actions: BookingActionsResponse


class PaymentPreview(CamelModel):
    """Expected amounts after a payment, computed before submitting it."""

    amount: Money
    amount_paid: Money
    amount_due: Money
    payment_status: PaymentStatus


class BookingStatistics(CamelModel):
    total_bookings: int = 0
    active_bookings: int = 0
    pending_payments: int = 0
    by_status: list[dict] = []
