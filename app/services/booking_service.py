"""Booking endpoints of the hostel backend."""

from typing import Any

from app.core.exceptions import BackendError
from app.schemas.booking import (
    Booking,
    BookingCancelRequest,
    BookingCreate,
    BookingStatistics,
    BookingUpdate,
    CheckInRequest,
    CheckOutRequest,
    PaymentCreate,
    SpecialRequestCreate,
    SpecialRequestUpdate,
)
from app.schemas.common import PaginatedResponse, pagination_from
from app.services.backend_client import BackendClient


def _booking_from(body: dict[str, Any]) -> Booking:
    data = body.get("data")
    if not isinstance(data, dict):
        raise BackendError(status_code=502, detail="Backend returned no booking")
    return Booking.model_validate(data)


def _bookings_from(body: dict[str, Any]) -> list[Booking]:
    data = body.get("data")
    if isinstance(data, dict):
        data = data.get("bookings", [])
    return [Booking.model_validate(item) for item in data or []]


def _payload(model) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


class BookingService:
    """One method per backend booking endpoint; no caching, no checks."""

    def __init__(self, client: BackendClient) -> None:
        self.client = client

    async def list_bookings(
        self,
        token: str,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        payment_status: str | None = None,
    ) -> PaginatedResponse[Booking]:
        body = await self.client.get(
            "/bookings",
            token=token,
            params={"page": page, "limit": limit, "status": status, "paymentStatus": payment_status},
        )
        bookings = _bookings_from(body)
        return PaginatedResponse[Booking](
            message=body.get("message", ""),
            data=bookings,
            pagination=pagination_from(body, len(bookings)),
        )

    async def get_history(self, token: str, page: int = 1, limit: int = 10) -> PaginatedResponse[Booking]:
        body = await self.client.get(
            "/bookings/history", token=token, params={"page": page, "limit": limit}
        )
        bookings = _bookings_from(body)
        return PaginatedResponse[Booking](
            message=body.get("message", ""),
            data=bookings,
            pagination=pagination_from(body, len(bookings)),
        )

    async def list_for_student(self, token: str, student_id: str) -> list[Booking]:
        body = await self.client.get(f"/bookings/student/{student_id}", token=token)
        return _bookings_from(body)

    async def get_booking(self, token: str, booking_id: str) -> Booking:
        return _booking_from(await self.client.get(f"/bookings/{booking_id}", token=token))

    async def create_booking(self, token: str, data: BookingCreate) -> Booking:
        return _booking_from(await self.client.post("/bookings", token=token, json=_payload(data)))

    async def update_booking(self, token: str, booking_id: str, data: BookingUpdate) -> Booking:
        return _booking_from(
            await self.client.patch(f"/bookings/{booking_id}", token=token, json=_payload(data))
        )

    async def cancel_booking(self, token: str, booking_id: str, data: BookingCancelRequest) -> Booking:
        return _booking_from(
            await self.client.post(f"/bookings/{booking_id}/cancel", token=token, json=_payload(data))
        )

    async def check_in(self, token: str, booking_id: str, data: CheckInRequest) -> Booking:
        return _booking_from(
            await self.client.post(f"/bookings/{booking_id}/check-in", token=token, json=_payload(data))
        )

    async def check_out(self, token: str, booking_id: str, data: CheckOutRequest) -> Booking:
        return _booking_from(
            await self.client.post(f"/bookings/{booking_id}/check-out", token=token, json=_payload(data))
        )

    async def add_payment(self, token: str, booking_id: str, data: PaymentCreate) -> Booking:
        return _booking_from(
            await self.client.post(f"/bookings/{booking_id}/payments", token=token, json=_payload(data))
        )

    async def add_special_request(self, token: str, booking_id: str, data: SpecialRequestCreate) -> Booking:
        return _booking_from(
            await self.client.post(
                f"/bookings/{booking_id}/special-requests", token=token, json=_payload(data)
            )
        )

    async def update_special_request(
        self, token: str, booking_id: str, index: int, data: SpecialRequestUpdate
    ) -> Booking:
        return _booking_from(
            await self.client.patch(
                f"/bookings/{booking_id}/special-requests/{index}", token=token, json=_payload(data)
            )
        )

    async def accept_terms(self, token: str, booking_id: str) -> Booking:
        return _booking_from(await self.client.post(f"/bookings/{booking_id}/accept-terms", token=token))

    async def get_statistics(self, token: str) -> BookingStatistics:
        body = await self.client.get("/statistics", token=token)
        return BookingStatistics.model_validate(body.get("data") or {})

    async def get_overdue(self, token: str) -> list[Booking]:
        return _bookings_from(await self.client.get("/overdue", token=token))
