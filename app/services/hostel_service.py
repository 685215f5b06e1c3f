"""Hostel and room lookups (read side of ``/hostels``)."""

from typing import Any

from app.core.exceptions import BackendError
from app.schemas.common import PaginatedResponse, pagination_from
from app.schemas.hostel import Hostel, Room
from app.services.backend_client import BackendClient


def _items(body: dict[str, Any], key: str) -> list[dict[str, Any]]:
    data = body.get("data")
    if isinstance(data, dict):
        data = data.get(key, [])
    return data or []


class HostelService:
    def __init__(self, client: BackendClient) -> None:
        self.client = client

    async def list_hostels(
        self, token: str, page: int = 1, limit: int = 10, search: str | None = None
    ) -> PaginatedResponse[Hostel]:
        body = await self.client.get(
            "/hostels", token=token, params={"page": page, "limit": limit, "search": search}
        )
        hostels = [Hostel.model_validate(item) for item in _items(body, "hostels")]
        counters = body
        if "pagination" not in body and "total" in body:
            # this listing puts the counters at the top level
            counters = {"pagination": {key: body[key] for key in ("page", "limit", "total") if key in body}}
        return PaginatedResponse[Hostel](
            message=body.get("message", ""),
            data=hostels,
            pagination=pagination_from(counters, len(hostels)),
        )

    async def search_hostels(self, token: str, query: str) -> list[Hostel]:
        body = await self.client.get("/hostels/search", token=token, params={"q": query})
        return [Hostel.model_validate(item) for item in _items(body, "hostels")]

    async def get_hostel(self, token: str, hostel_id: str) -> Hostel:
        body = await self.client.get(f"/hostels/{hostel_id}", token=token)
        if not isinstance(body.get("data"), dict):
            raise BackendError(status_code=502, detail="Backend returned no hostel")
        return Hostel.model_validate(body["data"])

    async def list_rooms(self, token: str, hostel_id: str, available_only: bool = False) -> list[Room]:
        path = f"/hostels/{hostel_id}/rooms"
        if available_only:
            path += "/available"
        body = await self.client.get(path, token=token)
        return [Room.model_validate(item) for item in _items(body, "rooms")]
