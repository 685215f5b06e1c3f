"""Hostel, room and bed schemas (read side)."""

from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, Money


class Hostel(CamelModel):
    id: str = Field(alias="_id")
    name: str
    code: str | None = None
    campus: str | None = None
    gender: str | None = None
    address: dict | str | None = None
    amenities: list[str] = []
    total_rooms: int | None = None
    total_beds: int | None = None
    available_beds: int | None = None
    is_active: bool = True
    created_at: datetime | None = None


class Room(CamelModel):
    id: str = Field(alias="_id")
    hostel_id: str
    number: str
    type: str | None = None
    floor: int | None = None
    capacity: int | None = None
    occupied_beds: int | None = None
    price_per_month: Money | None = None
    status: str | None = None

    @field_validator("hostel_id", mode="before")
    @classmethod
    def unwrap_hostel(cls, v):
        if isinstance(v, dict):
            return v.get("_id") or v.get("id")
        return v
