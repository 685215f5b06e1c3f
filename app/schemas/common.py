"""Shared schema building blocks and the backend response envelopes."""

from decimal import Decimal
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Non-negative amount, emitted as a JSON number
Money = Annotated[
    Decimal,
    Field(ge=0),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base model speaking the backend's camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ApiResponse(CamelModel, Generic[T]):
    """Standard success envelope."""

    success: bool = True
    message: str = ""
    data: T | None = None


class ErrorResponse(CamelModel):
    """Standard error envelope."""

    success: bool = False
    message: str
    error: str | None = None
    status_code: int | None = None
    redirect_to: str | None = None
    errors: list[dict[str, Any]] | None = None


class Pagination(CamelModel):
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0


class PaginatedResponse(CamelModel, Generic[T]):
    """List envelope with pagination metadata."""

    success: bool = True
    message: str = ""
    data: list[T] = []
    pagination: Pagination = Pagination()


def pagination_from(body: dict[str, Any], item_count: int) -> Pagination:
    """Read pagination metadata from either backend layout.

    Bookings put it under ``pagination``; admin listings inline
    ``total/page/limit/totalPages`` beside the items in ``data``.
    """
    raw = body.get("pagination")
    if raw is None and isinstance(body.get("data"), dict):
        raw = body["data"]
    if not isinstance(raw, dict):
        return Pagination(page=1, limit=item_count, total=item_count, total_pages=1)
    return Pagination.model_validate(raw)
