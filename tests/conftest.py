import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ------------------------------------------------------------------
# Point the portal at a fake backend before app.main builds settings.
# ------------------------------------------------------------------
os.environ["BACKEND_API_URL"] = "http://backend.test/"
os.environ["LOG_LEVEL"] = "WARNING"

from app.api.deps import get_backend_client, get_booking_store, get_session_registry  # noqa: E402
from app.core.cache import QueryCache  # noqa: E402
from app.core.permissions import Role, permissions_for  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.booking import Booking  # noqa: E402
from app.services.backend_client import BackendClient  # noqa: E402
from app.services.booking_service import BookingService  # noqa: E402
from app.services.booking_store import BookingStore  # noqa: E402
from app.services.session_service import AuthSession, SessionRegistry  # noqa: E402


class FakeBackend:
    """Stand-in for the hostel backend behind an httpx.MockTransport.

    Routes are keyed on (method, path). A route given several responses
    serves them in order and then keeps repeating the last one.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        *responses: dict[str, Any],
        status_code: int = 200,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> None:
        if handler is None:
            queue = list(responses) or [{"success": True}]

            def handler(request: httpx.Request) -> httpx.Response:
                body = queue.pop(0) if len(queue) > 1 else queue[0]
                return httpx.Response(status_code, json=body)

        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": f"No route {request.url.path}"})
        return route(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


def booking_record(**overrides: Any) -> dict[str, Any]:
    """Backend JSON for one booking; defaults describe a fresh confirmed stay."""
    record = {
        "_id": "b1",
        "bookingId": "BK-2024-0001",
        "studentId": "s1",
        "hostelId": {"_id": "h1", "name": "North Block"},
        "roomId": "r1",
        "status": "CONFIRMED",
        "paymentStatus": "PENDING",
        "totalAmount": 5000,
        "amountPaid": 0,
        "amountDue": 5000,
        "currency": "INR",
        "dueDate": (datetime.now(UTC) + timedelta(days=7)).isoformat(),
        "paymentHistory": [],
        "specialRequests": [],
        "documents": [],
        "terms": {"accepted": False, "version": "1.0"},
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    def _make(**overrides: Any) -> Booking:
        return Booking.model_validate(booking_record(**overrides))

    return _make


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture
async def backend_client(backend: FakeBackend):
    client = BackendClient(base_url="http://backend.test", transport=httpx.MockTransport(backend.handle))
    yield client
    await client.close()


@pytest.fixture
def registry(backend_client: BackendClient) -> SessionRegistry:
    return SessionRegistry(backend_client)


@pytest.fixture
def store(backend_client: BackendClient) -> BookingStore:
    return BookingStore(BookingService(backend_client), QueryCache(), detail_ttl=120, history_ttl=300)


@pytest.fixture
def sign_in(registry: SessionRegistry) -> Callable[[Role], dict[str, str]]:
    """Register a session for ``role`` and return its Authorization header."""

    def _sign_in(role: Role, user_id: str | None = None) -> dict[str, str]:
        token = f"token-{role.value.lower()}"
        registry.store(
            AuthSession(
                token=token,
                user_id=user_id or f"u-{role.value.lower()}",
                email=f"{role.value.lower()}@hostel.edu",
                role=role,
                permissions=permissions_for(role),
            )
        )
        return {"Authorization": f"Bearer {token}"}

    return _sign_in


@pytest_asyncio.fixture
async def client(backend_client: BackendClient, registry: SessionRegistry, store: BookingStore):
    """Portal app wired to the fake backend through dependency overrides."""
    app.dependency_overrides[get_backend_client] = lambda: backend_client
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_booking_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def booking_json() -> Callable[..., dict[str, Any]]:
    return booking_record
