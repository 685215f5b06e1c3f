import httpx
import pytest

from app.core.exceptions import BackendError, NetworkError
from app.services.backend_client import BackendClient


@pytest.mark.asyncio
async def test_bearer_token_is_attached(backend, backend_client):
    backend.on("GET", "/bookings", {"success": True, "data": []})

    await backend_client.get("/bookings", token="abc123")

    request = backend.calls("GET", "/bookings")[0]
    assert request.headers["Authorization"] == "Bearer abc123"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_none_params_are_dropped(backend, backend_client):
    backend.on("GET", "/bookings", {"success": True, "data": []})

    await backend_client.get("/bookings", token="t", params={"page": 2, "status": None})

    request = backend.calls("GET", "/bookings")[0]
    assert dict(request.url.params) == {"page": "2"}


@pytest.mark.asyncio
async def test_error_envelope_surfaces_server_message(backend, backend_client):
    backend.on(
        "POST",
        "/bookings/b1/cancel",
        {"success": False, "message": "Booking already cancelled", "error": "BadRequest", "statusCode": 400},
        status_code=400,
    )

    with pytest.raises(BackendError) as exc:
        await backend_client.post("/bookings/b1/cancel", token="t", json={"reason": "x"})

    assert exc.value.status_code == 400
    assert exc.value.detail == "Booking already cancelled"
    assert exc.value.to_envelope() == {
        "success": False,
        "message": "Booking already cancelled",
        "error": "BadRequest",
        "statusCode": 400,
    }


@pytest.mark.asyncio
async def test_success_false_with_200_is_an_error(backend, backend_client):
    backend.on("GET", "/bookings/b1", {"success": False, "message": "Nope", "statusCode": 409})

    with pytest.raises(BackendError) as exc:
        await backend_client.get("/bookings/b1", token="t")

    assert exc.value.status_code == 409


@pytest.mark.asyncio
async def test_missing_message_falls_back_to_generic(backend, backend_client):
    backend.on(
        "GET",
        "/bookings",
        handler=lambda request: httpx.Response(500, text="<html>oops</html>"),
    )

    with pytest.raises(BackendError) as exc:
        await backend_client.get("/bookings", token="t")

    assert exc.value.status_code == 500
    assert exc.value.detail == "Something went wrong"


@pytest.mark.asyncio
async def test_unauthorized_is_surfaced_without_retry(backend, backend_client):
    backend.on("GET", "/auth/profile", {"success": False, "message": "Token expired"}, status_code=401)

    with pytest.raises(BackendError) as exc:
        await backend_client.get("/auth/profile", token="stale")

    assert exc.value.status_code == 401
    assert len(backend.requests) == 1


@pytest.mark.asyncio
async def test_timeout_becomes_network_error(backend, backend_client):
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    backend.on("GET", "/bookings", handler=slow)

    with pytest.raises(NetworkError) as exc:
        await backend_client.get("/bookings", token="t")

    assert exc.value.status_code == 503
    assert exc.value.detail == "Network error - no response received"
    assert len(backend.requests) == 1


@pytest.mark.asyncio
async def test_connection_failure_becomes_network_error(backend, backend_client):
    def refused(request):
        raise httpx.ConnectError("connection refused", request=request)

    backend.on("GET", "/bookings", handler=refused)

    with pytest.raises(NetworkError):
        await backend_client.get("/bookings", token="t")


@pytest.mark.asyncio
async def test_non_object_body_is_wrapped(backend, backend_client):
    backend.on("GET", "/overdue", handler=lambda request: httpx.Response(200, json=[1, 2]))

    assert await backend_client.get("/overdue", token="t") == {"data": [1, 2]}


def test_default_timeout_is_thirty_seconds():
    assert BackendClient(base_url="http://backend.test").timeout == 30.0
