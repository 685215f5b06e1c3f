from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.config import settings
from app.core.exceptions import AuthenticationError, BackendError
from app.core.permissions import Permission, Role
from app.core.security import read_token_claims, token_expiry
from app.services.session_service import AuthSession

USER = {"_id": "u1", "email": "staff@hostel.edu", "fullName": "Asha Rao", "role": "STAFF"}


def make_token(minutes: int) -> str:
    exp = datetime.now(UTC) + timedelta(minutes=minutes)
    return jwt.encode({"sub": "u1", "exp": int(exp.timestamp())}, "test-secret", algorithm="HS256")


def test_token_expiry_is_read_without_verification():
    token = make_token(30)
    assert read_token_claims(token)["sub"] == "u1"
    assert token_expiry(token) > datetime.now(UTC)


def test_opaque_token_has_no_expiry():
    assert token_expiry("not-a-jwt") is None
    with pytest.raises(AuthenticationError):
        read_token_claims("not-a-jwt")


def test_session_snapshot_from_user_record():
    session = AuthSession.from_user(make_token(30), USER)
    assert session.role is Role.STAFF
    assert Permission.BOOKINGS_READ in session.permissions
    assert Permission.BOOKINGS_APPROVE not in session.permissions
    assert session.full_name == "Asha Rao"
    assert not session.is_expired()


def test_unknown_role_gets_no_access():
    session = AuthSession.from_user("opaque", {**USER, "role": "WARDEN"})
    assert session.role is Role.NONE
    assert session.permissions == frozenset()
    assert session.as_response()["home_path"] == "/auth/login"


def test_user_without_id_is_rejected():
    with pytest.raises(AuthenticationError):
        AuthSession.from_user("opaque", {"email": "x@hostel.edu", "role": "STUDENT"})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"success": True, "data": {"token": "tok", "user": USER}},
        {"success": True, "token": "tok", "data": USER},
        {"success": True, "token": "tok", "user": USER},
    ],
)
async def test_login_accepts_each_envelope_shape(backend, registry, body):
    backend.on("POST", "/auth/login", body)

    session = await registry.login("staff@hostel.edu", "secret")

    assert session.token == "tok"
    assert registry.get("tok") is session


@pytest.mark.asyncio
async def test_bad_credentials_surface_backend_message(backend, registry):
    backend.on("POST", "/auth/login", {"success": False, "message": "Invalid credentials"}, status_code=401)

    with pytest.raises(BackendError) as exc:
        await registry.login("staff@hostel.edu", "wrong")

    assert exc.value.status_code == 401
    assert exc.value.detail == "Invalid credentials"
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_unknown_token_is_hydrated_once(backend, registry):
    token = make_token(30)
    backend.on("GET", "/auth/profile", {"success": True, "data": USER})

    first = await registry.resolve(token)
    second = await registry.resolve(token)

    assert first is second
    assert len(backend.calls("GET", "/auth/profile")) == 1


@pytest.mark.asyncio
async def test_expired_snapshot_is_evicted(registry):
    session = registry.store(AuthSession.from_user(make_token(-1), USER))

    assert session.is_expired()
    assert registry.get(session.token) is None
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_expired_token_is_not_hydrated(backend, registry):
    backend.on("GET", "/auth/profile", {"success": True, "data": USER})

    with pytest.raises(AuthenticationError):
        await registry.resolve(make_token(-5))


@pytest.mark.asyncio
async def test_logout_discards_snapshot_even_if_backend_fails(backend, registry):
    registry.store(AuthSession.from_user("tok", USER))
    backend.on("POST", "/auth/logout", {"success": False, "message": "boom"}, status_code=500)

    with pytest.raises(BackendError):
        await registry.logout("tok")

    assert registry.get("tok") is None


def test_opaque_token_gets_a_bounded_lifetime():
    session = AuthSession.from_user("opaque", USER)

    assert session.expires_at is not None
    assert not session.is_expired()
    assert session.is_expired(datetime.now(UTC) + timedelta(seconds=settings.session_opaque_ttl_seconds + 1))


@pytest.mark.asyncio
async def test_storing_sweeps_expired_snapshots(registry):
    for n in range(3):
        registry.store(AuthSession.from_user(make_token(-n - 1), {**USER, "_id": f"u{n}"}))
    assert len(registry) == 1

    registry.store(AuthSession.from_user(make_token(30), USER))

    assert len(registry) == 1
