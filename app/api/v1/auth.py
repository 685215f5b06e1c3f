"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from app.api.deps import (
    CurrentSession,
    get_booking_store,
    get_session_registry,
    security,
)
from app.core.security import bearer_token
from app.schemas.auth import LoginResponse, SessionResponse, UserLogin
from app.schemas.common import ApiResponse
from app.services.booking_store import BookingStore
from app.services.session_service import SessionRegistry

router = APIRouter()


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    credentials: UserLogin,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> ApiResponse[LoginResponse]:
    """Login with email and password against the hostel backend."""
    session = await registry.login(credentials.email, credentials.password)
    return ApiResponse[LoginResponse](
        message="Login successful",
        data=LoginResponse(token=session.token, **session.as_response()),
    )


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    store: Annotated[BookingStore, Depends(get_booking_store)],
) -> ApiResponse[None]:
    """End the session and drop everything cached for it."""
    token = bearer_token(credentials)
    session = registry.get(token)
    try:
        await registry.logout(token)
    finally:
        if session is not None:
            store.invalidate_user(session.user_id)
    return ApiResponse[None](message="Logged out")


@router.get("/session", response_model=ApiResponse[SessionResponse])
async def get_session(session: CurrentSession) -> ApiResponse[SessionResponse]:
    """Get the caller's role, permissions and capability flags."""
    return ApiResponse[SessionResponse](data=SessionResponse(**session.as_response()))
