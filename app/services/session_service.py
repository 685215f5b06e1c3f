"""Session snapshots: who the caller is and what their role may do.

A snapshot is taken once per token (at login, or on the first request that
presents an unknown token) and kept until logout or token expiry. Tokens
without an ``exp`` claim get a fixed lifetime, after which the profile is read
again. Permission checks always read the current snapshot.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from app.config import settings
from app.core.exceptions import AuthenticationError
from app.core.permissions import (
    Permission,
    Role,
    capabilities,
    home_path,
    parse_role,
    permissions_for,
)
from app.core.security import token_expiry
from app.services.backend_client import BackendClient, backend_client

logger = logging.getLogger(__name__)


def _opaque_expiry() -> datetime:
    return datetime.now(UTC) + timedelta(seconds=settings.session_opaque_ttl_seconds)


@dataclass(frozen=True)
class AuthSession:
    token: str
    user_id: str
    email: str
    role: Role
    full_name: str | None = None
    expires_at: datetime | None = None
    permissions: frozenset[Permission] = field(default=frozenset())

    @classmethod
    def from_user(cls, token: str, user: dict[str, Any]) -> "AuthSession":
        """Build a snapshot from the backend's user record."""
        user_id = user.get("_id") or user.get("id") or user.get("userId")
        if not user_id:
            raise AuthenticationError("User record is missing an id")
        role = parse_role(user.get("role"))
        full_name = user.get("fullName") or " ".join(
            part for part in (user.get("firstName"), user.get("lastName")) if part
        ) or None
        return cls(
            token=token,
            user_id=str(user_id),
            email=user.get("email", ""),
            role=role,
            full_name=full_name,
            expires_at=token_expiry(token) or _opaque_expiry(),
            permissions=permissions_for(role),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) >= self.expires_at

    def as_response(self) -> dict[str, Any]:
        return {
            "user": {
                "id": self.user_id,
                "email": self.email,
                "full_name": self.full_name,
                "role": self.role,
            },
            "role": self.role,
            "permissions": sorted(perm.value for perm in self.permissions),
            "capabilities": capabilities(self.role),
            "home_path": home_path(self.role),
        }


def _unpack_login(body: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Pull token and user out of the backend's login envelope.

    The backend has answered as ``{data: {token, user}}``, ``{token, data: user}``
    and ``{token, user}``.
    """
    data = body.get("data")
    token = body.get("token")
    user = body.get("user")
    if isinstance(data, dict):
        token = token or data.get("token")
        user = user or data.get("user") or (data if "email" in data else None)
    if not token or not isinstance(user, dict):
        raise AuthenticationError("Login response did not include a token and user")
    return token, user


class SessionRegistry:
    """Token -> session snapshot store for the running process."""

    def __init__(self, client: BackendClient) -> None:
        self.client = client
        self._sessions: dict[str, AuthSession] = {}

    def get(self, token: str) -> AuthSession | None:
        session = self._sessions.get(token)
        if session is not None and session.is_expired():
            self.discard(token)
            return None
        return session

    def store(self, session: AuthSession) -> AuthSession:
        self.sweep()
        self._sessions[session.token] = session
        return session

    def sweep(self) -> int:
        """Forget every expired snapshot; returns how many."""
        now = datetime.now(UTC)
        expired = [token for token, session in self._sessions.items() if session.is_expired(now)]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    def discard(self, token: str) -> AuthSession | None:
        return self._sessions.pop(token, None)

    async def login(self, email: str, password: str) -> AuthSession:
        body = await self.client.post("/auth/login", json={"email": email, "password": password})
        token, user = _unpack_login(body)
        session = self.store(AuthSession.from_user(token, user))
        logger.info(f"Session started for {session.email} ({session.role.value})")
        return session

    async def logout(self, token: str) -> AuthSession | None:
        # the snapshot goes even if the backend call fails
        session = self.discard(token)
        try:
            await self.client.post("/auth/logout", token=token)
        finally:
            if session is not None:
                logger.info(f"Session ended for {session.email}")
        return session

    async def resolve(self, token: str) -> AuthSession:
        """Return the snapshot for ``token``, hydrating it from the profile once."""
        session = self.get(token)
        if session is not None:
            return session
        body = await self.client.get("/auth/profile", token=token)
        user = body.get("data")
        if isinstance(user, dict) and isinstance(user.get("user"), dict):
            user = user["user"]
        if not isinstance(user, dict):
            raise AuthenticationError("Profile response did not include a user")
        session = AuthSession.from_user(token, user)
        if session.is_expired():
            raise AuthenticationError("Token has expired")
        return self.store(session)

    def __len__(self) -> int:
        return len(self._sessions)


session_registry = SessionRegistry(backend_client)
