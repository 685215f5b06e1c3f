"""Authentication and session schemas."""

from pydantic import EmailStr, Field

from app.core.permissions import Role
from app.schemas.common import CamelModel


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionUser(CamelModel):
    """The parts of the backend's user record the portal keeps per session."""

    id: str
    email: str
    full_name: str | None = None
    role: Role = Role.NONE


class SessionResponse(CamelModel):
    """Current session snapshot as shown to the dashboards."""

    user: SessionUser
    role: Role
    permissions: list[str]
    capabilities: dict[str, bool]
    home_path: str


class LoginResponse(SessionResponse):
    token: str
