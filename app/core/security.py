"""Bearer token helpers.

Tokens are issued and verified by the hostel backend. The portal only reads
their claims to know when a cached session snapshot goes stale.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt

from app.core.exceptions import AuthenticationError


def read_token_claims(token: str) -> dict[str, Any]:
    """Decode the JWT payload without verifying the signature.

    Raises:
        AuthenticationError: If the token is not a well-formed JWT.
    """
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        raise AuthenticationError(f"Malformed token: {str(e)}")


def token_expiry(token: str) -> datetime | None:
    """Expiry time carried in the token's ``exp`` claim, if any."""
    try:
        claims = read_token_claims(token)
    except AuthenticationError:
        return None
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=UTC)


def bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    """Extract the raw token from an ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    return credentials.credentials
