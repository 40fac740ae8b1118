"""Security utilities: JWT access tokens.

Tokens are issued by the account service; this API verifies them and
reads the integer user id from ``sub``. ``create_access_token`` exists for
development tooling and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from recallguard.core.config import settings


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Create a JWT access token for user_id."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": expire,
        "type": "access",
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def verify_access_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT access token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except jwt.ExpiredSignatureError:
        raise jwt.InvalidTokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {e}")

    if payload.get("type", "access") != "access":
        raise jwt.InvalidTokenError("Token is not an access token")
    return payload


def user_id_from_payload(payload: dict[str, Any]) -> int:
    """Extract the integer user id from a decoded token."""
    # Older tokens carry userId instead of sub
    raw = payload.get("sub", payload.get("userId"))
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise jwt.InvalidTokenError("Token subject is not a user id") from None
