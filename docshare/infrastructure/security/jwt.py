"""Bearer access tokens for docshare users.

A token names one user (sub = user id) and carries typ="access". Group ids
are looked up per request, not embedded. Share links never use tokens; they
travel as the ?share= query parameter.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from docshare.core.config import get_settings

ACCESS_TOKEN_TYPE = "access"


@dataclass(frozen=True)
class AccessTokenClaims:
    """Verified claims of an access token."""

    user_id: str
    expires_at: datetime


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Issue an access token for user_id.

    expires_delta defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    issued_at = datetime.now(UTC)
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": user_id,
        "typ": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(
        claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )


def verify_token(token: str) -> AccessTokenClaims:
    """Verify signature, expiry and token type.

    Raises:
        ValueError: If the token is malformed, expired, signed with another key,
            missing sub, or not an access token.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if payload.get("typ") != ACCESS_TOKEN_TYPE:
        raise ValueError("Not an access token")
    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("Token missing required claim: sub")
    return AccessTokenClaims(
        user_id=user_id, expires_at=datetime.fromtimestamp(payload["exp"], UTC)
    )
