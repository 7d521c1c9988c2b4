"""Access and refresh tokens for owner sessions.

Both kinds carry the user id in ``sub`` and their kind in ``type``, so a
refresh token can never be replayed as an access token or the reverse.
"""

import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from staylist.config import settings

ACCESS = "access"
REFRESH = "refresh"


def _encode(user_id: uuid.UUID | str, token_type: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    claims = {"sub": str(user_id), "type": token_type, "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: uuid.UUID | str, expires_delta: timedelta | None = None) -> str:
    """Short-lived token sent as ``Authorization: Bearer`` on every API call."""
    return _encode(user_id, ACCESS, expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes))


def create_refresh_token(user_id: uuid.UUID | str, expires_delta: timedelta | None = None) -> str:
    """Long-lived token accepted only by ``POST /auth/refresh``."""
    return _encode(user_id, REFRESH, expires_delta or timedelta(days=settings.jwt_refresh_token_expire_days))


def decode_token(token: str) -> dict:
    """Verify signature and expiry and return the claims.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def user_id_from_token(token: str, expected_type: str) -> uuid.UUID:
    """Return the user id of a valid token of *expected_type*.

    Raises:
        jose.JWTError: For a bad token, the wrong token type, or a malformed subject.
    """
    claims = decode_token(token)
    if claims.get("type") != expected_type:
        raise JWTError(f"Expected a {expected_type} token")
    try:
        return uuid.UUID(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise JWTError("Token subject is not a user id") from None


def create_token_pair(user_id: uuid.UUID | str) -> dict[str, str]:
    return {
        "access_token": create_access_token(user_id),
        "refresh_token": create_refresh_token(user_id),
        "token_type": "bearer",
    }
