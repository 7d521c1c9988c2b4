"""FastAPI dependencies that resolve the calling owner from a bearer token."""

import logging
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from staylist.auth.jwt import ACCESS, user_id_from_token
from staylist.database import get_db
from staylist.models.user import User

logger = logging.getLogger(__name__)

# Strict bearer: a missing header is rejected by FastAPI itself
_bearer_scheme = HTTPBearer()

# Optional bearer: a missing header resolves to an anonymous caller
_bearer_scheme_optional = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _load_active_user(db: AsyncSession, user_id: uuid.UUID) -> User | None:
    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Return the signed-in owner.

    Raises:
        HTTPException 401: For an invalid or expired token, a refresh token,
            or an unknown or inactive user.
    """
    try:
        user_id = user_id_from_token(credentials.credentials, ACCESS)
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthorized("Could not validate credentials") from None

    user = await _load_active_user(db, user_id)
    if user is None:
        raise _unauthorized("User not found or inactive")
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme_optional),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Like ``get_current_user`` but anonymous (``None``) instead of 401.

    Used by the public browse endpoints, where a signed-in owner may also see
    their own unpublished listings.
    """
    if credentials is None:
        return None
    try:
        user_id = user_id_from_token(credentials.credentials, ACCESS)
    except JWTError:
        return None
    return await _load_active_user(db, user_id)
