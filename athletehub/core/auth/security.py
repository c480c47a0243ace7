# athletehub/core/auth/security.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.config import settings
from athletehub.core.errors import Unauthenticated
from athletehub.core.users.models import User
from athletehub.core.users.service import UsersService
from athletehub.db.base import get_async_db_session

from .schemas import TokenData

log = logging.getLogger(__name__)

# Tokens are issued by the external credential service, tokenUrl is informational.
# auto_error=False so that the session cookie can be tried as well.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/v1/auth/login", auto_error=False)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Encode a JWT access token.

    Args:
        data (dict): Payload. A 'user_id' key is moved to 'sub'.
        expires_delta (timedelta | None, optional): Lifetime. Defaults to
            JWT_ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: The encoded token.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode["exp"] = expire
    if "user_id" in to_encode:
        to_encode["sub"] = str(to_encode.pop("user_id"))
    elif "sub" not in to_encode:
        raise ValueError("Missing 'user_id' or 'sub' in data for JWT")

    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    log.debug("Created JWT token for sub: %s", to_encode.get("sub"))
    return encoded_jwt


def verify_token(token: str) -> TokenData:
    """
    Decode and validate a JWT.

    Raises:
        Unauthenticated: the token is malformed, expired or has no 'sub'.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        user_id: str | None = payload.get("sub")
        if user_id is None:
            log.warning("Token verification failed: 'sub' (user_id) claim missing.")
            raise Unauthenticated()
        token_data = TokenData(user_id=user_id)
    except JWTError as e:
        log.warning("Token verification failed: JWTError - %s", e)
        raise Unauthenticated() from e
    except ValidationError as e:
        log.warning("Token verification failed: ValidationError - %s", e)
        raise Unauthenticated() from e

    log.debug("Token verified successfully for user_id: %s", token_data.user_id)
    return token_data


def _token_from_request(request: Request, bearer: Optional[str]) -> Optional[str]:
    if bearer:
        return bearer
    if settings.AUTH_COOKIE_NAME:
        return request.cookies.get(settings.AUTH_COOKIE_NAME)
    return None


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_async_db_session),
) -> User:
    """
    FastAPI dependency resolving the caller to a user record with role and sport.

    The token comes from ``Authorization: Bearer`` or, failing that, the
    session cookie.

    Raises:
        Unauthenticated: no token, invalid token, or the user no longer exists.
    """
    raw_token = _token_from_request(request, token)
    if not raw_token:
        log.debug("Request without credentials")
        raise Unauthenticated()

    token_data = verify_token(raw_token)
    user = await UsersService(db).get_user(token_data.user_id)
    if user is None:
        log.warning("User with id %s from valid token not found in DB.", token_data.user_id)
        raise Unauthenticated()

    log.debug("Authenticated user retrieved: %r", user)
    return user

