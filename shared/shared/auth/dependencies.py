"""
Bearer-token dependencies shared by every router.

Only the token is inspected here: signature, expiry, issuer and audience.
Services that must know whether the account still exists wrap these with a
database lookup.
"""
from functools import lru_cache
from typing import Any
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from shared.auth.config import AuthSettings
from shared.constants import Role
from shared.models.user import CurrentUser

http_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_auth_settings() -> AuthSettings:
    return AuthSettings()


def decode_token(token: str, settings: AuthSettings) -> CurrentUser:
    """Verify ``token`` and build the caller identity.

    Raises JWTError for a bad signature, expiry or claim mismatch, and
    ValueError when ``sub`` is missing or not a UUID.
    """
    payload: dict[str, Any] = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        audience=settings.audience,
        options={"leeway": settings.leeway_seconds},
    )
    sub = payload.get("sub")
    if not sub:
        raise ValueError("Missing sub in token")
    return CurrentUser(
        id=UUID(sub),
        email=payload.get("email") or "",
        roles=Role.from_claim(payload.get("roles")),
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    settings: AuthSettings = Depends(get_auth_settings),
) -> CurrentUser | None:
    """Anonymous callers and unreadable tokens both resolve to None."""
    if not credentials or not credentials.credentials:
        return None
    try:
        return decode_token(credentials.credentials, settings)
    except (JWTError, ValueError):
        return None


async def get_current_user_required(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    settings: AuthSettings = Depends(get_auth_settings),
) -> CurrentUser:
    if not credentials or not credentials.credentials:
        raise _unauthorized("Not authorized, no token")
    try:
        return decode_token(credentials.credentials, settings)
    except (JWTError, ValueError):
        raise _unauthorized("Not authorized, token failed")
