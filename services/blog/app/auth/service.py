"""
Blog service: pure business logic for authentication.

Rules:
  - Zero FastAPI imports.
  - Zero direct DB driver calls: only SQLAlchemy async session.
  - All I/O functions are async def.
  - No side effects beyond the session passed in (no global state mutated).
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.constants import ACCESS_TOKEN_EXPIRE_SECONDS, UserRole
from app.auth.models import User
from app.auth.oauth import OAuthUserInfo
from app.auth.utils import hash_password, verify_password
from app.exceptions import EmailAlreadyRegistered, InvalidPassword, UserDoesNotExist


# ── User queries ──────────────────────────────────────────────────────────────

async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(
        select(User).where(func.lower(User.email) == email.lower())
    )
    return result.scalar_one_or_none()


async def get_user_by_id(
    session: AsyncSession, user_id: uuid.UUID
) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_handle(session: AsyncSession, handle: str) -> User | None:
    result = await session.execute(select(User).where(User.handle == handle))
    return result.scalar_one_or_none()


# ── Registration (email + password) ──────────────────────────────────────────

async def register_user(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
) -> User:
    """
    Create a new account via email + password.

    Uses flush() so the caller can use user.id without committing.
    """
    if await get_user_by_email(session, email) is not None:
        raise EmailAlreadyRegistered()

    user = User(
        name=name,
        email=email.lower(),
        password_hash=hash_password(password),
        role=role,
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError:
        # A concurrent registration took the address after the lookup above.
        raise EmailAlreadyRegistered()
    return user


# ── Authentication (email + password) ────────────────────────────────────────

async def authenticate_user(
    session: AsyncSession,
    email: str,
    password: str,
) -> User:
    """Verify credentials and return the User."""
    user = await get_user_by_email(session, email)
    if user is None:
        raise UserDoesNotExist()
    # Google-only accounts have no password hash and can never match.
    if not verify_password(password, user.password_hash):
        raise InvalidPassword()
    return user


# ── Google sign-in ────────────────────────────────────────────────────────────

async def _unused_handle(session: AsyncSession, base: str) -> str | None:
    """The email local part, suffixed when another account already owns it."""
    candidate = base
    for suffix in range(1, 100):
        if await get_user_by_handle(session, candidate) is None:
            return candidate
        candidate = f"{base}{suffix}"
    return None


async def find_or_create_google_user(
    session: AsyncSession,
    info: OAuthUserInfo,
) -> tuple[User, bool]:
    """
    Log in the account owning ``info.email`` or create it.

    Existing accounts pick up the Google display name and picture on every
    sign-in.  Returns (user, created).
    """
    user = await get_user_by_email(session, info.email)
    if user is not None:
        user.name = info.full_name
        if info.picture_url:
            user.profile_picture = info.picture_url
        if user.google_id is None:
            user.google_id = info.provider_id
        await session.flush()
        return user, False

    local_part = info.email.split("@")[0]
    handle = await _unused_handle(session, local_part) if len(local_part) >= 3 else None
    user = User(
        name=info.full_name,
        email=info.email.lower(),
        password_hash=None,
        google_id=info.provider_id,
        handle=handle,
    )
    if info.picture_url:
        user.profile_picture = info.picture_url
    session.add(user)
    await session.flush()
    return user, True


# ── JWT access token ──────────────────────────────────────────────────────────

def create_access_token(
    user_id: uuid.UUID,
    email: str,
    roles: list[str],
    secret: str,
    algorithm: str,
    issuer: str,
    audience: str,
    expire_seconds: int = ACCESS_TOKEN_EXPIRE_SECONDS,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "roles": roles,
        "iat": now,
        "exp": now + timedelta(seconds=expire_seconds),
        "iss": issuer,
        "aud": audience,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)
