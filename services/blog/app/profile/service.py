"""
Profile domain: pure business logic (zero FastAPI imports).

Covers the account's own data: profile fields, picture, password change and
the link-based password reset.  Reset tokens are single-use; only their
sha256 digest is stored, next to an expiry.
"""
from __future__ import annotations

import hmac
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.service import get_user_by_email, get_user_by_handle, get_user_by_id
from app.auth.utils import generate_reset_token, hash_password, hash_reset_token, verify_password
from app.blogs.service import count_published_by_author
from app.exceptions import CurrentPasswordIncorrect, HandleTaken, InvalidResetLink, UserNotFound
from app.social_graph.service import get_follower_ids

PROFILE_FIELDS = frozenset({"name", "handle", "about"})


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User:
    """Load a user by PK; raise 404 if not found."""
    user = await get_user_by_id(session, user_id)
    if user is None:
        raise UserNotFound()
    return user


async def get_public_profile(
    session: AsyncSession, user_id: uuid.UUID
) -> tuple[User, list[uuid.UUID], int]:
    """Return (user, follower ids, published post count)."""
    user = await get_user(session, user_id)
    follower_ids = await get_follower_ids(session, user_id)
    posts = await count_published_by_author(session, [user_id])
    return user, follower_ids, posts.get(user_id, 0)


async def update_profile(
    session: AsyncSession, user_id: uuid.UUID, changes: dict[str, Any]
) -> User:
    user = await get_user(session, user_id)
    handle = changes.get("handle")
    if handle is not None and handle != user.handle:
        holder = await get_user_by_handle(session, handle)
        if holder is not None and holder.id != user.id:
            raise HandleTaken()

    for field, value in changes.items():
        if field in PROFILE_FIELDS and value is not None:
            setattr(user, field, value)
    try:
        await session.flush()
    except IntegrityError:
        # Another account claimed the handle between the check and the write.
        raise HandleTaken()
    return user


async def set_profile_picture(session: AsyncSession, user_id: uuid.UUID, url: str) -> User:
    user = await get_user(session, user_id)
    user.profile_picture = url
    await session.flush()
    return user


async def change_password(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    current_password: str,
    new_password: str,
) -> None:
    user = await get_user(session, user_id)
    if not verify_password(current_password, user.password_hash):
        raise CurrentPasswordIncorrect()
    user.password_hash = hash_password(new_password)
    await session.flush()


# ── Link-based password reset ─────────────────────────────────────────────────

async def issue_reset_token(
    session: AsyncSession,
    email: str,
    *,
    expire_seconds: int,
) -> tuple[User, str] | None:
    """
    Store a fresh reset token for the account with this email.

    Returns (user, plain token), or None when no such account exists.  A new
    token replaces any earlier one.
    """
    user = await get_user_by_email(session, email)
    if user is None:
        return None
    token = generate_reset_token()
    user.reset_token_hash = hash_reset_token(token)
    user.reset_token_expires_at = datetime.now(timezone.utc) + timedelta(seconds=expire_seconds)
    await session.flush()
    return user, token


def _is_expired(expires_at: datetime | None) -> bool:
    if expires_at is None:
        return True
    # SQLite hands back naive datetimes; they were written as UTC.
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= datetime.now(timezone.utc)


async def reset_password(
    session: AsyncSession,
    *,
    email: str,
    token: str,
    new_password: str,
) -> User:
    """Consume a reset token and set the new password.  Raises InvalidResetLink."""
    user = await get_user_by_email(session, email)
    if user is None or not user.reset_token_hash:
        raise InvalidResetLink()
    if not hmac.compare_digest(user.reset_token_hash, hash_reset_token(token)):
        raise InvalidResetLink()
    if _is_expired(user.reset_token_expires_at):
        raise InvalidResetLink()

    user.password_hash = hash_password(new_password)
    user.reset_token_hash = None
    user.reset_token_expires_at = None
    await session.flush()
    return user
