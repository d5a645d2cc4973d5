"""
Blog service: auth-specific FastAPI dependencies.

These wrap the shared token dependencies and add a database lookup so that a
token belonging to a deleted account stops working immediately, and so the
role comes from the users table rather than from a possibly stale claim.
"""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.auth.dependencies import (
    get_current_user_optional,
    get_current_user_required,
)
from shared.constants import Role
from shared.models.user import CurrentUser

from app.auth.models import User
from app.auth.service import get_user_by_id
from app.database import get_db
from app.exceptions import AccountNotFound, AdminRequired


def _to_current_user(user: User) -> CurrentUser:
    return CurrentUser(id=user.id, email=user.email, roles=[Role(r) for r in user.roles])


# ── Base user dependencies ────────────────────────────────────────────────────

async def get_current_user(
    token_user: CurrentUser = Depends(get_current_user_required),
    session: AsyncSession = Depends(get_db),
) -> CurrentUser:
    user = await get_user_by_id(session, token_user.id)
    if user is None:
        raise AccountNotFound()
    return _to_current_user(user)


async def get_optional_user(
    token_user: CurrentUser | None = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db),
) -> CurrentUser | None:
    if token_user is None:
        return None
    user = await get_user_by_id(session, token_user.id)
    return _to_current_user(user) if user is not None else None


# ── Role guards ───────────────────────────────────────────────────────────────

def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Raise 403 unless the authenticated user holds the ADMIN role."""
    if not current_user.is_admin:
        raise AdminRequired()
    return current_user
