"""
Admin domain: pure business logic (zero FastAPI imports).
"""
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.blogs.service import count_published, count_published_by_author, count_reported
from app.social_graph.service import count_followers_by_user


async def count_users(session: AsyncSession) -> int:
    count = await session.scalar(sa.select(sa.func.count()).select_from(User))
    return count or 0


async def dashboard_counts(session: AsyncSession) -> dict[str, int]:
    return {
        "total_users": await count_users(session),
        "total_posts": await count_published(session),
        "total_reported_blogs": await count_reported(session),
    }


async def list_other_users(
    session: AsyncSession, admin_id: uuid.UUID
) -> list[tuple[User, int, int]]:
    """
    Every account except the calling admin, newest first.

    Returns (user, published post count, follower count) triples.
    """
    result = await session.execute(
        sa.select(User).where(User.id != admin_id).order_by(User.created_at.desc())
    )
    users = list(result.scalars().all())
    ids = [u.id for u in users]
    posts = await count_published_by_author(session, ids)
    followers = await count_followers_by_user(session, ids)
    return [(u, posts.get(u.id, 0), followers.get(u.id, 0)) for u in users]
