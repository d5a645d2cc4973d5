"""
Social graph domain: pure business logic (zero FastAPI imports).

State rules:
  follow toggle:  cannot follow self; target must exist; the edge is removed
                  if present, otherwise added.  Both steps are single
                  conditional statements, never read-then-write, so two
                  concurrent toggles cannot leave a duplicate edge behind.
"""
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.upsert import delete_if_present, insert_if_absent

from app.auth.models import User
from app.exceptions import CannotFollowSelf, UserNotFound
from app.social_graph.models import Follow


# ── Follow toggle ──────────────────────────────────────────────────────────────

async def toggle_follow(
    session: AsyncSession,
    actor_id: uuid.UUID,
    target_id: uuid.UUID,
) -> bool:
    """Flip the actor → target edge.  Returns True when the actor now follows target."""
    if actor_id == target_id:
        raise CannotFollowSelf()
    if await session.get(User, target_id) is None:
        raise UserNotFound()

    if await delete_if_present(session, Follow, follower_id=actor_id, following_id=target_id):
        return False
    await insert_if_absent(session, Follow, follower_id=actor_id, following_id=target_id)
    return True


async def is_following(
    session: AsyncSession, follower_id: uuid.UUID, following_id: uuid.UUID
) -> bool:
    result = await session.execute(
        sa.select(sa.exists().where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        ))
    )
    return result.scalar_one()


# ── Lists ──────────────────────────────────────────────────────────────────────

async def get_following(session: AsyncSession, user_id: uuid.UUID) -> list[User]:
    """Users that ``user_id`` follows, most recent first."""
    result = await session.execute(
        sa.select(User)
        .join(Follow, Follow.following_id == User.id)
        .where(Follow.follower_id == user_id)
        .order_by(Follow.created_at.desc())
    )
    return list(result.scalars().all())


async def get_followers(session: AsyncSession, user_id: uuid.UUID) -> list[User]:
    """Users following ``user_id``, most recent first."""
    result = await session.execute(
        sa.select(User)
        .join(Follow, Follow.follower_id == User.id)
        .where(Follow.following_id == user_id)
        .order_by(Follow.created_at.desc())
    )
    return list(result.scalars().all())


async def get_following_ids(session: AsyncSession, user_id: uuid.UUID) -> list[uuid.UUID]:
    result = await session.execute(
        sa.select(Follow.following_id).where(Follow.follower_id == user_id)
    )
    return list(result.scalars().all())


async def get_follower_ids(session: AsyncSession, user_id: uuid.UUID) -> list[uuid.UUID]:
    result = await session.execute(
        sa.select(Follow.follower_id)
        .where(Follow.following_id == user_id)
        .order_by(Follow.created_at)
    )
    return list(result.scalars().all())


async def count_followers_by_user(
    session: AsyncSession, user_ids: list[uuid.UUID]
) -> dict[uuid.UUID, int]:
    """Follower counts for a batch of users (absent keys mean zero)."""
    if not user_ids:
        return {}
    result = await session.execute(
        sa.select(Follow.following_id, sa.func.count())
        .where(Follow.following_id.in_(user_ids))
        .group_by(Follow.following_id)
    )
    return {row[0]: row[1] for row in result.all()}


async def remove_all_edges(session: AsyncSession, user_id: uuid.UUID) -> int:
    """Drop every edge touching ``user_id`` in either direction.  Returns rows removed."""
    result = await session.execute(
        sa.delete(Follow).where(
            sa.or_(Follow.follower_id == user_id, Follow.following_id == user_id)
        )
    )
    return result.rowcount
