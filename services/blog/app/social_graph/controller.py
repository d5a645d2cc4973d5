"""
Social graph domain: request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.social_graph import service as svc
from app.social_graph.schemas import (
    FollowersListResponse,
    FollowingListResponse,
    FollowToggleResponse,
    UserSummary,
)


async def toggle_follow(
    session: AsyncSession,
    actor_id: uuid.UUID,
    target_id: uuid.UUID,
) -> FollowToggleResponse:
    following = await svc.toggle_follow(session, actor_id, target_id)
    return FollowToggleResponse(
        following=following,
        message="Following" if following else "Unfollowed",
    )


async def list_following(session: AsyncSession, user_id: uuid.UUID) -> FollowingListResponse:
    users = await svc.get_following(session, user_id)
    return FollowingListResponse(following=[UserSummary.model_validate(u) for u in users])


async def list_followers(session: AsyncSession, user_id: uuid.UUID) -> FollowersListResponse:
    users = await svc.get_followers(session, user_id)
    return FollowersListResponse(followers=[UserSummary.model_validate(u) for u in users])
