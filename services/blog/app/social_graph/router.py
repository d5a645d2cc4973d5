"""
Social graph domain: user-facing routes.

Routes (all under /api):
  POST   /blogs/follow/{user_id}   Follow / unfollow toggle  (50/hour rate limit)
  GET    /user/following           Who I follow
  GET    /user/followers           Who follows me

The follow toggle lives under /blogs because authors are followed from
their posts; the lists sit next to the rest of the account routes.
"""
import uuid

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.database import get_db
from app.rate_limit import limiter
from app.social_graph import controller as ctrl
from app.social_graph.schemas import (
    FollowersListResponse,
    FollowingListResponse,
    FollowToggleResponse,
)
from shared.models.user import CurrentUser

router = APIRouter(tags=["social-graph"])


@router.post(
    "/blogs/follow/{user_id}",
    response_model=FollowToggleResponse,
    summary="Follow or unfollow a user",
    description=(
        "Toggles the follow edge from the caller to `user_id`. "
        "Rate-limited to 50 toggles per hour."
    ),
)
@limiter.limit("50/hour")
async def toggle_follow(
    request: Request,
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FollowToggleResponse:
    return await ctrl.toggle_follow(session, current_user.id, user_id)


@router.get(
    "/user/following",
    response_model=FollowingListResponse,
    summary="List the users I follow",
)
async def list_following(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FollowingListResponse:
    return await ctrl.list_following(session, current_user.id)


@router.get(
    "/user/followers",
    response_model=FollowersListResponse,
    summary="List the users following me",
)
async def list_followers(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FollowersListResponse:
    return await ctrl.list_followers(session, current_user.id)
