"""
Admin domain: request orchestration layer.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.base import SuccessResponse
from shared.models.user import CurrentUser

from app.admin import cascade
from app.admin import service as svc
from app.admin.schemas import (
    AdminDashboardCountsResponse,
    AdminUserListResponse,
    AdminUserResponse,
    ReportedBlogsResponse,
)
from app.blogs import service as blogs_svc
from app.blogs.schemas import BlogSummary


async def dashboard_counts(session: AsyncSession) -> AdminDashboardCountsResponse:
    return AdminDashboardCountsResponse(**await svc.dashboard_counts(session))


async def list_users(session: AsyncSession, admin: CurrentUser) -> AdminUserListResponse:
    rows = await svc.list_other_users(session, admin.id)
    users = [
        AdminUserResponse.model_validate(user).model_copy(
            update={"posts": posts, "follower_count": followers}
        )
        for user, posts, followers in rows
    ]
    return AdminUserListResponse(count=len(users), users=users)


async def delete_user(
    session: AsyncSession, admin: CurrentUser, user_id: uuid.UUID
) -> SuccessResponse:
    await cascade.delete_user(session, admin.id, user_id)
    return SuccessResponse(message="User and all related data deleted.")


async def list_reports(session: AsyncSession) -> ReportedBlogsResponse:
    rows = await blogs_svc.list_reported(session)
    blogs = [
        BlogSummary.model_validate(blog).model_copy(update={"like_count": like_count})
        for blog, like_count in rows
    ]
    return ReportedBlogsResponse(count=len(blogs), blogs=blogs)
