"""
Admin domain: user management and moderation overview routes.

Routes (under /api/admin, ADMIN role required):
  GET    /dashboard/counts      Totals: users, published posts, reported posts
  GET    /users                 Every other account with post and follower counts
  DELETE /users/{user_id}       Delete an account and everything it owns
  GET    /reports               Reported posts, most reported first

Zero business logic. Zero DB queries.
"""
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin import controller as ctrl
from app.admin.schemas import (
    AdminDashboardCountsResponse,
    AdminUserListResponse,
    ReportedBlogsResponse,
)
from app.auth.dependencies import require_admin
from app.database import get_db
from shared.models.base import SuccessResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/dashboard/counts",
    response_model=AdminDashboardCountsResponse,
    summary="[Admin] Platform totals",
)
async def dashboard_counts(
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> AdminDashboardCountsResponse:
    return await ctrl.dashboard_counts(session)


@router.get("/users", response_model=AdminUserListResponse, summary="[Admin] List users")
async def list_users(
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> AdminUserListResponse:
    return await ctrl.list_users(session, admin)


@router.delete(
    "/users/{user_id}",
    response_model=SuccessResponse,
    summary="[Admin] Delete a user and all of their data",
    description=(
        "Removes the user's posts (with their comments, likes and saves), the user's "
        "comments elsewhere, follow edges in both directions, likes and saves, then the "
        "account itself. Admins cannot delete their own account."
    ),
)
async def delete_user(
    user_id: uuid.UUID,
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    return await ctrl.delete_user(session, admin, user_id)


@router.get(
    "/reports",
    response_model=ReportedBlogsResponse,
    summary="[Admin] Reported posts",
)
async def list_reports(
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> ReportedBlogsResponse:
    return await ctrl.list_reports(session)
