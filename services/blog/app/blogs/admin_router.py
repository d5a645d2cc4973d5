"""
Blogs domain: admin moderation routes.

Routes (under /api/blogs/admin, ADMIN role required):
  GET    /all-posts                 Every blog, drafts included, newest first
  GET    /top-liked                 Top 5 blogs by likes
  DELETE /posts/{id}                Delete any blog with its comments, likes and saves
  POST   /reports/{id}/dismiss      Clear the report flag and count
"""
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import require_admin
from app.blogs import controller as ctrl
from app.blogs.schemas import BlogListResponse, ReportResponse
from app.database import get_db
from shared.models.base import SuccessResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/blogs/admin", tags=["blogs-admin"])


@router.get("/all-posts", response_model=BlogListResponse, summary="All blogs (admin)")
async def list_all(
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.admin_list_all(session)


@router.get("/top-liked", response_model=BlogListResponse, summary="Top liked blogs (admin)")
async def top_liked(
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.admin_top_liked(session)


@router.delete("/posts/{blog_id}", response_model=SuccessResponse, summary="Delete any blog")
async def delete_post(
    blog_id: uuid.UUID,
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    return await ctrl.admin_delete_blog(session, admin, blog_id)


@router.post(
    "/reports/{blog_id}/dismiss",
    response_model=ReportResponse,
    summary="Dismiss a report",
)
async def dismiss_report(
    blog_id: uuid.UUID,
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> ReportResponse:
    return await ctrl.dismiss_report(session, blog_id)
