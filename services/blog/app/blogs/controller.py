"""
Blogs domain: orchestration layer between routers and services.

Uploads the cover image before the row is written, assembles the detail view
(author followers, engagement ids, comments) and turns (Blog, like_count)
rows into response models.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.base import SuccessResponse
from shared.models.user import CurrentUser

from app import genai, media
from app.blogs import service as svc
from app.blogs.constants import (
    ADMIN_TOP_LIKED_LIMIT,
    COVER_IMAGE_FOLDER,
    FEED_LIMIT,
    POPULAR_LIMIT,
    USER_POPULAR_LIMIT,
)
from app.blogs.models import Blog
from app.blogs.schemas import (
    AIContentRequest,
    AIContentResponse,
    BlogAuthor,
    BlogCreateRequest,
    BlogDetail,
    BlogDetailResponse,
    BlogListResponse,
    BlogOut,
    BlogResponse,
    BlogSummary,
    BlogUpdateRequest,
    DashboardCountsResponse,
    LikeToggleResponse,
    ReportResponse,
    SaveToggleResponse,
)
from app.comments import service as comments_svc
from app.comments.schemas import CommentResponse
from app.config import Settings
from app.exceptions import BlogNotFound, MissingFields
from app.social_graph import service as graph_svc

logger = logging.getLogger(__name__)


# ── Response assembly ─────────────────────────────────────────────────────────

def _summary(blog: Blog, like_count: int) -> BlogSummary:
    return BlogSummary.model_validate(blog).model_copy(update={"like_count": like_count})


def _listing(rows: list[tuple[Blog, int]], message: str | None = None) -> BlogListResponse:
    blogs = [_summary(blog, like_count) for blog, like_count in rows]
    return BlogListResponse(message=message, count=len(blogs), blogs=blogs)


async def _blog_out(session: AsyncSession, blog_id: uuid.UUID) -> BlogOut:
    blog, like_count = await svc.get_blog_with_stats(session, blog_id)
    return BlogOut.model_validate(blog).model_copy(update={"like_count": like_count})


# ── Single blog ───────────────────────────────────────────────────────────────

async def get_blog_detail(
    session: AsyncSession,
    blog_id: uuid.UUID,
    viewer: CurrentUser | None,
) -> BlogDetailResponse:
    blog, like_count = await svc.get_blog_with_stats(session, blog_id)
    if not svc.can_view(blog, viewer.id if viewer else None, viewer.is_admin if viewer else False):
        raise BlogNotFound()

    follower_ids = await graph_svc.get_follower_ids(session, blog.author_id)
    like_ids, save_ids = await svc.get_engagement_ids(session, blog_id)
    comments = await comments_svc.list_comments(session, blog_id, newest_first=True)

    author = BlogAuthor.model_validate(blog.author).model_copy(update={"followers": follower_ids})
    detail = BlogDetail.model_validate(blog).model_copy(
        update={
            "author": author,
            "like_count": like_count,
            "likes": like_ids,
            "saved_by": save_ids,
            "comments": [CommentResponse.model_validate(c) for c in comments],
        }
    )
    return BlogDetailResponse(blog=detail)


async def create_blog(
    session: AsyncSession,
    current_user: CurrentUser,
    body: BlogCreateRequest,
    settings: Settings,
) -> BlogResponse:
    cover_url = await media.upload_image(
        body.cover_image_base64, body.file_name, COVER_IMAGE_FOLDER, settings
    )
    blog = await svc.create_blog(
        session,
        current_user.id,
        title=body.title,
        subtitle=body.subtitle,
        content=body.content,
        cover_image=cover_url,
        category=body.category,
        status=body.status,
    )
    return BlogResponse(message="Blog created successfully", blog=await _blog_out(session, blog.id))


async def update_blog(
    session: AsyncSession,
    current_user: CurrentUser,
    blog_id: uuid.UUID,
    body: BlogUpdateRequest,
    settings: Settings,
) -> BlogResponse:
    # Ownership is checked before any upload happens.
    await svc.assert_can_edit(session, current_user.id, blog_id)
    changes = body.model_dump(exclude_unset=True, exclude={"cover_image_base64", "file_name"})
    changes = {field: value for field, value in changes.items() if value is not None}
    if body.cover_image_base64:
        changes["cover_image"] = await media.upload_image(
            body.cover_image_base64, body.file_name, COVER_IMAGE_FOLDER, settings
        )
    await svc.update_blog(session, current_user.id, blog_id, changes)
    return BlogResponse(message="Blog updated successfully", blog=await _blog_out(session, blog_id))


async def delete_blog(
    session: AsyncSession,
    current_user: CurrentUser,
    blog_id: uuid.UUID,
) -> SuccessResponse:
    await svc.delete_blog(session, current_user.id, blog_id)
    return SuccessResponse(message="Blog deleted successfully")


# ── Public listings ───────────────────────────────────────────────────────────

async def list_published(session: AsyncSession) -> BlogListResponse:
    return _listing(await svc.list_published(session))


async def list_popular(session: AsyncSession, category: str | None) -> BlogListResponse:
    return _listing(await svc.list_popular(session, limit=POPULAR_LIMIT, category=category))


async def list_by_category(session: AsyncSession, category: str | None) -> BlogListResponse:
    return _listing(await svc.list_published(session, category=category))


async def list_by_author(session: AsyncSession, author_id: uuid.UUID) -> BlogListResponse:
    return _listing(await svc.list_by_author(session, author_id))


# ── Signed-in user's views ────────────────────────────────────────────────────

async def list_mine(session: AsyncSession, current_user: CurrentUser) -> BlogListResponse:
    return _listing(await svc.list_by_author(session, current_user.id, published_only=False))


async def list_my_popular(session: AsyncSession, current_user: CurrentUser) -> BlogListResponse:
    rows = await svc.list_popular(session, limit=USER_POPULAR_LIMIT, author_id=current_user.id)
    return _listing(rows)


async def list_saved(session: AsyncSession, current_user: CurrentUser) -> BlogListResponse:
    return _listing(await svc.list_saved(session, current_user.id))


async def list_feed(session: AsyncSession, current_user: CurrentUser) -> BlogListResponse:
    author_ids = await graph_svc.get_following_ids(session, current_user.id)
    if not author_ids:
        return _listing([], message="You are not following any authors.")
    return _listing(await svc.list_feed(session, author_ids, limit=FEED_LIMIT))


async def dashboard_counts(
    session: AsyncSession, current_user: CurrentUser
) -> DashboardCountsResponse:
    counts = await svc.dashboard_counts(session, current_user.id)
    return DashboardCountsResponse(**counts)


# ── Engagement ────────────────────────────────────────────────────────────────

async def toggle_like(
    session: AsyncSession, current_user: CurrentUser, blog_id: uuid.UUID
) -> LikeToggleResponse:
    liked, count = await svc.toggle_like(
        session, current_user.id, blog_id, user_is_admin=current_user.is_admin
    )
    return LikeToggleResponse(
        liked=liked,
        likes_count=count,
        message="Blog liked" if liked else "Blog unliked",
    )


async def toggle_save(
    session: AsyncSession, current_user: CurrentUser, blog_id: uuid.UUID
) -> SaveToggleResponse:
    saved = await svc.toggle_save(
        session, current_user.id, blog_id, user_is_admin=current_user.is_admin
    )
    return SaveToggleResponse(
        saved=saved,
        message="Blog saved" if saved else "Blog removed from saved",
    )


async def report_blog(
    session: AsyncSession, current_user: CurrentUser, blog_id: uuid.UUID
) -> ReportResponse:
    await svc.report_blog(session, current_user.id, blog_id, user_is_admin=current_user.is_admin)
    blog = await svc.get_blog(session, blog_id)
    return ReportResponse(
        message="Post reported. An administrator will review it.",
        is_reported=blog.is_reported,
        report_count=blog.report_count,
    )


# ── AI drafting ───────────────────────────────────────────────────────────────

async def generate_ai_content(body: AIContentRequest, settings: Settings) -> AIContentResponse:
    if not body.title or not body.subtitle:
        raise MissingFields("Title and subtitle are required for AI generation.")
    content = await genai.generate_blog_content(body.title, body.subtitle, body.category, settings)
    return AIContentResponse(content=content)


# ── Admin ─────────────────────────────────────────────────────────────────────

async def admin_list_all(session: AsyncSession) -> BlogListResponse:
    return _listing(await svc.list_all(session))


async def admin_top_liked(session: AsyncSession) -> BlogListResponse:
    rows = await svc.list_popular(session, limit=ADMIN_TOP_LIKED_LIMIT, include_drafts=True)
    return _listing(rows)


async def admin_delete_blog(
    session: AsyncSession, admin: CurrentUser, blog_id: uuid.UUID
) -> SuccessResponse:
    await svc.admin_delete_blog(session, blog_id)
    logger.info("Admin %s deleted blog %s", admin.id, blog_id)
    return SuccessResponse(message="Blog deleted by admin")


async def dismiss_report(session: AsyncSession, blog_id: uuid.UUID) -> ReportResponse:
    blog = await svc.dismiss_report(session, blog_id)
    return ReportResponse(
        message="Report dismissed",
        is_reported=blog.is_reported,
        report_count=blog.report_count,
    )
