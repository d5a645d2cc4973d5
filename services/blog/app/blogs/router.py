"""
Blogs domain: public and author routes.

Routes (under /api/blogs):
  GET    /                      Published blogs, newest first
  POST   /                      Create a blog (cover image uploaded)
  GET    /popular               Top 20 published by likes (?category=)
  GET    /category              Published blogs in a category (?category=, "all")
  GET    /author/{author_id}    Published blogs of one author
  GET    /dashboard/counts      My totals: blogs, drafts, saved
  GET    /user                  My blogs (drafts included)
  GET    /user/popular          My top 10 by likes
  GET    /user/saved            Blogs I saved
  GET    /user/feed             Latest posts from authors I follow
  POST   /like/{id}             Like / unlike toggle
  POST   /save/{id}             Save / unsave toggle
  POST   /report/{id}           Report a post
  POST   /generate-ai-content   AI draft from title + subtitle
  GET    /{id}                  Blog detail (drafts: author or admin only)
  PUT    /{id}                  Update (author only)
  DELETE /{id}                  Delete with comments, likes and saves

Literal paths are declared before /{id}.
"""
import uuid

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user, get_optional_user
from app.blogs import controller as ctrl
from app.blogs.schemas import (
    AIContentRequest,
    AIContentResponse,
    BlogCreateRequest,
    BlogDetailResponse,
    BlogListResponse,
    BlogResponse,
    BlogUpdateRequest,
    DashboardCountsResponse,
    LikeToggleResponse,
    ReportResponse,
    SaveToggleResponse,
)
from app.config import Settings, get_settings
from app.database import get_db
from app.rate_limit import limiter
from shared.models.base import SuccessResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/blogs", tags=["blogs"])


# ── Public listings ───────────────────────────────────────────────────────────

@router.get("/", response_model=BlogListResponse, summary="List published blogs")
async def list_published(session: AsyncSession = Depends(get_db)) -> BlogListResponse:
    return await ctrl.list_published(session)


@router.post(
    "/",
    response_model=BlogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a blog",
)
async def create_blog(
    body: BlogCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> BlogResponse:
    return await ctrl.create_blog(session, current_user, body, settings)


@router.get("/popular", response_model=BlogListResponse, summary="Most liked published blogs")
async def list_popular(
    category: str | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.list_popular(session, category)


@router.get("/category", response_model=BlogListResponse, summary="Published blogs by category")
async def list_by_category(
    category: str | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.list_by_category(session, category)


@router.get(
    "/author/{author_id}",
    response_model=BlogListResponse,
    summary="Published blogs of an author",
)
async def list_by_author(
    author_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.list_by_author(session, author_id)


# ── Signed-in user's views ────────────────────────────────────────────────────

@router.get(
    "/dashboard/counts",
    response_model=DashboardCountsResponse,
    summary="My dashboard totals",
)
async def dashboard_counts(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> DashboardCountsResponse:
    return await ctrl.dashboard_counts(session, current_user)


@router.get("/user", response_model=BlogListResponse, summary="My blogs, drafts included")
async def list_mine(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.list_mine(session, current_user)


@router.get("/user/popular", response_model=BlogListResponse, summary="My most liked blogs")
async def list_my_popular(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.list_my_popular(session, current_user)


@router.get("/user/saved", response_model=BlogListResponse, summary="Blogs I saved")
async def list_saved(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.list_saved(session, current_user)


@router.get(
    "/user/feed",
    response_model=BlogListResponse,
    summary="Latest posts from authors I follow",
)
async def list_feed(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> BlogListResponse:
    return await ctrl.list_feed(session, current_user)


# ── Engagement ────────────────────────────────────────────────────────────────

@router.post("/like/{blog_id}", response_model=LikeToggleResponse, summary="Like or unlike")
async def toggle_like(
    blog_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> LikeToggleResponse:
    return await ctrl.toggle_like(session, current_user, blog_id)


@router.post("/save/{blog_id}", response_model=SaveToggleResponse, summary="Save or unsave")
async def toggle_save(
    blog_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> SaveToggleResponse:
    return await ctrl.toggle_save(session, current_user, blog_id)


@router.post(
    "/report/{blog_id}",
    response_model=ReportResponse,
    summary="Report a post for moderation",
)
async def report_blog(
    blog_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ReportResponse:
    return await ctrl.report_blog(session, current_user, blog_id)


@router.post(
    "/generate-ai-content",
    response_model=AIContentResponse,
    summary="Generate an HTML draft with AI",
    description="Requires a title and subtitle. Rate-limited to 10 requests per hour.",
)
@limiter.limit("10/hour")
async def generate_ai_content(
    request: Request,
    body: AIContentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> AIContentResponse:
    return await ctrl.generate_ai_content(body, settings)


# ── Single blog ───────────────────────────────────────────────────────────────

@router.get("/{blog_id}", response_model=BlogDetailResponse, summary="Blog detail")
async def get_blog(
    blog_id: uuid.UUID,
    viewer: CurrentUser | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
) -> BlogDetailResponse:
    return await ctrl.get_blog_detail(session, blog_id, viewer)


@router.put("/{blog_id}", response_model=BlogResponse, summary="Update my blog")
async def update_blog(
    blog_id: uuid.UUID,
    body: BlogUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> BlogResponse:
    return await ctrl.update_blog(session, current_user, blog_id, body, settings)


@router.delete("/{blog_id}", response_model=SuccessResponse, summary="Delete my blog")
async def delete_blog(
    blog_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    return await ctrl.delete_blog(session, current_user, blog_id)
