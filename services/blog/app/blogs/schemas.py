"""
Blogs domain: Pydantic V2 request/response schemas.

Listing responses never carry `content`; only the single-blog endpoints do.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from shared.models.base import ApiModel, ApiRequest

from app.blogs.constants import SUBTITLE_MAX_LENGTH, TITLE_MAX_LENGTH, BlogCategory, BlogStatus
from app.comments.schemas import CommentResponse
from app.social_graph.schemas import UserSummary


# ── Requests ──────────────────────────────────────────────────────────────────

class BlogCreateRequest(ApiRequest):
    """Body for POST /blogs.  The cover image arrives as base64 and is uploaded first."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    subtitle: str | None = Field(default=None, max_length=SUBTITLE_MAX_LENGTH)
    content: str = Field(min_length=1)
    category: BlogCategory = BlogCategory.DEVELOPMENT
    status: BlogStatus = BlogStatus.PUBLISHED
    cover_image_base64: str = Field(min_length=1)
    file_name: str = "cover.png"


class BlogUpdateRequest(ApiRequest):
    """Body for PUT /blogs/{id}.  Only the fields sent are changed."""

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    subtitle: str | None = Field(default=None, max_length=SUBTITLE_MAX_LENGTH)
    content: str | None = Field(default=None, min_length=1)
    category: BlogCategory | None = None
    status: BlogStatus | None = None
    cover_image_base64: str | None = None
    file_name: str = "cover.png"


class AIContentRequest(ApiRequest):
    title: str = ""
    subtitle: str = ""
    category: str = BlogCategory.DEVELOPMENT.value


# ── Blog representations ──────────────────────────────────────────────────────

class BlogSummary(ApiModel):
    id: uuid.UUID
    title: str
    subtitle: str | None
    cover_image: str
    category: BlogCategory
    status: BlogStatus
    author: UserSummary
    like_count: int = 0
    comment_count: int
    is_reported: bool
    report_count: int
    created_at: datetime
    updated_at: datetime


class BlogOut(BlogSummary):
    content: str


class BlogAuthor(UserSummary):
    followers: list[uuid.UUID] = []


class BlogDetail(BlogOut):
    author: BlogAuthor
    likes: list[uuid.UUID] = []
    saved_by: list[uuid.UUID] = []
    comments: list[CommentResponse] = []


# ── Responses ─────────────────────────────────────────────────────────────────

class BlogListResponse(ApiModel):
    success: bool = True
    message: str | None = None
    count: int
    blogs: list[BlogSummary]


class BlogResponse(ApiModel):
    success: bool = True
    message: str
    blog: BlogOut


class BlogDetailResponse(ApiModel):
    success: bool = True
    blog: BlogDetail


class LikeToggleResponse(ApiModel):
    success: bool = True
    liked: bool
    likes_count: int
    message: str


class SaveToggleResponse(ApiModel):
    success: bool = True
    saved: bool
    message: str


class ReportResponse(ApiModel):
    success: bool = True
    message: str
    is_reported: bool
    report_count: int


class DashboardCountsResponse(ApiModel):
    success: bool = True
    total_blogs: int
    total_drafts: int
    total_saved: int


class AIContentResponse(ApiModel):
    success: bool = True
    content: str
