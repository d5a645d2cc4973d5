"""
Admin domain: Pydantic V2 response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from shared.models.base import ApiModel

from app.auth.constants import UserRole
from app.blogs.schemas import BlogSummary


class AdminUserResponse(ApiModel):
    """Single user record returned to the admin panel."""

    id: uuid.UUID
    name: str
    email: str
    handle: str | None
    role: UserRole
    profile_picture: str
    created_at: datetime
    posts: int = 0
    follower_count: int = 0


class AdminUserListResponse(ApiModel):
    success: bool = True
    count: int
    users: list[AdminUserResponse]


class AdminDashboardCountsResponse(ApiModel):
    success: bool = True
    total_users: int
    total_posts: int
    total_reported_blogs: int


class ReportedBlogsResponse(ApiModel):
    success: bool = True
    count: int
    blogs: list[BlogSummary]
