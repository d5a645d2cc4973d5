"""
Comments domain: request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.user import CurrentUser

from app.blogs.service import get_visible_blog
from app.comments import service as svc
from app.comments.schemas import (
    CommentCreatedResponse,
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
)


async def list_comments(
    session: AsyncSession,
    blog_id: uuid.UUID,
    viewer: CurrentUser | None,
) -> CommentListResponse:
    await get_visible_blog(
        session,
        blog_id,
        viewer.id if viewer else None,
        viewer.is_admin if viewer else False,
    )
    comments = await svc.list_comments(session, blog_id)
    return CommentListResponse(comments=[CommentResponse.model_validate(c) for c in comments])


async def create_comment(
    session: AsyncSession,
    current_user: CurrentUser,
    blog_id: uuid.UUID,
    body: CommentCreateRequest,
) -> CommentCreatedResponse:
    comment = await svc.create_comment(
        session,
        current_user.id,
        blog_id,
        body.content,
        author_is_admin=current_user.is_admin,
    )
    return CommentCreatedResponse(
        message="Comment posted.",
        comment=CommentResponse.model_validate(comment),
    )
