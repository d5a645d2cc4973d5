"""
Comments domain: routes.

Routes (under /api/comments):
  GET    /{blog_id}   Approved comments, oldest first
  POST   /{blog_id}   Add a comment (1–500 chars)
"""
import uuid

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user, get_optional_user
from app.comments import controller as ctrl
from app.comments.schemas import (
    CommentCreatedResponse,
    CommentCreateRequest,
    CommentListResponse,
)
from app.database import get_db
from app.rate_limit import limiter
from shared.models.user import CurrentUser

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get(
    "/{blog_id}",
    response_model=CommentListResponse,
    summary="List comments on a blog",
)
async def list_comments(
    blog_id: uuid.UUID,
    viewer: CurrentUser | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
) -> CommentListResponse:
    return await ctrl.list_comments(session, blog_id, viewer)


@router.post(
    "/{blog_id}",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a blog",
)
@limiter.limit("30/minute")
async def create_comment(
    request: Request,
    blog_id: uuid.UUID,
    body: CommentCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> CommentCreatedResponse:
    return await ctrl.create_comment(session, current_user, blog_id, body)
