"""
Comments domain: Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from shared.models.base import ApiModel, ApiRequest

from app.comments.constants import COMMENT_MAX_LENGTH
from app.social_graph.schemas import UserSummary


class CommentCreateRequest(ApiRequest):
    content: str = Field(min_length=1, max_length=COMMENT_MAX_LENGTH)


class CommentResponse(ApiModel):
    id: uuid.UUID
    blog_id: uuid.UUID
    author: UserSummary
    content: str
    is_approved: bool
    created_at: datetime


class CommentListResponse(ApiModel):
    success: bool = True
    comments: list[CommentResponse]


class CommentCreatedResponse(ApiModel):
    success: bool = True
    message: str
    comment: CommentResponse
