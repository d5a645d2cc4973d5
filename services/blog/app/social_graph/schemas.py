"""
Social graph domain: Pydantic V2 response schemas.
"""
from __future__ import annotations

import uuid

from shared.models.base import ApiModel


class UserSummary(ApiModel):
    """Minimal user card embedded in follow lists, blog authors and comments."""

    id: uuid.UUID
    name: str
    handle: str | None
    profile_picture: str


class FollowToggleResponse(ApiModel):
    success: bool = True
    following: bool
    message: str


class FollowingListResponse(ApiModel):
    success: bool = True
    following: list[UserSummary]


class FollowersListResponse(ApiModel):
    success: bool = True
    followers: list[UserSummary]
