"""
Profile domain: Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from shared.models.base import ApiModel, ApiRequest

from app.auth.constants import ABOUT_MAX_LENGTH, HANDLE_MIN_LENGTH
from app.auth.schemas import UserResponse


# ── Requests ──────────────────────────────────────────────────────────────────

class UpdateProfileRequest(ApiRequest):
    """PATCH /user/profile: only provided fields are written."""

    name: str | None = Field(None, min_length=1, max_length=150)
    handle: str | None = Field(None, min_length=HANDLE_MIN_LENGTH, max_length=50)
    about: str | None = Field(None, max_length=ABOUT_MAX_LENGTH)


class UpdatePictureRequest(ApiRequest):
    cover_image_base64: str = Field(min_length=1)
    file_name: str = "profile.png"


class ChangePasswordRequest(ApiRequest):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)


class PasswordResetRequest(ApiRequest):
    email: str = ""


class ResetPasswordRequest(ApiRequest):
    email: str = ""
    token: str = ""
    new_password: str = Field("", max_length=128)


# ── Responses ─────────────────────────────────────────────────────────────────

class PublicProfile(ApiModel):
    """Public view of an account: no email, no credentials."""

    id: uuid.UUID
    name: str
    handle: str | None
    about: str
    profile_picture: str
    created_at: datetime
    followers: list[uuid.UUID] = []
    followers_count: int = 0
    posts_count: int = 0


class PublicProfileResponse(ApiModel):
    success: bool = True
    user: PublicProfile


class ProfileResponse(ApiModel):
    success: bool = True
    message: str
    user: UserResponse
