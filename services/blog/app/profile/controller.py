"""
Profile domain: controller.
"""
from __future__ import annotations

import logging
import uuid
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.base import SuccessResponse

from app import media
from app.auth.constants import PROFILE_PICTURE_FOLDER
from app.auth.schemas import UserResponse
from app.config import Settings
from app.email import send as email
from app.exceptions import EmailDeliveryFailed, MissingFields
from app.profile import service as svc
from app.profile.schemas import (
    ChangePasswordRequest,
    PasswordResetRequest,
    ProfileResponse,
    PublicProfile,
    PublicProfileResponse,
    ResetPasswordRequest,
    UpdatePictureRequest,
    UpdateProfileRequest,
)

logger = logging.getLogger(__name__)

_RESET_REQUESTED = "If an account exists, a recovery email was sent."
_MIN_PASSWORD_LENGTH = 6


async def get_public_profile(session: AsyncSession, user_id: uuid.UUID) -> PublicProfileResponse:
    user, follower_ids, posts_count = await svc.get_public_profile(session, user_id)
    profile = PublicProfile.model_validate(user).model_copy(
        update={
            "followers": follower_ids,
            "followers_count": len(follower_ids),
            "posts_count": posts_count,
        }
    )
    return PublicProfileResponse(user=profile)


async def update_profile(
    session: AsyncSession, user_id: uuid.UUID, body: UpdateProfileRequest
) -> ProfileResponse:
    user = await svc.update_profile(session, user_id, body.model_dump(exclude_unset=True))
    return ProfileResponse(message="Profile updated", user=UserResponse.model_validate(user))


async def update_picture(
    session: AsyncSession,
    user_id: uuid.UUID,
    body: UpdatePictureRequest,
    settings: Settings,
) -> ProfileResponse:
    url = await media.upload_image(
        body.cover_image_base64, body.file_name, PROFILE_PICTURE_FOLDER, settings
    )
    user = await svc.set_profile_picture(session, user_id, url)
    return ProfileResponse(message="Profile picture updated", user=UserResponse.model_validate(user))


async def change_password(
    session: AsyncSession, user_id: uuid.UUID, body: ChangePasswordRequest
) -> SuccessResponse:
    await svc.change_password(
        session,
        user_id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    return SuccessResponse(message="Password updated successfully.")


# ── Password reset ────────────────────────────────────────────────────────────

async def password_reset_request(
    session: AsyncSession,
    body: PasswordResetRequest,
    settings: Settings,
) -> SuccessResponse:
    """
    Store a 1-hour reset token and email the link.

    Unknown addresses get the same success message so accounts cannot be
    enumerated.  A delivery failure is reported as a 500.
    """
    if not body.email:
        raise MissingFields("Email is required.")
    issued = await svc.issue_reset_token(
        session, body.email, expire_seconds=settings.password_reset_expire_seconds
    )
    if issued is None:
        return SuccessResponse(message=_RESET_REQUESTED)

    user, token = issued
    query = urlencode({"token": token, "email": user.email})
    reset_link = f"{settings.app_base_url}/reset-password?{query}"
    logger.info("Password reset requested for user %s", user.id)
    if not await email.send_password_reset(user.email, user.name, reset_link, settings):
        raise EmailDeliveryFailed()
    return SuccessResponse(message=_RESET_REQUESTED)


async def reset_password(
    session: AsyncSession,
    body: ResetPasswordRequest,
) -> SuccessResponse:
    if not body.email or not body.token or not body.new_password:
        raise MissingFields()
    if len(body.new_password) < _MIN_PASSWORD_LENGTH:
        raise MissingFields("Password must be at least 6 characters.")
    await svc.reset_password(
        session,
        email=body.email,
        token=body.token,
        new_password=body.new_password,
    )
    return SuccessResponse(message="Password has been reset. You can now log in.")
