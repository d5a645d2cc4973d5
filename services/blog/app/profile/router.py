"""
Profile domain: router.

Routes (under /api/user):
  GET    /profile/{user_id}         Public profile with followers and post count
  PATCH  /profile                   Update name / handle / about
  PATCH  /picture                   Upload a new profile picture
  PATCH  /password                  Change password (current password required)
  POST   /password-reset-request    Email a 1-hour reset link   (5/hour rate limit)
  POST   /reset-password            Consume the link token and set a new password
"""
import uuid

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.config import Settings, get_settings
from app.database import get_db
from app.profile import controller as ctrl
from app.profile.schemas import (
    ChangePasswordRequest,
    PasswordResetRequest,
    ProfileResponse,
    PublicProfileResponse,
    ResetPasswordRequest,
    UpdatePictureRequest,
    UpdateProfileRequest,
)
from app.rate_limit import limiter
from shared.models.base import SuccessResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/user", tags=["profile"])


@router.get(
    "/profile/{user_id}",
    response_model=PublicProfileResponse,
    summary="Get any user's public profile",
)
async def get_profile(
    user_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> PublicProfileResponse:
    return await ctrl.get_public_profile(session, user_id)


@router.patch(
    "/profile",
    response_model=ProfileResponse,
    summary="Update own profile (partial: only provided fields are written)",
)
async def update_profile(
    body: UpdateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    return await ctrl.update_profile(session, current_user.id, body)


@router.patch("/picture", response_model=ProfileResponse, summary="Upload a profile picture")
async def update_picture(
    body: UpdatePictureRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ProfileResponse:
    return await ctrl.update_picture(session, current_user.id, body, settings)


@router.patch("/password", response_model=SuccessResponse, summary="Change password")
async def change_password(
    body: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    return await ctrl.change_password(session, current_user.id, body)


@router.post(
    "/password-reset-request",
    response_model=SuccessResponse,
    summary="Request a password reset link",
    description=(
        "Always answers with the same message whether or not the account exists. "
        "Rate-limited to 5 requests per hour."
    ),
)
@limiter.limit("5/hour")
async def password_reset_request(
    request: Request,
    body: PasswordResetRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SuccessResponse:
    return await ctrl.password_reset_request(session, body, settings)


@router.post(
    "/reset-password",
    response_model=SuccessResponse,
    summary="Set a new password with a reset link token",
)
@limiter.limit("5/hour")
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    session: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    return await ctrl.reset_password(session, body)
