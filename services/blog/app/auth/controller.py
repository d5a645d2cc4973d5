"""
Blog service: auth controller (request orchestration layer).

Responsibilities:
  - Receive validated input from the router.
  - Call service functions (which own business logic).
  - Compose and return the response model.

No framework validation logic here: that belongs in schemas.py.
No business logic here: that belongs in service.py.
"""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.oauth import verify_google_id_token
from app.auth.schemas import (
    AuthResponse,
    GoogleAuthRequest,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from app.auth.service import (
    authenticate_user,
    create_access_token,
    find_or_create_google_user,
    register_user,
)
from app.config import Settings

logger = logging.getLogger(__name__)


# ── Helper ────────────────────────────────────────────────────────────────────

def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        user_id=user.id,
        email=user.email,
        roles=user.roles,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expire_seconds=settings.jwt_expire_seconds,
    )


def _auth_response(user: User, settings: Settings, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=issue_token(user, settings),
        user=UserResponse.model_validate(user),
    )


# ── Register / Login ──────────────────────────────────────────────────────────

async def register(
    session: AsyncSession,
    body: RegisterRequest,
    settings: Settings,
) -> AuthResponse:
    user = await register_user(
        session,
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return _auth_response(user, settings, "Registration successful")


async def login(
    session: AsyncSession,
    body: LoginRequest,
    settings: Settings,
) -> AuthResponse:
    user = await authenticate_user(session, body.email, body.password)
    return _auth_response(user, settings, "Login successful")


# ── Google ────────────────────────────────────────────────────────────────────

async def google(
    session: AsyncSession,
    body: GoogleAuthRequest,
    settings: Settings,
) -> AuthResponse:
    info = await verify_google_id_token(
        id_token=body.id_token,
        client_id=settings.google_client_id,
    )
    user, created = await find_or_create_google_user(session, info)
    if created:
        logger.info("Created account %s via Google sign-in", user.id)
    return _auth_response(user, settings, "Google login successful")
