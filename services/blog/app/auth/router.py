"""
Blog service: auth router.

Only HTTP concerns live here:
  - Route declarations, HTTP methods, status codes, response_model
  - Dependency injection (session, settings)
  - Forwarding to the controller

Zero business logic. Zero DB queries.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import controller as ctrl
from app.auth.schemas import AuthResponse, GoogleAuthRequest, LoginRequest, RegisterRequest
from app.config import Settings, get_settings
from app.database import get_db
from app.rate_limit import limiter

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account (email + password)",
)
@limiter.limit("10/hour")
async def register(
    request: Request,
    body: RegisterRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    return await ctrl.register(session, body, settings)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in with email + password",
    description="Returns a 7-day bearer token and the account's public profile.",
)
@limiter.limit("20/minute")
async def login(
    request: Request,
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    return await ctrl.login(session, body, settings)


@router.post(
    "/google",
    response_model=AuthResponse,
    summary="Sign in with a Google ID token",
    description=(
        "Verifies the ID token against the configured Google client id, then logs in "
        "the account with that email or creates it."
    ),
)
@limiter.limit("20/minute")
async def google(
    request: Request,
    body: GoogleAuthRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    return await ctrl.google(session, body, settings)
