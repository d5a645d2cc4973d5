"""
Blog service: Pydantic V2 request/response schemas for the auth domain.

Separation of concerns:
  - *Request  models:  input from the client (camelCase or snake_case accepted)
  - *Response models:  output to the client (camelCase, no credential fields)
"""
from __future__ import annotations

import uuid

from pydantic import EmailStr, Field

from shared.models.base import ApiModel, ApiRequest

from app.auth.constants import UserRole


# ── Email + Password flow ─────────────────────────────────────────────────────

class RegisterRequest(ApiRequest):
    """Body for POST /auth/register."""

    name: str = Field(min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class LoginRequest(ApiRequest):
    """Body for POST /auth/login."""

    email: EmailStr
    password: str = Field(min_length=1)


# ── Google sign-in ────────────────────────────────────────────────────────────

class GoogleAuthRequest(ApiRequest):
    """Body for POST /auth/google: the ID token issued to the frontend by Google."""

    id_token: str = Field(min_length=1)


# ── Responses ─────────────────────────────────────────────────────────────────

class UserResponse(ApiModel):
    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    profile_picture: str
    handle: str | None
    about: str


class AuthResponse(ApiModel):
    success: bool = True
    message: str
    token: str
    user: UserResponse
