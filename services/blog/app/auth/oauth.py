"""
Blog service: Google sign-in.

The frontend runs Google Identity Services and POSTs the resulting ID token to
/auth/google.  This module verifies that token with Google's tokeninfo
endpoint and returns a normalized OAuthUserInfo.  Uses httpx (already a
project dep) rather than google-auth to avoid adding another dependency.

Checks performed on the decoded token:
  - Google accepted the signature and expiry (non-200 otherwise)
  - aud matches our configured client id
  - iss is accounts.google.com
  - email and sub are present
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from app.exceptions import InvalidGoogleToken

logger = logging.getLogger(__name__)


# ── Normalized user info ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class OAuthUserInfo:
    provider: str           # "google"
    provider_id: str        # Google "sub"
    email: str
    full_name: str
    picture_url: str | None
    email_verified: bool


# ── Google ──────────────────────────────────────────────────────────────────

_GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
_GOOGLE_ISSUERS = {"accounts.google.com", "https://accounts.google.com"}


async def verify_google_id_token(*, id_token: str, client_id: str) -> OAuthUserInfo:
    """
    Verify a Google ID token and return the signed-in user's identity.

    Raises InvalidGoogleToken on any failure (bad token, wrong audience,
    network error) so the caller doesn't need provider-specific handling.
    """
    if not client_id:
        logger.error("Google sign-in attempted but GOOGLE_CLIENT_ID is not set")
        raise InvalidGoogleToken()

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.get(_GOOGLE_TOKENINFO_URL, params={"id_token": id_token})
    except httpx.HTTPError as exc:
        logger.error("Google tokeninfo request failed: %s", exc)
        raise InvalidGoogleToken()

    if resp.status_code != 200:
        raise InvalidGoogleToken()

    info = resp.json()
    if info.get("aud") != client_id or info.get("iss") not in _GOOGLE_ISSUERS:
        raise InvalidGoogleToken()

    email = info.get("email")
    sub = info.get("sub")
    if not email or not sub:
        raise InvalidGoogleToken()

    return OAuthUserInfo(
        provider="google",
        provider_id=sub,
        email=email,
        full_name=info.get("name") or email.split("@")[0],
        picture_url=info.get("picture"),
        # tokeninfo returns booleans as strings
        email_verified=str(info.get("email_verified", "false")).lower() == "true",
    )
