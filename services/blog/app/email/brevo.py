"""
Brevo (Sendinblue) transactional email client: async httpx REST calls.

Fallback provider behind SMTP.  Returns True on a 2xx response and False on
anything else; never raises, so the orchestrator in send.py decides what a
failed delivery means for the request.
"""
from __future__ import annotations

import logging

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)
_BREVO_URL = "https://api.brevo.com/v3/smtp/email"


def is_configured(settings: Settings) -> bool:
    return bool(settings.brevo_api_key)


def _payload(
    to_email: str,
    to_name: str,
    subject: str,
    html: str,
    s: Settings,
    reply_to: str | None,
) -> dict:
    recipient = {"email": to_email}
    if to_name:
        recipient["name"] = to_name
    payload = {
        "sender": {"email": s.brevo_from_email, "name": s.brevo_from_name},
        "to": [recipient],
        "subject": subject,
        "htmlContent": html,
    }
    if reply_to:
        payload["replyTo"] = {"email": reply_to}
    return payload


async def deliver(
    to_email: str,
    to_name: str,
    subject: str,
    html: str,
    settings: Settings,
    *,
    reply_to: str | None = None,
) -> bool:
    if not is_configured(settings):
        return False
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            r = await client.post(
                _BREVO_URL,
                json=_payload(to_email, to_name, subject, html, settings, reply_to),
                headers={"api-key": settings.brevo_api_key, "Content-Type": "application/json"},
            )
    except httpx.HTTPError as exc:
        logger.error("Brevo request failed: %s", exc)
        return False
    if r.status_code >= 400:
        logger.error("Brevo error %s: %s", r.status_code, r.text[:300])
        return False
    return True
