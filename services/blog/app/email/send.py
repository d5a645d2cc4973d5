"""
Email delivery orchestrator: SMTP (primary) with Brevo (fallback).

Every send_* function returns True when some provider accepted the message
and False otherwise.  Nothing here raises or retries; callers that must
report a failed delivery to the client check the return value.

Delivery order:
  1. SMTP  : if configured
  2. Brevo : if SMTP fails or is not configured
"""
from __future__ import annotations

import html as html_lib
import logging

from app.config import Settings
from app.email import brevo, smtp

logger = logging.getLogger(__name__)


# ── Delivery core ────────────────────────────────────────────────────────────


async def _deliver(
    to_email: str,
    to_name: str,
    subject: str,
    html: str,
    settings: Settings,
    *,
    reply_to: str | None = None,
) -> bool:
    """Try SMTP first, fall back to Brevo."""
    if smtp.is_configured(settings):
        if await smtp.deliver(to_email, to_name, subject, html, settings, reply_to=reply_to):
            return True
        logger.warning("SMTP failed for %s: falling back to Brevo", to_email)

    if brevo.is_configured(settings):
        if await brevo.deliver(to_email, to_name, subject, html, settings, reply_to=reply_to):
            return True
        logger.error("Brevo fallback also failed for %s", to_email)
        return False

    logger.warning("No email provider configured: could not send email to %s", to_email)
    return False


# ── Public send_* functions ──────────────────────────────────────────────────


async def send_password_reset(
    to_email: str,
    name: str,
    reset_link: str,
    settings: Settings,
) -> bool:
    safe_name = html_lib.escape(name)
    return await _deliver(
        to_email, name,
        "[Blog Hub] Password Reset Request",
        "<h2>Password Reset Request</h2>"
        f"<p>Hello {safe_name},</p>"
        "<p>Click the link below to reset your password:</p>"
        f"<p style='text-align:center;margin:32px 0'>"
        f"<a href='{reset_link}' "
        f"style='background:#2563eb;color:#fff;padding:14px 28px;border-radius:6px;"
        f"text-decoration:none;font-weight:bold'>Reset Password</a></p>"
        "<p>Or copy this link into your browser:</p>"
        f"<p style='word-break:break-all;color:#6b7280'>{reset_link}</p>"
        "<p>The link expires in <strong>1 hour</strong>.</p>"
        "<p style='color:#6b7280;font-size:13px;margin-top:32px'>"
        "If you did not request a password reset, you can safely ignore this email.</p>",
        settings,
    )


async def send_contact_message(
    from_email: str,
    subject: str,
    message: str,
    settings: Settings,
) -> bool:
    """Forward a contact-form submission to the configured inbox."""
    if not settings.contact_inbox_email:
        logger.warning("CONTACT_INBOX_EMAIL is not set: dropping contact message from %s", from_email)
        return False
    body = html_lib.escape(message).replace("\n", "<br>")
    return await _deliver(
        settings.contact_inbox_email, "Blog Hub Admin",
        f"[Blog Hub Contact] {subject}",
        "<h3>New Contact Form Submission</h3>"
        f"<p><strong>From:</strong> {html_lib.escape(from_email)}</p>"
        f"<p><strong>Subject:</strong> {html_lib.escape(subject)}</p>"
        "<hr>"
        "<p><strong>Message:</strong></p>"
        f"<p>{body}</p>"
        "<hr>"
        "<small>This was sent from the Blog Hub contact form.</small>",
        settings,
        reply_to=from_email,
    )
