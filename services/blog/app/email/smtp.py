"""
SMTP delivery via aiosmtplib, the primary email provider.

Messages go out as multipart/alternative: a plain-text part derived from the
HTML for clients that do not render it, then the HTML itself.  Port 465 uses
implicit TLS; any other port upgrades with STARTTLS when SMTP_START_TLS is on.
"""
from __future__ import annotations

import html as html_lib
import logging
import re
from email.message import EmailMessage
from email.utils import formataddr

import aiosmtplib

from app.config import Settings

logger = logging.getLogger(__name__)

_IMPLICIT_TLS_PORT = 465
_BLOCK_TAGS = re.compile(r"<\s*(br|/p|/h\d|/div|hr)\s*/?>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")


def is_configured(settings: Settings) -> bool:
    return bool(settings.smtp_host and settings.smtp_username)


def html_to_text(html: str) -> str:
    text = _BLOCK_TAGS.sub("\n", html)
    text = html_lib.unescape(_ANY_TAG.sub("", text))
    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def build_message(
    to_email: str,
    to_name: str,
    subject: str,
    html: str,
    settings: Settings,
    reply_to: str | None = None,
) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = formataddr((settings.smtp_from_name, settings.smtp_from_email or settings.smtp_username))
    msg["To"] = formataddr((to_name, to_email)) if to_name else to_email
    msg["Subject"] = subject
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content(html_to_text(html))
    msg.add_alternative(html, subtype="html")
    return msg


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

    implicit_tls = settings.smtp_port == _IMPLICIT_TLS_PORT
    try:
        await aiosmtplib.send(
            build_message(to_email, to_name, subject, html, settings, reply_to),
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=implicit_tls,
            start_tls=settings.smtp_start_tls and not implicit_tls,
            timeout=15,
        )
    except (aiosmtplib.SMTPException, OSError) as exc:
        logger.error("SMTP delivery to %s via %s failed: %s", to_email, settings.smtp_host, exc)
        return False
    return True
