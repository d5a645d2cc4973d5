"""
Contact domain: forwards the public contact form to the admin inbox.
"""
from __future__ import annotations

import logging

from shared.models.base import SuccessResponse

from app.config import Settings
from app.contact.schemas import ContactRequest
from app.email import send as email
from app.exceptions import EmailDeliveryFailed, MissingFields

logger = logging.getLogger(__name__)


async def send_message(body: ContactRequest, settings: Settings) -> SuccessResponse:
    if not body.email or not body.subject or not body.message:
        raise MissingFields("Email, subject, and message content are required.")
    if not await email.send_contact_message(body.email, body.subject, body.message, settings):
        logger.error("Contact message from %s could not be delivered", body.email)
        raise EmailDeliveryFailed()
    return SuccessResponse(message="Your message has been sent successfully!")
