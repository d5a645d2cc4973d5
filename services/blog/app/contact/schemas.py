"""
Contact domain: Pydantic V2 request schema.
"""
from __future__ import annotations

from pydantic import Field

from shared.models.base import ApiRequest


class ContactRequest(ApiRequest):
    """Body for POST /contact.  Empty fields are rejected by the controller."""

    email: str = Field("", max_length=255)
    subject: str = Field("", max_length=200)
    message: str = Field("", max_length=5000)
