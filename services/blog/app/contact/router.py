"""
Contact domain: router.

Routes:
  POST   /api/contact   Forward a message to the site inbox   (5/hour rate limit)
"""
from fastapi import APIRouter, Depends, Request

from app.config import Settings, get_settings
from app.contact import controller as ctrl
from app.contact.schemas import ContactRequest
from app.rate_limit import limiter
from shared.models.base import SuccessResponse

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post(
    "",
    response_model=SuccessResponse,
    summary="Send a message to the site administrators",
)
@limiter.limit("5/hour")
async def send_message(
    request: Request,
    body: ContactRequest,
    settings: Settings = Depends(get_settings),
) -> SuccessResponse:
    return await ctrl.send_message(body, settings)
