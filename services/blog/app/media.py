"""
AWS S3 image uploads for blog covers and profile pictures.

Clients send images inline as base64 (raw or as a ``data:<mime>;base64,`` URI);
the backend decodes them, writes the object with aioboto3 and hands back the
public URL that is stored on the row.
"""
from __future__ import annotations

import base64
import binascii
import logging
import re
import uuid
from datetime import datetime, timezone

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import Settings
from app.exceptions import ImageUploadFailed, InvalidImageData

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE_BYTES: int = 5 * 1024 * 1024

_DATA_URI = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)$", re.DOTALL)
_SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")


def _decode(payload: str) -> tuple[bytes, str]:
    """Return (raw bytes, content type) for a base64 string or data URI."""
    content_type = "image/jpeg"
    match = _DATA_URI.match(payload.strip())
    if match:
        content_type = match.group("mime")
        payload = match.group("data")
    try:
        return base64.b64decode(payload, validate=True), content_type
    except (binascii.Error, ValueError):
        raise InvalidImageData()


def _object_key(folder: str, file_name: str) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    safe = _SAFE_NAME.sub("_", file_name).strip("_") or "image"
    return f"{folder.strip('/')}/{ts}_{uuid.uuid4().hex[:8]}_{safe}"


def _s3_session(settings: Settings) -> aioboto3.Session:
    return aioboto3.Session(
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )


async def upload_image(
    base64_data: str,
    file_name: str,
    folder: str,
    settings: Settings,
) -> str:
    """Upload a base64 image and return its public URL.

    Raises InvalidImageData for a bad payload and ImageUploadFailed when
    storage is unavailable.
    """
    body, content_type = _decode(base64_data)
    if not body or len(body) > MAX_IMAGE_SIZE_BYTES:
        raise InvalidImageData()
    if not settings.aws_access_key_id:
        logger.error("Image upload attempted but AWS credentials are not configured")
        raise ImageUploadFailed()

    key = _object_key(folder, file_name)
    try:
        async with _s3_session(settings).client("s3") as s3:
            await s3.put_object(
                Bucket=settings.s3_bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
    except (BotoCoreError, ClientError) as exc:
        logger.error("S3 put_object failed for key %s: %s", key, exc)
        raise ImageUploadFailed()
    return f"{settings.public_media_base_url}/{key}"
