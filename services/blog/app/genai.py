"""
Gemini client for AI-assisted blog drafts: async httpx REST calls.

One request per draft, no retries.  Any failure (missing key, HTTP error,
blocked prompt, empty candidate) surfaces as AIGenerationFailed; the
upstream detail is logged, never returned to the client.
"""
from __future__ import annotations

import logging

import httpx

from app.config import Settings
from app.exceptions import AIGenerationFailed

logger = logging.getLogger(__name__)

_GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

SYSTEM_INSTRUCTION = (
    "You are a professional blog writer. Your task is to write a well-structured, "
    "engaging blog post suitable for a general audience. The output MUST be formatted "
    "using HTML tags (e.g., <h2>, <p>, <ul>, <strong>) for direct insertion into a rich "
    "text editor. Do NOT use markdown syntax. The tone should be informative and engaging."
)


def _prompt(title: str, subtitle: str, category: str) -> str:
    return (
        "Write a comprehensive blog post based on the following details:\n"
        f'1. Main Topic/Title: "{title}"\n'
        f'2. Subtitle/Hook: "{subtitle}"\n'
        f'3. Primary Category/Focus: "{category}"\n\n'
        "Ensure the post has an introduction, 2-3 detailed body sections, and a conclusion. "
        "Use proper HTML formatting (<h2>, <p>, <strong>, etc.)."
    )


def _extract_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts).strip()


async def generate_blog_content(
    title: str,
    subtitle: str,
    category: str,
    settings: Settings,
) -> str:
    """Return an HTML draft for the given title, subtitle and category."""
    if not settings.gemini_api_key:
        logger.error("AI generation requested but GEMINI_API_KEY is not set")
        raise AIGenerationFailed()

    payload = {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"role": "user", "parts": [{"text": _prompt(title, subtitle, category)}]}],
        "generationConfig": {"temperature": 0.7},
    }
    try:
        async with httpx.AsyncClient(timeout=60.0) as client:
            r = await client.post(
                _GEMINI_URL.format(model=settings.gemini_model),
                json=payload,
                headers={"x-goog-api-key": settings.gemini_api_key},
            )
    except httpx.HTTPError as exc:
        logger.error("Gemini request failed: %s", exc)
        raise AIGenerationFailed()

    if r.status_code >= 400:
        logger.error("Gemini error %s: %s", r.status_code, r.text[:300])
        raise AIGenerationFailed()

    try:
        data = r.json()
    except ValueError as exc:
        logger.error("Gemini returned a non-JSON body (%s): %s", exc, r.text[:300])
        raise AIGenerationFailed()

    text = _extract_text(data) if isinstance(data, dict) else ""
    if not text:
        logger.error("Gemini returned no text for title %r", title)
        raise AIGenerationFailed()
    return text
