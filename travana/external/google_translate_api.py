from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from travana.core.config import settings

logger = logging.getLogger(__name__)

TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"
DETECT_URL = f"{TRANSLATE_URL}/detect"


async def translate(text: str, target: str, source: str = "auto") -> Optional[Dict[str, Any]]:
    """First entry of `data.translations` (translatedText, detectedSourceLanguage), or None."""
    if not settings.google_translate_api_key:
        return None
    body: Dict[str, Any] = {"q": text, "target": target, "format": "text"}
    # Google auto-detects when source is omitted
    if source and source != "auto":
        body["source"] = source
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.post(TRANSLATE_URL, params={"key": settings.google_translate_api_key}, json=body)
            resp.raise_for_status()
            data = resp.json()
        return data["data"]["translations"][0]
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Google translation to '%s' failed: %s", target, exc)
        return None


async def detect(text: str) -> Optional[str]:
    if not settings.google_translate_api_key:
        return None
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.post(DETECT_URL, params={"key": settings.google_translate_api_key}, json={"q": text})
            resp.raise_for_status()
            data = resp.json()
        return data["data"]["detections"][0][0]["language"]
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Google language detection failed: %s", exc)
        return None
