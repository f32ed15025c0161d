from __future__ import annotations

import json
import logging
from typing import Optional

from travana.ai.openai_client import get_client
from travana.core.config import settings

logger = logging.getLogger(__name__)


async def translate_with_openai(text: str, target_language: str, source_language: str = "auto") -> Optional[str]:
    """
    Translate one string with the chat model. Returns None when OpenAI is not
    configured or the reply is unusable, so callers can fall back further.
    """
    client = get_client()
    if not client or not text:
        return None

    source_hint = "Detect the source language." if source_language == "auto" else f"The source language is '{source_language}'."
    try:
        system_prompt = (
            "You are a translation helper for travelers. "
            f"Translate the user's text into the language with ISO code '{target_language}'. "
            f"{source_hint} "
            "Keep place names and proper nouns as-is. "
            "Return JSON with a key 'text' containing only the translation."
        )
        resp = await client.chat.completions.create(
            model=settings.openai_model_chat,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": text},
            ],
            response_format={"type": "json_object"},
        )
        payload = json.loads(resp.choices[0].message.content)
        translated = payload.get("text")
        if isinstance(translated, str) and translated.strip():
            return translated
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("OpenAI translation to '%s' failed: %s", target_language, exc)
    return None
