from __future__ import annotations

from typing import Optional

from openai import AsyncOpenAI

from travana.core.config import settings

_client: Optional[AsyncOpenAI] = None
_client_key: Optional[str] = None


def get_client() -> Optional[AsyncOpenAI]:
    """Returns AsyncOpenAI client if api key is configured."""
    global _client, _client_key
    if not settings.openai_api_key:
        return None
    if _client is None or _client_key != settings.openai_api_key:
        _client = AsyncOpenAI(api_key=settings.openai_api_key)
        _client_key = settings.openai_api_key
    return _client
