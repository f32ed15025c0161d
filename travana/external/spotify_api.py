from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from travana.core.config import settings
from travana.external.oauth_token import TokenCache

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
SEARCH_URL = "https://api.spotify.com/v1/search"

_token = TokenCache()


async def get_access_token() -> Optional[str]:
    """Client-credentials token, cached until it expires. None without credentials."""
    if not (settings.spotify_client_id and settings.spotify_client_secret):
        return None
    cached = _token.get()
    if cached:
        return cached
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.post(
                TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(settings.spotify_client_id, settings.spotify_client_secret),
            )
            resp.raise_for_status()
            payload = resp.json()
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Spotify token request failed: %s", exc)
        return None
    return _token.store(payload["access_token"], payload.get("expires_in", 3600))


async def search_tracks(query: str, limit: int = 20) -> Optional[List[Dict[str, Any]]]:
    """Raw track items, or None when Spotify is unavailable."""
    token = await get_access_token()
    if not token:
        return None
    params = {"q": query, "type": "track", "limit": limit}
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.get(SEARCH_URL, params=params, headers={"Authorization": f"Bearer {token}"})
            if resp.status_code == 401:
                _token.clear()
            resp.raise_for_status()
            data = resp.json()
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Spotify search failed for '%s': %s", query, exc)
        return None
    return data.get("tracks", {}).get("items", [])
