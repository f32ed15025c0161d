from __future__ import annotations

import logging
from typing import Optional, Tuple

from supabase import Client, create_client

from travana.core.config import settings

logger = logging.getLogger(__name__)

_client: Optional[Client] = None
_credentials: Optional[Tuple[str, str]] = None


def supabase_enabled() -> bool:
    return bool(settings.use_supabase and settings.supabase_url and settings.supabase_anon_key)


def get_supabase_client() -> Optional[Client]:
    """
    Client for the saved-trips table, rebuilt when the configured URL or key changes.
    None unless `use_supabase` is on and both credentials are set.
    """
    global _client, _credentials
    if not supabase_enabled():
        return None

    credentials = (settings.supabase_url, settings.supabase_anon_key)
    if _client is not None and _credentials == credentials:
        return _client

    try:
        _client = create_client(*credentials)
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Supabase client could not be created for %s: %s", settings.supabase_url, exc)
        _client, _credentials = None, None
        return None
    _credentials = credentials
    logger.info("Saved trips will be stored in Supabase (%s)", settings.supabase_url)
    return _client
