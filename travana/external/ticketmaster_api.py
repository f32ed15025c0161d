from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from travana.core.config import settings

logger = logging.getLogger(__name__)

EVENTS_URL = "https://app.ticketmaster.com/discovery/v2/events.json"

# Ticketmaster designated market area ids
CITY_TO_DMA_ID = {
    "toronto": "539",
    "new york": "345",
    "los angeles": "324",
    "chicago": "602",
    "philadelphia": "504",
    "dallas": "623",
    "san francisco": "807",
    "boston": "506",
    "atlanta": "524",
    "washington": "511",
    "houston": "618",
    "detroit": "505",
    "phoenix": "753",
    "tampa": "539",
    "seattle": "819",
    "miami": "528",
    "denver": "751",
    "cleveland": "510",
    "orlando": "534",
    "sacramento": "862",
}

CATEGORY_TO_CLASSIFICATION = {
    "music": "music",
    "sports": "sports",
    "culture": "arts",
    "entertainment": "miscellaneous",
    "art": "arts",
}


def build_event_params(city: str, category: Optional[str] = None) -> Dict[str, str]:
    params = {
        "apikey": settings.ticketmaster_api_key or "",
        "size": "20",
        "sort": "date,asc",
    }
    dma_id = CITY_TO_DMA_ID.get(city.lower())
    if dma_id:
        params["dmaId"] = dma_id
    else:
        params["city"] = city

    if category and category.lower() != "all":
        classification = CATEGORY_TO_CLASSIFICATION.get(category.lower())
        if classification:
            params["classificationName"] = classification

    params["startDateTime"] = f"{date.today().isoformat()}T00:00:00Z"
    return params


async def search_events(city: str, category: Optional[str] = None) -> Optional[List[Dict[str, Any]]]:
    """Raw Discovery API events; None when the call fails or returns nothing."""
    if not settings.ticketmaster_api_key:
        return None
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.get(
                EVENTS_URL, params=build_event_params(city, category), headers={"Accept": "application/json"}
            )
            resp.raise_for_status()
            data = resp.json()
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Ticketmaster search failed for '%s': %s", city, exc)
        return None
    return data.get("_embedded", {}).get("events") or None
