from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from travana.core.config import settings

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
TEXTSEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"
DETAIL_FIELDS = "formatted_phone_number,website,opening_hours,reviews,types"


async def _get_json(url: str, params: Dict[str, Any]) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
        return resp.json()


async def geocode(address: str) -> Optional[Tuple[float, float]]:
    if not settings.google_places_api_key:
        return None
    try:
        data = await _get_json(GEOCODE_URL, {"address": address, "key": settings.google_places_api_key})
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Geocoding failed for '%s': %s", address, exc)
        return None
    if data.get("status") != "OK" or not data.get("results"):
        return None
    loc = data["results"][0].get("geometry", {}).get("location", {})
    if loc.get("lat") is None or loc.get("lng") is None:
        return None
    return loc["lat"], loc["lng"]


async def search_nearby_lodging(lat: float, lng: float, radius: int = 5000) -> List[Dict[str, Any]]:
    if not settings.google_places_api_key:
        return []
    params = {
        "location": f"{lat},{lng}",
        "radius": radius,
        "type": "lodging",
        "key": settings.google_places_api_key,
    }
    try:
        data = await _get_json(NEARBY_URL, params)
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Nearby lodging search failed for %s,%s: %s", lat, lng, exc)
        return []
    return data.get("results", []) or []


async def search_lodging_by_text(location: str) -> List[Dict[str, Any]]:
    if not settings.google_places_api_key:
        return []
    params = {
        "query": f"hotels in {location}",
        "type": "lodging",
        "key": settings.google_places_api_key,
    }
    try:
        data = await _get_json(TEXTSEARCH_URL, params)
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Lodging text search failed for '%s': %s", location, exc)
        return []
    return data.get("results", []) or []


async def get_place_details(place_id: str, fields: str = DETAIL_FIELDS) -> Optional[Dict[str, Any]]:
    """Raw `result` object of a Place Details call, or None."""
    if not settings.google_places_api_key:
        return None
    params = {"place_id": place_id, "fields": fields, "key": settings.google_places_api_key}
    try:
        data = await _get_json(DETAILS_URL, params)
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Place details failed for '%s': %s", place_id, exc)
        return None
    return data.get("result")


def photo_url(photo_reference: str, max_width: int = 400) -> str:
    return (
        f"{PHOTO_URL}?maxwidth={max_width}&photoreference={photo_reference}"
        f"&key={settings.google_places_api_key}"
    )
