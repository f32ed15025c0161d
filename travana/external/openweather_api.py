from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from travana.core.config import settings

logger = logging.getLogger(__name__)

GEO_URL = "https://api.openweathermap.org/geo/1.0/direct"
CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"


async def _get_json(url: str, params: Dict[str, Any]) -> Any:
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.get(url, params={**params, "appid": settings.openweather_api_key})
        resp.raise_for_status()
        return resp.json()


async def geocode(location: str) -> Optional[Tuple[float, float]]:
    try:
        data = await _get_json(GEO_URL, {"q": location, "limit": 1})
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("OpenWeather geocoding failed for '%s': %s", location, exc)
        return None
    if not data:
        return None
    return data[0]["lat"], data[0]["lon"]


async def current_weather(lat: float, lon: float) -> Dict[str, Any]:
    """Raises on HTTP failure."""
    return await _get_json(CURRENT_URL, {"lat": lat, "lon": lon, "units": "metric"})


async def forecast(lat: float, lon: float) -> Dict[str, Any]:
    """5-day / 3-hour forecast. Raises on HTTP failure."""
    return await _get_json(FORECAST_URL, {"lat": lat, "lon": lon, "units": "metric"})
