from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from travana.api.models.schemas import CarRentalSearch
from travana.core.config import settings

logger = logging.getLogger(__name__)

RAPIDAPI_HOST = "booking-com15.p.rapidapi.com"
SEARCH_URL = f"https://{RAPIDAPI_HOST}/api/v1/cars/searchCarRentals"


async def search_car_rentals(search: CarRentalSearch) -> List[Dict[str, Any]]:
    """
    Raw Booking.com (RapidAPI) car search. Returns the list payload as-is;
    anything that is not a list (error objects, wrapped data) yields [].
    """
    if not settings.rapidapi_key:
        return []

    headers = {
        "x-rapidapi-key": settings.rapidapi_key,
        "x-rapidapi-host": RAPIDAPI_HOST,
    }
    params = {
        "pick_up_latitude": search.pickUpLatitude,
        "pick_up_longitude": search.pickUpLongitude,
        "drop_off_latitude": search.dropOffLatitude,
        "drop_off_longitude": search.dropOffLongitude,
        "pick_up_time": search.pickUpTime,
        "drop_off_time": search.dropOffTime,
        "driver_age": search.driverAge,
        "currency_code": search.currencyCode,
        "location": search.location,
    }
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.get(SEARCH_URL, headers=headers, params=params)
            resp.raise_for_status()
            data = resp.json()
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Car rental search failed for '%s': %s", search.location, exc)
        return []
    return data if isinstance(data, list) else []
