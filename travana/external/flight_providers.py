from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from travana.api.models.schemas import Airport, Flight, FlightSearchParams
from travana.core.config import settings
from travana.external.oauth_token import TokenCache

logger = logging.getLogger(__name__)

SKYSCANNER_HOST = "skyscanner-api.p.rapidapi.com"
SKYSCANNER_SEARCH_URL = f"https://{SKYSCANNER_HOST}/v3/flights/live/search/create"
AMADEUS_BASE_URL = "https://test.api.amadeus.com"
AMADEUS_TOKEN_URL = f"{AMADEUS_BASE_URL}/v1/security/oauth2/token"
AMADEUS_OFFERS_URL = f"{AMADEUS_BASE_URL}/v2/shopping/flight-offers"
AMADEUS_LOCATIONS_URL = f"{AMADEUS_BASE_URL}/v1/reference-data/locations"
KIWI_SEARCH_URL = "https://tequila-api.kiwi.com/v2/search"

# Provider calls raise on failure; FlightService decides what to skip.

_amadeus_token = TokenCache()


async def search_skyscanner(params: FlightSearchParams) -> List[Flight]:
    """Creates a live search session. Polling for results is not wired up, so this yields []."""
    headers = {
        "X-RapidAPI-Key": settings.skyscanner_api_key or "",
        "X-RapidAPI-Host": SKYSCANNER_HOST,
    }
    body = {
        "query": {
            "market": "US",
            "locale": "en-US",
            "currency": "USD",
            "queryLegs": [
                {
                    "originPlaceId": params.origin,
                    "destinationPlaceId": params.destination,
                    "date": params.departureDate,
                }
            ],
            "adults": params.passengers,
            "cabinClass": params.cabinClass,
        }
    }
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.post(SKYSCANNER_SEARCH_URL, headers=headers, json=body)
        resp.raise_for_status()
    return []


async def get_amadeus_token() -> str:
    cached = _amadeus_token.get()
    if cached:
        return cached
    data = {
        "grant_type": "client_credentials",
        "client_id": settings.amadeus_api_key or "",
        "client_secret": settings.amadeus_client_secret or "",
    }
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.post(AMADEUS_TOKEN_URL, data=data)
        resp.raise_for_status()
        payload = resp.json()
    return _amadeus_token.store(payload["access_token"], payload.get("expires_in", 1799))


def amadeus_offer_to_flight(offer: Dict[str, Any], params: FlightSearchParams) -> Flight:
    itinerary = offer["itineraries"][0]
    segments = itinerary["segments"]
    first, last = segments[0], segments[-1]
    return Flight(
        id=str(offer["id"]),
        airline=offer["validatingAirlineCodes"][0],
        flightNumber=f"{first['carrierCode']}{first['number']}",
        origin=first["departure"]["iataCode"],
        destination=last["arrival"]["iataCode"],
        departureTime=first["departure"]["at"],
        arrivalTime=last["arrival"]["at"],
        duration=itinerary.get("duration", ""),
        price=float(offer["price"]["total"]),
        currency=offer["price"].get("currency", "USD"),
        stops=len(segments) - 1,
        cabinClass=offer["travelerPricings"][0]["fareDetailsBySegment"][0]["cabin"],
        bookingUrl=f"https://www.amadeus.com/flights/{params.origin}-{params.destination}/{params.departureDate}",
    )


async def _amadeus_get(url: str, query: Dict[str, Any]) -> Dict[str, Any]:
    token = await get_amadeus_token()
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.get(url, params=query, headers={"Authorization": f"Bearer {token}"})
    if resp.status_code == 401:
        # Revoked before its stated expiry; the next call fetches a new one
        _amadeus_token.clear()
    resp.raise_for_status()
    return resp.json()


async def search_amadeus(params: FlightSearchParams) -> List[Flight]:
    query = {
        "originLocationCode": params.origin,
        "destinationLocationCode": params.destination,
        "departureDate": params.departureDate,
        "adults": params.passengers,
        "currencyCode": "USD",
        "max": 20,
    }
    data = await _amadeus_get(AMADEUS_OFFERS_URL, query)
    return [amadeus_offer_to_flight(offer, params) for offer in data.get("data") or []]


def kiwi_result_to_flight(item: Dict[str, Any]) -> Flight:
    route = item["route"]
    first, last = route[0], route[-1]
    duration = item.get("duration", {}).get("total", "")
    return Flight(
        id=str(item["id"]),
        airline=item["airlines"][0],
        flightNumber=str(first.get("flight_no", "")),
        origin=first["flyFrom"],
        destination=last["flyTo"],
        departureTime=first["local_departure"],
        arrivalTime=last["local_arrival"],
        duration=str(duration),
        price=float(item["price"]),
        currency="USD",
        stops=len(route) - 1,
        cabinClass="economy",
        bookingUrl=item.get("deep_link", ""),
    )


async def search_kiwi(params: FlightSearchParams) -> List[Flight]:
    query = {
        "fly_from": params.origin,
        "fly_to": params.destination,
        "date_from": params.departureDate,
        "date_to": params.departureDate,
        "adults": params.passengers,
        "curr": "USD",
        "limit": 20,
    }
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.get(KIWI_SEARCH_URL, params=query, headers={"apikey": settings.kiwi_api_key or ""})
        resp.raise_for_status()
        data = resp.json()
    return [kiwi_result_to_flight(item) for item in data.get("data") or []]


def amadeus_location_to_airport(location: Dict[str, Any]) -> Airport:
    address = location.get("address", {})
    geo = location.get("geoCode", {})
    return Airport(
        code=location.get("iataCode", ""),
        name=location.get("name", ""),
        city=address.get("cityName", ""),
        country=address.get("countryName", ""),
        latitude=geo.get("latitude", 0.0),
        longitude=geo.get("longitude", 0.0),
    )


async def search_amadeus_locations(keyword: str) -> List[Airport]:
    query = {"subType": "CITY,AIRPORT", "keyword": keyword}
    data = await _amadeus_get(AMADEUS_LOCATIONS_URL, query)
    return [amadeus_location_to_airport(loc) for loc in data.get("data") or []]
