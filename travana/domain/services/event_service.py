from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from travana.api.models.schemas import Event, EventVenue
from travana.core.config import settings
from travana.external import ticketmaster_api

logger = logging.getLogger(__name__)


def map_category(classifications: Optional[List[Dict[str, Any]]]) -> str:
    if not classifications:
        return "Entertainment"
    segment = ((classifications[0].get("segment") or {}).get("name") or "").lower()
    if "music" in segment:
        return "Music"
    if "sports" in segment:
        return "Sports"
    if "arts" in segment or "theatre" in segment:
        return "Culture"
    return "Entertainment"


def format_price(price_ranges: Optional[List[Dict[str, Any]]]) -> str:
    if not price_ranges:
        return "Price TBA"
    low, high = price_ranges[0].get("min"), price_ranges[0].get("max")
    if high is not None and high != low:
        return f"From ${low} - ${high}"
    return f"From ${low}"


def pick_image(images: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    if not images:
        return None
    for image in images:
        if image.get("ratio") == "16_9":
            return image.get("url")
    return images[0].get("url")


def _event_times(dates: Dict[str, Any]) -> Tuple[str, str]:
    start = dates.get("start") or {}
    start_at = start.get("dateTime") or f"{start.get('localDate')}T{start.get('localTime') or '19:00:00'}"
    end = dates.get("end") or {}
    if end.get("dateTime"):
        end_at = end["dateTime"]
    elif end.get("localDate"):
        end_at = f"{end['localDate']}T{end.get('localTime') or '22:00:00'}"
    else:
        end_at = start_at
    return start_at, end_at


def _float_or_none(value: Any) -> Optional[float]:
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def ticketmaster_to_event(raw: Dict[str, Any]) -> Event:
    venues = (raw.get("_embedded") or {}).get("venues") or []
    venue = venues[0] if venues else None
    if venue:
        parts = [
            (venue.get("address") or {}).get("line1"),
            (venue.get("address") or {}).get("line2"),
            (venue.get("city") or {}).get("name"),
            (venue.get("state") or {}).get("stateCode"),
            venue.get("postalCode"),
        ]
        address = ", ".join(part for part in parts if part)
    else:
        address = "Address not available"
    location = (venue or {}).get("location") or {}
    start_at, end_at = _event_times(raw.get("dates") or {})

    return Event(
        id=raw["id"],
        name=raw.get("name", ""),
        description=raw.get("info") or "Event details will be available soon.",
        startDate=start_at,
        endDate=end_at,
        venue=EventVenue(
            name=(venue or {}).get("name") or "Venue TBA",
            address=address,
            latitude=_float_or_none(location.get("latitude")),
            longitude=_float_or_none(location.get("longitude")),
        ),
        category=map_category(raw.get("classifications")),
        price=format_price(raw.get("priceRanges")),
        url=raw.get("url"),
        image=pick_image(raw.get("images")),
    )


def fallback_events() -> List[Event]:
    now = datetime.now(timezone.utc)
    tomorrow = now + timedelta(days=1)
    in_two_days = now + timedelta(days=2)
    return [
        Event(
            id="fallback-1",
            name="Local Music Night",
            description="Join us for an evening of live local music featuring talented artists from the area.",
            startDate=tomorrow.isoformat(),
            endDate=(tomorrow + timedelta(hours=3)).isoformat(),
            venue=EventVenue(name="Local Venue", address="Downtown Area"),
            category="Music",
            price="From $15",
            image="https://images.unsplash.com/photo-1493225457124-a3eb161ffa5f?w=400",
        ),
        Event(
            id="fallback-2",
            name="Art Gallery Opening",
            description="Discover new contemporary art at this exclusive gallery opening event.",
            startDate=in_two_days.isoformat(),
            endDate=(in_two_days + timedelta(hours=4)).isoformat(),
            venue=EventVenue(name="City Art Gallery", address="Arts District"),
            category="Culture",
            price="Free",
            image="https://images.unsplash.com/photo-1578662996442-48f60103fc96?w=400",
        ),
    ]


class EventService:
    async def search_events(self, city: str = "Toronto", category: Optional[str] = None) -> Tuple[List[Event], str]:
        """Returns the events and the configured source name."""
        source = "ticketmaster" if settings.ticketmaster_api_key else "fallback"
        if not settings.ticketmaster_api_key:
            logger.info("Ticketmaster API key not configured; using fallback events")
            return fallback_events(), source

        raw_events = await ticketmaster_api.search_events(city, category)
        if not raw_events:
            return fallback_events(), source

        events: List[Event] = []
        for raw in raw_events:
            try:
                events.append(ticketmaster_to_event(raw))
            except Exception as exc:
                logger.warning("Skipping malformed Ticketmaster event: %s", exc)
        return events or fallback_events(), source
