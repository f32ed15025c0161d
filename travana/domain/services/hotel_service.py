from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from travana.api.models.schemas import Hotel, HotelSearch
from travana.core.config import settings
from travana.domain.geo import coords_or_default, jitter
from travana.external import google_places_api

logger = logging.getLogger(__name__)

DEFAULT_AMENITIES = ["WiFi", "Air Conditioning"]

TYPE_AMENITIES = [
    ("lodging", "Accommodation"),
    ("restaurant", "Restaurant"),
    ("gym", "Fitness Center"),
    ("spa", "Spa"),
    ("parking", "Free Parking"),
]

# Google price_level -> (low, high) nightly price band in USD
PRICE_BANDS = {
    0: (50, 99),
    1: (75, 124),
    2: (125, 224),
    3: (200, 349),
    4: (350, 649),
}

DEFAULT_HOTEL_IMAGES = [
    "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=400&h=300&fit=crop&crop=center",
    "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?w=400&h=300&fit=crop&crop=center",
    "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4?w=400&h=300&fit=crop&crop=center",
    "https://images.unsplash.com/photo-1571896349842-33c89424de2d?w=400&h=300&fit=crop&crop=center",
]

HOTEL_TEMPLATES: List[Dict[str, Any]] = [
    {
        "name": "Luxury {location} Hotel & Spa",
        "rating": 4.8,
        "price": 280,
        "amenities": ["WiFi", "Pool", "Spa", "Restaurant", "Gym", "Room Service", "Concierge"],
        "description": "Luxury 5-star hotel in the heart of the city with stunning views and world-class amenities.",
        "imageUrl": "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=400",
    },
    {
        "name": "Central {location} Inn",
        "rating": 4.3,
        "price": 165,
        "amenities": ["WiFi", "Breakfast", "Gym", "Business Center", "Restaurant"],
        "description": "Comfortable 4-star hotel with excellent location and modern amenities.",
        "imageUrl": "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?w=400",
    },
    {
        "name": "Boutique {location} Suites",
        "rating": 4.6,
        "price": 220,
        "amenities": ["WiFi", "Spa", "Restaurant", "Bar", "Concierge", "Terrace"],
        "description": "Elegant boutique hotel with personalized service and unique character.",
        "imageUrl": "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4?w=400",
    },
    {
        "name": "Modern {location} Plaza",
        "rating": 4.4,
        "price": 195,
        "amenities": ["WiFi", "Restaurant", "Bar", "Meeting Rooms", "Fitness Center", "Rooftop Pool"],
        "description": "Contemporary hotel perfect for business and leisure travelers.",
        "imageUrl": "https://images.unsplash.com/photo-1571896349842-33c89424de2d?w=400",
    },
    {
        "name": "Cozy {location} Lodge",
        "rating": 4.1,
        "price": 120,
        "amenities": ["WiFi", "Kitchen", "Laundry", "Free Parking", "Garden"],
        "description": "Charming budget-friendly accommodation with home-like comfort.",
        "imageUrl": "https://images.unsplash.com/photo-1590490360182-c33d57733427?w=400",
    },
    {
        "name": "Grand {location} Resort",
        "rating": 4.7,
        "price": 350,
        "amenities": ["WiFi", "Multiple Pools", "Spa", "Golf Course", "Tennis Courts", "Kids Club"],
        "description": "Exclusive resort with extensive facilities and beautiful surroundings.",
        "imageUrl": "https://images.unsplash.com/photo-1571003123894-1f0594d2b5d9?w=400",
    },
    {
        "name": "Historic {location} Manor",
        "rating": 4.5,
        "price": 180,
        "amenities": ["WiFi", "Historic Tours", "Garden", "Library", "Traditional Restaurant"],
        "description": "Beautifully restored historic property with authentic charm.",
        "imageUrl": "https://images.unsplash.com/photo-1542314831-068cd1dbfeeb?w=400",
    },
    {
        "name": "Urban {location} Lofts",
        "rating": 4.2,
        "price": 140,
        "amenities": ["WiFi", "Kitchen", "Workspace", "Bike Storage", "Rooftop Terrace"],
        "description": "Modern urban accommodation perfect for digital nomads and young professionals.",
        "imageUrl": "https://images.unsplash.com/photo-1502672260266-1c1ef2d93688?w=400",
    },
]

AREAS = [
    "City Center",
    "Downtown",
    "Historic District",
    "Business District",
    "Residential Area",
    "Tourist Quarter",
    "Arts District",
    "University Area",
    "Shopping District",
    "Entertainment District",
    "Waterfront",
    "Mountain View",
]

MOCK_HOTEL_DETAIL = Hotel(
    id="mock-hotel-detail",
    name="Luxury Hotel & Spa",
    rating=4.8,
    price=280,
    currency="USD",
    location="City Center",
    imageUrl="https://images.unsplash.com/photo-1566073771259-6a8506099945?w=400",
    amenities=["WiFi", "Pool", "Spa", "Restaurant", "Gym", "Room Service", "Concierge"],
    description="Luxury 5-star hotel in the heart of the city with stunning views and world-class amenities.",
    latitude=48.8566,
    longitude=2.3522,
)


def adjust_stay_dates(check_in: str, check_out: str, today: Optional[date] = None) -> tuple[str, str]:
    """
    Move a past check-in to tomorrow and a check-out that is not after check-in
    to a week later. Raises ValueError for dates that are not ISO formatted.
    """
    today = today or date.today()
    start = date.fromisoformat(check_in)
    end = date.fromisoformat(check_out)
    if start < today:
        start = today + timedelta(days=1)
    if end <= start:
        end = start + timedelta(days=7)
    return start.isoformat(), end.isoformat()


def price_for_level(price_level: Optional[int]) -> int:
    # price_level 0 ("free") is treated like a missing level
    if not price_level:
        return random.randint(100, 299)
    band = PRICE_BANDS.get(price_level)
    if band is None:
        return 150
    return random.randint(*band)


def default_hotel_image() -> str:
    return random.choice(DEFAULT_HOTEL_IMAGES)


def amenities_from_types(types: List[str] | None) -> List[str]:
    amenities = list(DEFAULT_AMENITIES)
    for place_type, label in TYPE_AMENITIES:
        if types and place_type in types:
            amenities.append(label)
    return amenities


def description_from_reviews(reviews: List[Dict[str, Any]] | None) -> str:
    text = reviews[0].get("text") if reviews else None
    if not text:
        return "Hotel accommodation"
    return text[:100] + "..."


def google_booking_url(hotel_name: str, search: HotelSearch) -> str:
    params = {
        "q": f"{hotel_name} {search.location}".strip(),
        "checkin": search.checkInDate,
        "checkout": search.checkOutDate,
        "guests": str(search.adults),
        "currency": "USD",
    }
    return f"https://www.google.com/travel/hotels?{urlencode(params)}"


def place_to_hotel(place: Dict[str, Any], details: Optional[Dict[str, Any]], search: HotelSearch) -> Hotel:
    """Reshape a Places search result plus its details lookup into a Hotel."""
    photos = place.get("photos") or []
    photo_ref = photos[0].get("photo_reference") if photos else None
    location = place.get("geometry", {}).get("location", {})
    details = details or {}
    return Hotel(
        id=place.get("place_id", ""),
        name=place.get("name", ""),
        rating=place.get("rating") or 4.0,
        price=price_for_level(place.get("price_level")),
        currency="USD",
        location=place.get("vicinity") or place.get("formatted_address") or search.location,
        imageUrl=google_places_api.photo_url(photo_ref) if photo_ref else default_hotel_image(),
        amenities=amenities_from_types(details.get("types")),
        description=description_from_reviews(details.get("reviews")),
        latitude=location.get("lat"),
        longitude=location.get("lng"),
        bookingUrl=google_booking_url(place.get("name", ""), search),
    )


def generate_mock_hotels(search: HotelSearch) -> List[Hotel]:
    location = search.location
    today = date.today()
    check_in = (today + timedelta(days=1)).isoformat()
    check_out = (today + timedelta(days=7)).isoformat()
    base = coords_or_default(location)

    hotels: List[Hotel] = []
    for i in range(random.randint(6, 8)):
        template = HOTEL_TEMPLATES[i % len(HOTEL_TEMPLATES)]
        rating = template["rating"] + random.uniform(-0.2, 0.2)
        lat, lng = jitter(base)
        hotels.append(
            Hotel(
                id=f"mock-hotel-{i + 1}",
                name=template["name"].replace("{location}", location),
                rating=max(3.5, min(5.0, rating)),
                price=round(template["price"] * random.uniform(0.8, 1.2)),
                currency="USD",
                location=f"{location}, {random.choice(AREAS)}",
                imageUrl=template["imageUrl"],
                amenities=list(template["amenities"]),
                description=template["description"],
                latitude=lat,
                longitude=lng,
                bookingUrl=(
                    f"https://www.booking.com/searchresults.html?ss={quote(location)}"
                    f"&checkin={check_in}&checkout={check_out}"
                    f"&group_adults={search.adults}&selected_currency=USD"
                ),
            )
        )
    random.shuffle(hotels)
    return hotels


class HotelService:
    async def search_hotels(self, search: HotelSearch) -> List[Hotel]:
        if not settings.google_places_api_key:
            logger.info("No Google Places API key configured; using mock hotels for '%s'", search.location)
            return generate_mock_hotels(search)

        coordinates = await google_places_api.geocode(search.location)
        if not coordinates:
            logger.warning("Could not geocode '%s'; using mock hotels", search.location)
            return generate_mock_hotels(search)

        places = await google_places_api.search_nearby_lodging(*coordinates)
        if not places:
            logger.info("No nearby hotels for '%s', trying text search", search.location)
            places = await google_places_api.search_lodging_by_text(search.location)
        if not places:
            logger.info("No hotels found for '%s'; using mock hotels", search.location)
            return generate_mock_hotels(search)

        hotels: List[Hotel] = []
        for place in places[:10]:
            details = await google_places_api.get_place_details(place.get("place_id", ""))
            try:
                hotels.append(place_to_hotel(place, details, search))
            except Exception as exc:
                logger.warning("Skipping hotel '%s': %s", place.get("name"), exc)
        return hotels or generate_mock_hotels(search)

    async def search_hotels_for_trip(
        self,
        destination: str,
        check_in: str,
        check_out: str,
        adults: int = 2,
        children: int = 0,
        rooms: int = 1,
    ) -> List[Hotel]:
        search = HotelSearch(
            location=destination,
            checkInDate=check_in,
            checkOutDate=check_out,
            adults=adults,
            children=children,
            rooms=rooms,
        )
        return await self.search_hotels(search)

    async def get_hotel_details(self, hotel_id: str) -> Optional[Hotel]:
        if not settings.google_places_api_key:
            return MOCK_HOTEL_DETAIL.model_copy(update={"id": hotel_id})

        result = await google_places_api.get_place_details(
            hotel_id,
            fields="place_id,name,rating,price_level,formatted_address,geometry,photos,reviews,types,website",
        )
        if not result or not result.get("name"):
            return None
        today = date.today()
        search = HotelSearch(
            location=result.get("formatted_address", ""),
            checkInDate=(today + timedelta(days=1)).isoformat(),
            checkOutDate=(today + timedelta(days=7)).isoformat(),
        )
        place = {**result, "place_id": result.get("place_id") or hotel_id}
        return place_to_hotel(place, result, search)
