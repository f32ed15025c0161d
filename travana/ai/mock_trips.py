from __future__ import annotations

import copy
import logging
import random
import re
from typing import Any, Dict, List, Optional

from travana.domain.geo import Coords, coords_or_default

logger = logging.getLogger(__name__)

DEFAULT_DESTINATION = "Paris, France"
DEFAULT_DURATION = "5 days"
DEFAULT_BUDGET = "$2,000"
MAX_GENERATED_DAYS = 30


def _day(day: int, title: str, activities: List[str], locations: List[tuple]) -> Dict[str, Any]:
    return {
        "day": day,
        "title": title,
        "activities": activities,
        "locations": [{"name": name, "lat": lat, "lng": lng} for name, lat, lng in locations],
    }


def _booking_search(city: str) -> str:
    return f"https://www.booking.com/searchresults.html?ss={city}&selected_currency=USD"


TRIP_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "paris": {
        "destination": "Paris, France",
        "duration": "5 days",
        "budget": "$2,500",
        "activities": ["Eiffel Tower Visit", "Louvre Museum", "Seine River Cruise", "Notre-Dame Cathedral", "Champs-Élysées Walk"],
        "itinerary": [
            _day(1, "Arrival & City Center", ["Arrive and check into hotel", "Explore the city center", "Welcome dinner at local bistro"],
                 [("Eiffel Tower", 48.8584, 2.2945), ("Champs-Élysées", 48.8698, 2.3077)]),
            _day(2, "Art & Culture", ["Visit Louvre Museum", "Walk through Tuileries Garden", "Evening at Montmartre"],
                 [("Louvre Museum", 48.8606, 2.3376), ("Montmartre", 48.8867, 2.3431)]),
            _day(3, "Historic Paris", ["Notre-Dame Cathedral", "Sainte-Chapelle", "Seine River Cruise"],
                 [("Notre-Dame Cathedral", 48.8530, 2.3499), ("Sainte-Chapelle", 48.8559, 2.3450)]),
            _day(4, "Palace & Gardens", ["Day trip to Versailles", "Explore Palace Gardens", "Return to Paris for dinner"],
                 [("Palace of Versailles", 48.8044, 2.1232), ("Versailles Gardens", 48.8034, 2.1200)]),
            _day(5, "Final Day", ["Shopping at Galeries Lafayette", "Arc de Triomphe", "Farewell dinner"],
                 [("Arc de Triomphe", 48.8738, 2.2950), ("Galeries Lafayette", 48.8737, 2.3324)]),
        ],
        "accommodationSuggestions": [
            {"name": "Grand Hotel Paris", "type": "Hotel", "priceRange": "$200 - $300 per night", "bookingUrl": _booking_search("Paris")},
            {"name": "Boutique Paris Suites", "type": "Hotel", "priceRange": "$150 - $250 per night", "bookingUrl": _booking_search("Paris")},
        ],
        "travelTips": ["Use the Metro for easy transportation", "Try local pastries and coffee", "Book museum tickets in advance", "Learn basic French phrases"],
    },
    "tokyo": {
        "destination": "Tokyo, Japan",
        "duration": "7 days",
        "budget": "$3,200",
        "activities": ["Senso-ji Temple", "Shibuya Crossing", "Tsukiji Fish Market", "Mount Fuji Day Trip", "Akihabara Electronics"],
        "itinerary": [
            _day(1, "Arrival & Asakusa", ["Arrive at Narita Airport", "Check into hotel", "Visit Senso-ji Temple", "Evening at Tokyo Skytree"],
                 [("Senso-ji Temple", 35.7148, 139.7967), ("Tokyo Skytree", 35.7100, 139.8107)]),
            _day(2, "Modern Tokyo", ["Shibuya Crossing", "Harajuku shopping", "Meiji Shrine", "Shibuya nightlife"],
                 [("Shibuya Crossing", 35.6595, 139.7004), ("Meiji Shrine", 35.6702, 139.7016)]),
            _day(3, "Traditional & Modern", ["Tsukiji Fish Market", "Ginza shopping district", "Tokyo Tower", "Roppongi Hills"],
                 [("Tsukiji Fish Market", 35.6654, 139.7704), ("Tokyo Tower", 35.6586, 139.7454)]),
            _day(4, "Technology & Culture", ["Akihabara Electronics District", "Ueno Park", "Tokyo National Museum", "Ameya-Yokocho Market"],
                 [("Akihabara", 35.7022, 139.7745), ("Ueno Park", 35.7148, 139.7710)]),
            _day(5, "Nature & Relaxation", ["Day trip to Mount Fuji", "Lake Kawaguchi", "Onsen experience", "Return to Tokyo"],
                 [("Mount Fuji", 35.3606, 138.7274), ("Lake Kawaguchi", 35.5167, 138.7500)]),
            _day(6, "Imperial & Gardens", ["Imperial Palace East Gardens", "Yoyogi Park", "Shibuya shopping", "Evening food tour"],
                 [("Imperial Palace", 35.6852, 139.7528), ("Yoyogi Park", 35.6702, 139.7016)]),
            _day(7, "Final Day", ["Last-minute shopping", "Visit to Tokyo Station", "Departure preparation"],
                 [("Tokyo Station", 35.6812, 139.7671), ("Marunouchi District", 35.6812, 139.7671)]),
        ],
        "accommodationSuggestions": [
            {"name": "Tokyo Grand Hotel", "type": "Hotel", "priceRange": "$180 - $280 per night", "bookingUrl": _booking_search("Tokyo")},
            {"name": "Shibuya Business Hotel", "type": "Hotel", "priceRange": "$120 - $200 per night", "bookingUrl": _booking_search("Tokyo")},
        ],
        "travelTips": ["Get a Japan Rail Pass for transportation", "Try authentic ramen and sushi", "Learn basic Japanese phrases", "Respect local customs and etiquette"],
    },
    "new york": {
        "destination": "New York City, USA",
        "duration": "6 days",
        "budget": "$2,800",
        "activities": ["Times Square", "Central Park", "Statue of Liberty", "Broadway Show", "Empire State Building"],
        "itinerary": [
            _day(1, "Arrival & Times Square", ["Arrive at JFK Airport", "Check into hotel", "Times Square exploration", "Broadway show"],
                 [("Times Square", 40.7580, -73.9855), ("Broadway District", 40.7589, -73.9851)]),
            _day(2, "Manhattan Icons", ["Empire State Building", "Rockefeller Center", "Fifth Avenue shopping", "Top of the Rock"],
                 [("Empire State Building", 40.7484, -73.9857), ("Rockefeller Center", 40.7587, -73.9787)]),
            _day(3, "Central Park & Museums", ["Central Park walk", "Metropolitan Museum of Art", "Natural History Museum", "Evening in Upper West Side"],
                 [("Central Park", 40.7829, -73.9654), ("Metropolitan Museum", 40.7794, -73.9632)]),
            _day(4, "Liberty & Financial", ["Statue of Liberty", "Ellis Island", "Wall Street", "9/11 Memorial"],
                 [("Statue of Liberty", 40.6892, -74.0445), ("Wall Street", 40.7069, -74.0110)]),
            _day(5, "Brooklyn & Queens", ["Brooklyn Bridge walk", "DUMBO neighborhood", "Williamsburg exploration", "Queens food tour"],
                 [("Brooklyn Bridge", 40.7061, -73.9969), ("DUMBO", 40.7033, -73.9872)]),
            _day(6, "Final Day", ["High Line walk", "Chelsea Market", "Last-minute shopping", "Farewell dinner"],
                 [("High Line", 40.7480, -74.0048), ("Chelsea Market", 40.7421, -74.0060)]),
        ],
        "accommodationSuggestions": [
            {"name": "Manhattan Grand Hotel", "type": "Hotel", "priceRange": "$250 - $350 per night", "bookingUrl": _booking_search("New+York")},
            {"name": "Times Square Inn", "type": "Hotel", "priceRange": "$180 - $280 per night", "bookingUrl": _booking_search("New+York")},
        ],
        "travelTips": ["Get a MetroCard for subway access", "Try New York pizza and bagels", "Book Broadway shows in advance", "Walk when possible to see more"],
    },
}

TEMPLATE_KEYWORDS = [
    ("tokyo", ("tokyo", "japan")),
    ("new york", ("new york", "nyc", "manhattan")),
    ("paris", ("paris", "france")),
]

KNOWN_DESTINATIONS = [
    "Paris, France", "Tokyo, Japan", "New York City, USA", "New York, USA", "London, UK", "Rome, Italy",
    "Barcelona, Spain", "Madrid, Spain", "Amsterdam, Netherlands", "Berlin, Germany", "Prague, Czech Republic",
    "Vienna, Austria", "Budapest, Hungary", "Warsaw, Poland", "Stockholm, Sweden", "Oslo, Norway",
    "Copenhagen, Denmark", "Helsinki, Finland", "Reykjavik, Iceland", "Dublin, Ireland", "Cork, Ireland",
    "Galway, Ireland", "Limerick, Ireland", "Waterford, Ireland", "Kilkenny, Ireland", "Edinburgh, UK",
    "Glasgow, UK", "Manchester, UK", "Birmingham, UK", "Leeds, UK", "Liverpool, UK", "Newcastle, UK",
    "Cardiff, UK", "Belfast, UK", "Istanbul, Turkey", "Seoul, South Korea", "Beijing, China",
    "Moscow, Russia", "Cairo, Egypt", "Rio de Janeiro, Brazil", "Mexico City, Mexico", "Bangkok, Thailand",
    "Singapore", "Dubai, UAE", "Mumbai, India", "Sydney, Australia",
]

_DESTINATION_PHRASE = re.compile(
    r"\b(?:in|to|visit|travel to|go to)\s+([a-zA-Z\s,]+?)(?:\s+for|\s+with|\s+interested|\s+budget|$)",
    re.IGNORECASE,
)
_DURATION_PATTERNS = [
    (re.compile(r"(\d+)\s*days?", re.IGNORECASE), 1),
    (re.compile(r"(\d+)\s*weeks?", re.IGNORECASE), 7),
    (re.compile(r"(\d+)\s*months?", re.IGNORECASE), 30),
]
_BUDGET_PATTERNS = [
    re.compile(r"\$(\d+(?:,\d+)?(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"(\d+(?:,\d+)?(?:\.\d+)?)\s*dollars?", re.IGNORECASE),
    re.compile(r"budget\s*of\s*\$?(\d+(?:,\d+)?(?:\.\d+)?)", re.IGNORECASE),
]


def extract_destination(prompt: str) -> Optional[str]:
    lowered = prompt.lower()
    for destination in KNOWN_DESTINATIONS:
        city = destination.lower().split(",")[0]
        if re.search(rf"\b{re.escape(city)}\b", lowered):
            return destination
    return None


def extract_duration(prompt: str) -> Optional[str]:
    """Duration in days; weeks and months are converted (7 and 30 days)."""
    for pattern, factor in _DURATION_PATTERNS:
        match = pattern.search(prompt)
        if match:
            return f"{int(match.group(1)) * factor} days"
    return None


def extract_budget(prompt: str) -> Optional[str]:
    for pattern in _BUDGET_PATTERNS:
        match = pattern.search(prompt)
        if match:
            amount = float(match.group(1).replace(",", ""))
            if amount.is_integer():
                return f"${int(amount):,}"
            return f"${amount:,}"
    return None


def _destination_from_phrase(prompt: str) -> Optional[str]:
    match = _DESTINATION_PHRASE.search(prompt)
    if not match:
        return None
    extracted = match.group(1).strip(" ,")
    if len(extracted) <= 2 or "days" in extracted.lower() or "budget" in extracted.lower():
        return None
    return extracted[0].upper() + extracted[1:]


def _slot(
    time: str,
    activity: str,
    location: str,
    destination: str,
    center: Coords,
    duration_hours: int,
    cost: int,
    tip: str,
    platform: str,
    url: str,
) -> Dict[str, Any]:
    lat, lng = center
    return {
        "time": time,
        "activity": activity,
        "location": {
            "name": location,
            "lat": lat + (random.random() - 0.5) * 0.005,
            "lng": lng + (random.random() - 0.5) * 0.005,
            "address": f"{location}, {destination}",
        },
        "duration": f"{duration_hours} hours",
        "cost": f"${cost}",
        "tips": tip,
        "bookingUrl": url,
        "bookingPlatform": platform,
    }


MORNING_ACTIVITIES = [
    "Sunrise Experience", "Morning Discovery", "Early Bird Adventure", "Morning Cultural Immersion",
    "Sunrise Photography Session", "Morning Market Exploration", "Early Morning Walking Tour",
    "Morning Historical Journey", "Sunrise Viewing Experience", "Morning Local Life Discovery",
]
AFTERNOON_ACTIVITIES = [
    "Afternoon Cultural Experience", "Midday Adventure", "Afternoon Local Discovery", "Midday Cultural Immersion",
    "Afternoon Historical Tour", "Midday Art and Culture", "Afternoon Local Cuisine", "Midday Shopping Experience",
    "Afternoon Nature Walk", "Midday Entertainment",
]
EVENING_ACTIVITIES = [
    "Evening Cultural Show", "Night Life Experience", "Evening Dining Adventure", "Night Entertainment",
    "Evening Local Experience", "Night Cultural Performance", "Evening Street Food Tour", "Night Local Bar Experience",
    "Evening Walking Tour", "Night Photography Session",
]
LOCATION_TYPES = [
    "Historic District", "Cultural Quarter", "Arts District", "Old Town", "Modern Center",
    "Waterfront Area", "University District", "Business District", "Entertainment Zone",
    "Residential Quarter", "Industrial Heritage Site", "Government District", "Religious Quarter",
    "Market District", "Park District", "Shopping District", "Theater District", "Museum Quarter",
    "Restaurant Row", "Nightlife District", "Historic Square", "Cultural Center", "Art Gallery District",
    "Local Market Area", "Historic Church District", "University Campus", "Business Center",
    "Entertainment Complex", "Residential Neighborhood", "Industrial Area",
]
THEMES = ["Cultural", "Adventure", "Relaxation", "Historical", "Modern", "Nature", "Artistic", "Culinary", "Entertainment", "Educational"]
TRANSPORT_METHODS = ["Metro", "Bus", "Walk", "Taxi", "Bike"]
CUISINES = ["Local", "International", "Fusion", "Traditional", "Modern"]


def generate_itinerary(destination: str, num_days: int, coords: Coords) -> List[Dict[str, Any]]:
    """Day-by-day plan with three slots per day; names rotate so no two days repeat."""
    city = destination.split(",")[0]
    days: List[Dict[str, Any]] = []
    for day in range(1, num_days + 1):
        offset = (day - 1) * 3
        morning = f"{city} Day {day} {MORNING_ACTIVITIES[offset % len(MORNING_ACTIVITIES)]}"
        afternoon = f"{city} Day {day} {AFTERNOON_ACTIVITIES[(offset + 1) % len(AFTERNOON_ACTIVITIES)]}"
        evening = f"{city} Day {day} {EVENING_ACTIVITIES[(offset + 2) % len(EVENING_ACTIVITIES)]}"
        places = [
            f"{city} {LOCATION_TYPES[(day - 1 + shift) % len(LOCATION_TYPES)]}" for shift in (0, 10, 20)
        ]
        center = (
            coords[0] + (random.random() - 0.5) * 0.02,
            coords[1] + (random.random() - 0.5) * 0.02,
        )
        theme = THEMES[(day - 1) % len(THEMES)]
        dining_spot = f"{city} Day {day} Dining District"

        days.append(
            {
                "day": day,
                "title": f"Day {day} - {theme} {city} Experience",
                "theme": theme,
                "morning": _slot(
                    "09:00", morning, places[0], destination, center,
                    random.randint(2, 3), random.randint(10, 34),
                    f"Best time to visit is early morning for {morning.lower()}",
                    "Viator", "https://www.viator.com",
                ),
                "afternoon": _slot(
                    "14:00", afternoon, places[1], destination, center,
                    random.randint(3, 4), random.randint(15, 49),
                    f"Perfect afternoon activity for {afternoon.lower()}",
                    "GetYourGuide", "https://www.getyourguide.com",
                ),
                "evening": _slot(
                    "19:00", evening, places[2], destination, center,
                    random.randint(2, 3), random.randint(25, 64),
                    f"Great evening experience for {evening.lower()}",
                    "TripAdvisor", "https://www.tripadvisor.com",
                ),
                "transportation": [
                    {
                        "from": "Previous location",
                        "to": "Next location",
                        "method": random.choice(TRANSPORT_METHODS),
                        "duration": f"{random.randint(10, 29)} minutes",
                        "cost": f"${random.uniform(1, 4):.2f}",
                        "details": "Use local transportation network",
                        "bookingUrl": "https://www.local-transport.com",
                    }
                ],
                "dining": [
                    {
                        "meal": "Dinner",
                        "restaurant": f"{city} Day {day} {random.choice(CUISINES)} Restaurant",
                        "cuisine": random.choice(CUISINES),
                        "priceRange": f"${random.randint(20, 39)}-{random.randint(40, 69)}",
                        "specialty": f"{city} Day {day} specialty dish",
                        "location": {
                            "name": dining_spot,
                            "lat": center[0] + (random.random() - 0.5) * 0.005,
                            "lng": center[1] + (random.random() - 0.5) * 0.005,
                            "address": f"{dining_spot}, {destination}",
                        },
                        "bookingUrl": "https://www.opentable.com",
                        "bookingPlatform": "OpenTable",
                    }
                ],
                "highlights": [f"{morning} experience", f"{afternoon} discovery", f"{evening} adventure"],
                "totalCost": f"${random.randint(60, 139)}",
            }
        )
    return days


def generic_trip_plan(destination: str, duration: str, budget: str) -> Dict[str, Any]:
    city = destination.split(",")[0]
    match = re.search(r"\d+", duration)
    num_days = min(int(match.group(0)) if match else 5, MAX_GENERATED_DAYS)
    coords = coords_or_default(destination)
    return {
        "destination": destination,
        "duration": duration,
        "budget": budget,
        "bestTimeToVisit": "April - October",
        "weather": "Mild temperatures, occasional rain",
        "timezone": "UTC+1",
        "language": "English",
        "currency": "USD ($)",
        "activities": ["Sightseeing", "Local Cuisine", "Museums", "Shopping"],
        "itinerary": generate_itinerary(destination, num_days, coords),
        "accommodationSuggestions": [
            {
                "name": f"{city} Grand Hotel",
                "type": "Hotel",
                "priceRange": "$150 - $250 per night",
                "location": "City Center",
                "amenities": ["WiFi", "Breakfast", "Gym", "Pool"],
                "pros": ["Great location", "Good value", "Friendly staff"],
                "cons": ["Small rooms", "Noisy at night"],
                "bookingUrl": "https://www.booking.com",
            },
            {
                "name": f"{city} Boutique Hotel",
                "type": "Hotel",
                "priceRange": "$200 - $350 per night",
                "location": "Downtown",
                "amenities": ["WiFi", "Breakfast", "Spa", "Restaurant"],
                "pros": ["Luxury experience", "Quiet location", "Excellent service"],
                "cons": ["Higher price", "Limited parking"],
                "bookingUrl": "https://www.booking.com",
            },
        ],
        "transportation": {
            "airport": f"{city} International Airport",
            "fromAirport": "Taxi or shuttle service, $25-40",
            "localTransport": "Metro/Bus system available",
            "recommendations": ["Get a travel pass", "Use ride-sharing apps", "Walk when possible"],
        },
        "dining": {
            "localCuisine": "Local specialties and international options",
            "restaurantTypes": ["Fine dining", "Street food", "Cafes", "Bars"],
            "priceRanges": {
                "budget": "$10-20 per meal",
                "midRange": "$20-40 per meal",
                "luxury": "$40+ per meal",
            },
            "recommendations": ["Try local specialties", "Book popular restaurants in advance", "Explore food markets"],
        },
        "culturalInsights": {
            "customs": ["Respect local customs", "Learn basic phrases", "Dress appropriately"],
            "etiquette": ["Be polite and patient", "Tip appropriately", "Follow local dining customs"],
            "language": {"hello": "Hello", "thankYou": "Thank you", "goodbye": "Goodbye"},
        },
        "travelTips": [
            "Book accommodations in advance",
            "Get travel insurance",
            "Learn basic local phrases",
            "Keep important documents safe",
            "Stay hydrated and well-rested",
        ],
        "emergencyInfo": {
            "police": "911 (Emergency)",
            "hospital": "Local Hospital: +1-555-0123",
            "embassy": "US Embassy: +1-555-0456",
        },
        "packingList": {
            "essentials": ["Passport", "Phone charger", "Comfortable shoes", "Weather-appropriate clothing"],
            "seasonal": ["Sunscreen", "Umbrella", "Light jacket"],
            "optional": ["Camera", "Power bank", "Travel adapter", "Books"],
        },
    }


def template_key_for(prompt: str) -> Optional[str]:
    lowered = prompt.lower()
    for key, keywords in TEMPLATE_KEYWORDS:
        if any(word in lowered for word in keywords):
            return key
    return None


def fallback_trip_plan(prompt: str) -> Dict[str, Any]:
    """
    Offline trip plan. Prompts about Paris, Tokyo or New York get the curated
    template customised with whatever destination, duration and budget the
    prompt mentions; anything else gets a generated itinerary.
    """
    destination = extract_destination(prompt)
    duration = extract_duration(prompt)
    budget = extract_budget(prompt)

    key = template_key_for(prompt)
    if key:
        plan = copy.deepcopy(TRIP_TEMPLATES[key])
        plan["destination"] = destination or plan["destination"]
        plan["duration"] = duration or plan["duration"]
        plan["budget"] = budget or plan["budget"]
        return plan

    destination = destination or _destination_from_phrase(prompt) or DEFAULT_DESTINATION
    logger.info("Generating offline itinerary for %s", destination)
    return generic_trip_plan(destination, duration or DEFAULT_DURATION, budget or DEFAULT_BUDGET)
