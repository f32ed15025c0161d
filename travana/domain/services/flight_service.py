from __future__ import annotations

import logging
import random
from datetime import date, datetime, timedelta
from typing import Dict, List

from travana.api.models.schemas import Airport, Flight, FlightSearchParams
from travana.core.config import settings
from travana.external import flight_providers

logger = logging.getLogger(__name__)

# Each provider is only tried while fewer results than this are in hand
ENOUGH_RESULTS = 5

AIRLINES = [
    "Delta",
    "American Airlines",
    "United",
    "Southwest",
    "JetBlue",
    "British Airways",
    "Air France",
    "Lufthansa",
    "Emirates",
    "Qatar Airways",
]

US_AIRPORTS = {"JFK", "LAX", "ORD", "ATL", "DFW", "SFO", "MIA", "BOS", "DEN", "LAS", "MCO", "CLT", "PHX", "IAH", "MSP"}

ROUTE_MULTIPLIERS: Dict[str, float] = {
    # international
    "JFK-LHR": 0.8, "JFK-CDG": 0.9, "JFK-NRT": 1.2, "JFK-DXB": 1.0,
    "LAX-NRT": 1.1, "LAX-SYD": 1.3, "LAX-SIN": 1.2, "LAX-HKG": 1.1,
    "ORD-LHR": 0.85, "ORD-CDG": 0.95, "ORD-FRA": 0.9, "ORD-AMS": 0.85,
    "ATL-LHR": 0.9, "ATL-CDG": 1.0, "ATL-FRA": 0.95, "ATL-AMS": 0.9,
    "DFW-LHR": 0.95, "DFW-CDG": 1.05, "DFW-FRA": 1.0, "DFW-AMS": 0.95,
    # domestic
    "JFK-LAX": 1.33, "JFK-ORD": 0.83, "JFK-ATL": 0.67, "JFK-DFW": 1.0,
    "LAX-ORD": 1.17, "LAX-ATL": 1.33, "LAX-DFW": 1.0, "LAX-SFO": 0.5,
    "ORD-ATL": 0.67, "ORD-DFW": 0.83, "ORD-SFO": 1.17, "ORD-LAS": 1.0,
    "ATL-DFW": 0.67, "ATL-SFO": 1.33, "ATL-LAS": 1.17, "ATL-MIA": 0.5,
}

DIRECT_INTERNATIONAL_ROUTES = {
    "JFK-LHR", "JFK-CDG", "LAX-NRT", "LAX-SYD", "ORD-LHR",
    "ORD-CDG", "ATL-LHR", "ATL-CDG", "DFW-LHR", "DFW-CDG",
}

AIRLINE_BOOKING_PAGES = {
    "Delta": "https://www.delta.com/flight-search",
    "American Airlines": "https://www.aa.com/flights",
    "United": "https://www.united.com/flights",
    "Southwest": "https://www.southwest.com/flight/search-flight.html",
    "JetBlue": "https://www.jetblue.com/flights",
    "British Airways": "https://www.britishairways.com/flights",
    "Air France": "https://www.airfrance.com/flights",
    "Lufthansa": "https://www.lufthansa.com/flights",
    "Emirates": "https://www.emirates.com/flights",
    "Qatar Airways": "https://www.qatarairways.com/flights",
}

# code, name, city, country, latitude, longitude
_AIRPORT_ROWS = [
    ("JFK", "John F. Kennedy International Airport", "New York", "United States", 40.6413, -73.7781),
    ("LAX", "Los Angeles International Airport", "Los Angeles", "United States", 33.9416, -118.4085),
    ("ORD", "O'Hare International Airport", "Chicago", "United States", 41.9786, -87.9048),
    ("ATL", "Hartsfield-Jackson Atlanta International Airport", "Atlanta", "United States", 33.6407, -84.4277),
    ("DFW", "Dallas/Fort Worth International Airport", "Dallas", "United States", 32.8968, -97.0380),
    ("SFO", "San Francisco International Airport", "San Francisco", "United States", 37.6213, -122.3790),
    ("MIA", "Miami International Airport", "Miami", "United States", 25.7932, -80.2906),
    ("BOS", "Boston Logan International Airport", "Boston", "United States", 42.3656, -71.0096),
    ("CDG", "Charles de Gaulle Airport", "Paris", "France", 49.0097, 2.5479),
    ("LHR", "Heathrow Airport", "London", "United Kingdom", 51.4700, -0.4543),
    ("NRT", "Narita International Airport", "Tokyo", "Japan", 35.6762, 139.6503),
    ("DXB", "Dubai International Airport", "Dubai", "United Arab Emirates", 25.2532, 55.3657),
    ("SIN", "Singapore Changi Airport", "Singapore", "Singapore", 1.3644, 103.9915),
    ("HKG", "Hong Kong International Airport", "Hong Kong", "China", 22.3080, 113.9185),
    ("SYD", "Sydney Airport", "Sydney", "Australia", -33.9399, 151.1753),
    ("MEL", "Melbourne Airport", "Melbourne", "Australia", -37.8136, 144.9631),
    ("BCN", "Barcelona-El Prat Airport", "Barcelona", "Spain", 41.2974, 2.0833),
    ("MAD", "Madrid Barajas Airport", "Madrid", "Spain", 40.4983, -3.5676),
    ("FCO", "Rome Fiumicino Airport", "Rome", "Italy", 41.8045, 12.2508),
    ("MXP", "Milan Malpensa Airport", "Milan", "Italy", 45.6306, 8.7281),
    ("AMS", "Amsterdam Schiphol Airport", "Amsterdam", "Netherlands", 52.3105, 4.7683),
    ("FRA", "Frankfurt Airport", "Frankfurt", "Germany", 50.0379, 8.5622),
    ("MUC", "Munich Airport", "Munich", "Germany", 48.3538, 11.7861),
    ("ZRH", "Zurich Airport", "Zurich", "Switzerland", 47.4588, 8.5559),
    ("VIE", "Vienna International Airport", "Vienna", "Austria", 48.1102, 16.5697),
    ("CPH", "Copenhagen Airport", "Copenhagen", "Denmark", 55.6180, 12.6508),
    ("ARN", "Stockholm Arlanda Airport", "Stockholm", "Sweden", 59.6498, 17.9238),
    ("OSL", "Oslo Airport", "Oslo", "Norway", 60.1975, 11.1004),
    ("HEL", "Helsinki Airport", "Helsinki", "Finland", 60.3172, 24.9633),
    ("KEF", "Keflavik International Airport", "Reykjavik", "Iceland", 63.9850, -22.6056),
    ("YUL", "Montreal-Trudeau Airport", "Montreal", "Canada", 45.4706, -73.7408),
    ("YYZ", "Toronto Pearson Airport", "Toronto", "Canada", 43.6777, -79.6248),
    ("YVR", "Vancouver Airport", "Vancouver", "Canada", 49.1967, -123.1815),
    ("GRU", "São Paulo-Guarulhos Airport", "São Paulo", "Brazil", -23.4356, -46.4731),
    ("EZE", "Buenos Aires Ezeiza Airport", "Buenos Aires", "Argentina", -34.8222, -58.5358),
    ("MEX", "Mexico City International Airport", "Mexico City", "Mexico", 19.4363, -99.0721),
    ("CUN", "Cancún International Airport", "Cancún", "Mexico", 21.0365, -86.8771),
    ("BOM", "Mumbai Chhatrapati Shivaji Airport", "Mumbai", "India", 19.0896, 72.8656),
    ("DEL", "Delhi Indira Gandhi Airport", "Delhi", "India", 28.5562, 77.1000),
    ("BKK", "Bangkok Suvarnabhumi Airport", "Bangkok", "Thailand", 13.6900, 100.7501),
    ("KUL", "Kuala Lumpur International Airport", "Kuala Lumpur", "Malaysia", 2.7456, 101.7072),
    ("CGK", "Jakarta Soekarno-Hatta Airport", "Jakarta", "Indonesia", -6.1256, 106.6559),
    ("MNL", "Manila Ninoy Aquino Airport", "Manila", "Philippines", 14.5086, 121.0198),
    ("ICN", "Seoul Incheon Airport", "Seoul", "South Korea", 37.4602, 126.4407),
    ("PEK", "Beijing Capital Airport", "Beijing", "China", 40.0799, 116.6031),
    ("PVG", "Shanghai Pudong Airport", "Shanghai", "China", 31.1443, 121.8083),
    ("CAN", "Guangzhou Baiyun Airport", "Guangzhou", "China", 23.3924, 113.2988),
    ("CTU", "Chengdu Shuangliu Airport", "Chengdu", "China", 30.5785, 103.9471),
    ("BLR", "Bangalore Kempegowda Airport", "Bangalore", "India", 13.1986, 77.7066),
    ("MAA", "Chennai International Airport", "Chennai", "India", 12.9941, 80.1709),
    ("HYD", "Hyderabad Rajiv Gandhi Airport", "Hyderabad", "India", 17.2403, 78.4294),
    ("CCU", "Kolkata Netaji Subhas Airport", "Kolkata", "India", 22.6547, 88.4467),
    ("JNB", "Johannesburg O.R. Tambo Airport", "Johannesburg", "South Africa", -26.1392, 28.2460),
    ("CPT", "Cape Town International Airport", "Cape Town", "South Africa", -33.9715, 18.6021),
    ("CAI", "Cairo International Airport", "Cairo", "Egypt", 30.1219, 31.4056),
    ("NBO", "Nairobi Jomo Kenyatta Airport", "Nairobi", "Kenya", -1.3192, 36.9278),
    ("LOS", "Lagos Murtala Muhammed Airport", "Lagos", "Nigeria", 6.5774, 3.3210),
    ("RUH", "Riyadh King Khalid Airport", "Riyadh", "Saudi Arabia", 24.9578, 46.6989),
    ("JED", "Jeddah King Abdulaziz Airport", "Jeddah", "Saudi Arabia", 21.6805, 39.1505),
    ("DOH", "Doha Hamad International Airport", "Doha", "Qatar", 25.2730, 51.6081),
    ("KWI", "Kuwait International Airport", "Kuwait City", "Kuwait", 29.2266, 47.9689),
    ("BAH", "Bahrain International Airport", "Manama", "Bahrain", 26.2708, 50.6336),
    ("MUS", "Muscat International Airport", "Muscat", "Oman", 23.5932, 58.2844),
    ("AUH", "Abu Dhabi International Airport", "Abu Dhabi", "United Arab Emirates", 24.4330, 54.6511),
    ("SHJ", "Sharjah International Airport", "Sharjah", "United Arab Emirates", 25.3286, 55.5173),
]

FALLBACK_AIRPORTS: List[Airport] = [
    Airport(code=code, name=name, city=city, country=country, latitude=lat, longitude=lng)
    for code, name, city, country, lat, lng in _AIRPORT_ROWS
]


def route_key(origin: str, destination: str) -> str:
    return f"{origin.upper()}-{destination.upper()}"


def is_international_route(origin: str, destination: str) -> bool:
    """True when exactly one end is a known US airport."""
    return (origin.upper() in US_AIRPORTS) != (destination.upper() in US_AIRPORTS)


def route_multiplier(origin: str, destination: str) -> float:
    return ROUTE_MULTIPLIERS.get(route_key(origin, destination), 1.0)


def base_price(origin: str, destination: str, international: bool) -> int:
    return round((1000 if international else 300) * route_multiplier(origin, destination))


def flight_duration_minutes(origin: str, destination: str, international: bool) -> int:
    return round((600 if international else 180) * route_multiplier(origin, destination))


def stops_for_route(origin: str, destination: str, international: bool) -> int:
    if not international:
        return 0
    return 0 if route_key(origin, destination) in DIRECT_INTERNATIONAL_ROUTES else 1


def airline_booking_url(origin: str, destination: str, departure_date: str, airline: str) -> str:
    page = AIRLINE_BOOKING_PAGES.get(airline)
    if page is None:
        return f"https://www.google.com/flights?hl=en#flt={origin}.{destination}.{departure_date}"
    return f"{page}?from={origin}&to={destination}&date={departure_date}"


def _departure_day(departure_date: str) -> date:
    try:
        return datetime.fromisoformat(departure_date).date()
    except ValueError:
        logger.warning("Invalid departure date '%s', using tomorrow", departure_date)
        return date.today() + timedelta(days=1)


def generate_fallback_flights(params: FlightSearchParams) -> List[Flight]:
    international = is_international_route(params.origin, params.destination)
    price_base = base_price(params.origin, params.destination, international)
    duration = flight_duration_minutes(params.origin, params.destination, international)
    day = _departure_day(params.departureDate)

    flights: List[Flight] = []
    for i in range(8):
        airline = AIRLINES[i % len(AIRLINES)]
        departure_hour = int(6 + i * 2.5)
        departure = datetime(day.year, day.month, day.day, departure_hour)
        arrival = departure + timedelta(minutes=duration)
        flights.append(
            Flight(
                id=f"flight-{i + 1}",
                airline=airline,
                flightNumber=f"{airline[:2].upper()}{1000 + i}",
                origin=params.origin,
                destination=params.destination,
                departureTime=departure.isoformat(),
                arrivalTime=arrival.isoformat(),
                duration=f"{duration // 60}h {duration % 60}m",
                price=round(price_base * random.uniform(0.7, 1.3)),
                currency="USD",
                stops=stops_for_route(params.origin, params.destination, international),
                cabinClass=params.cabinClass,
                bookingUrl=airline_booking_url(params.origin, params.destination, params.departureDate, airline),
            )
        )
    return sorted(flights, key=lambda f: f.price)


def remove_duplicate_flights(flights: List[Flight]) -> List[Flight]:
    seen: set[str] = set()
    unique: List[Flight] = []
    for flight in flights:
        key = f"{flight.airline}-{flight.flightNumber}-{flight.departureTime}"
        if key in seen:
            continue
        seen.add(key)
        unique.append(flight)
    return unique


def filter_fallback_airports(query: str) -> List[Airport]:
    q = query.lower()
    return [
        airport
        for airport in FALLBACK_AIRPORTS
        if q in airport.code.lower() or q in airport.city.lower() or q in airport.name.lower()
    ]


class FlightService:
    async def search_flights(self, params: FlightSearchParams) -> List[Flight]:
        results: List[Flight] = []
        providers = [
            ("Skyscanner", settings.skyscanner_api_key, flight_providers.search_skyscanner),
            ("Amadeus", settings.amadeus_api_key, flight_providers.search_amadeus),
            ("Kiwi", settings.kiwi_api_key, flight_providers.search_kiwi),
        ]
        for name, key, search in providers:
            if not key or len(results) >= ENOUGH_RESULTS:
                continue
            try:
                found = await search(params)
            except Exception as exc:  # pragma: no cover - network dependent
                logger.warning("%s flight search failed for %s-%s: %s", name, params.origin, params.destination, exc)
                continue
            logger.info("%s returned %d flights", name, len(found))
            results.extend(found)

        if not results:
            logger.info("No provider results for %s-%s; using fallback flights", params.origin, params.destination)
            return generate_fallback_flights(params)

        return sorted(remove_duplicate_flights(results), key=lambda f: f.price)

    async def search_airports(self, query: str) -> List[Airport]:
        if not settings.amadeus_api_key:
            return filter_fallback_airports(query)
        try:
            return await flight_providers.search_amadeus_locations(query)
        except Exception as exc:  # pragma: no cover - network dependent
            logger.warning("Airport search failed for '%s': %s", query, exc)
            return filter_fallback_airports(query)
