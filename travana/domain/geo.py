from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

Coords = Tuple[float, float]

NEW_YORK: Coords = (40.7128, -74.0060)
JFK_AIRPORT: Coords = (40.6397, -73.7792)

DEFAULT_CITY_COORDS: Dict[str, Coords] = {
    "paris": (48.8566, 2.3522),
    "london": (51.5074, -0.1278),
    "new york": NEW_YORK,
    "new york city": NEW_YORK,
    "nyc": NEW_YORK,
    "tokyo": (35.6762, 139.6503),
    "sydney": (-33.8688, 151.2093),
    "mumbai": (19.0760, 72.8777),
    "dubai": (25.2048, 55.2708),
    "singapore": (1.3521, 103.8198),
    "bangkok": (13.7563, 100.5018),
    "mexico city": (19.4326, -99.1332),
    "rio de janeiro": (-22.9068, -43.1729),
    "cairo": (30.0444, 31.2357),
    "moscow": (55.7558, 37.6176),
    "beijing": (39.9042, 116.4074),
    "seoul": (37.5665, 126.9780),
    "istanbul": (41.0082, 28.9784),
    "madrid": (40.4168, -3.7038),
    "barcelona": (41.3851, 2.1734),
    "rome": (41.9028, 12.4964),
    "amsterdam": (52.3676, 4.9041),
    "berlin": (52.5200, 13.4050),
    "prague": (50.0755, 14.4378),
    "vienna": (48.2082, 16.3738),
    "budapest": (47.4979, 19.0402),
    "warsaw": (52.2297, 21.0122),
    "stockholm": (59.3293, 18.0686),
    "oslo": (59.9139, 10.7522),
    "copenhagen": (55.6761, 12.5683),
    "helsinki": (60.1699, 24.9384),
    "reykjavik": (64.1466, -21.9426),
    "dublin": (53.3498, -6.2603),
    "edinburgh": (55.9533, -3.1883),
    "glasgow": (55.8642, -4.2518),
    "manchester": (53.4808, -2.2426),
    "cork": (51.8969, -8.4706),
    "galway": (53.2707, -9.0627),
    "belfast": (54.5973, -5.9301),
    "toronto": (43.6532, -79.3832),
    "vancouver": (49.2827, -123.1207),
    "montreal": (45.5017, -73.5673),
    "los angeles": (34.0522, -118.2437),
    "san francisco": (37.7749, -122.4194),
    "chicago": (41.8781, -87.6298),
    "miami": (25.7617, -80.1918),
    "las vegas": (36.1699, -115.1398),
    "bali": (-8.3405, 115.0920),
    "kyoto": (35.0116, 135.7681),
    "osaka": (34.6937, 135.5023),
    "hong kong": (22.3193, 114.1694),
    "cape town": (-33.9249, 18.4241),
    "lisbon": (38.7223, -9.1393),
    "athens": (37.9838, 23.7275),
    "venice": (45.4408, 12.3155),
    "florence": (43.7696, 11.2558),
    "nice": (43.7102, 7.2620),
}


def coords_for(name: str | None) -> Optional[Coords]:
    """Look up a city by name, also trying the part before the first comma ("Paris, France")."""
    if not name:
        return None
    key = name.strip().lower()
    if key in DEFAULT_CITY_COORDS:
        return DEFAULT_CITY_COORDS[key]
    head = key.split(",")[0].strip()
    return DEFAULT_CITY_COORDS.get(head)


def coords_or_default(name: str | None, default: Coords = NEW_YORK) -> Coords:
    return coords_for(name) or default


def jitter(coords: Coords, spread: float = 0.1) -> Coords:
    """Random point within +/- spread/2 degrees of coords."""
    lat, lng = coords
    return lat + (random.random() - 0.5) * spread, lng + (random.random() - 0.5) * spread
