"""Pure helpers that reshape provider payloads and pick defaults."""

from datetime import date

import pytest

from travana.api.models.schemas import CurrentWeather, DailyForecast, Flight, HotelSearch
from travana.domain.services.event_service import format_price, map_category, pick_image, ticketmaster_to_event
from travana.domain.services.flight_service import is_international_route, remove_duplicate_flights, stops_for_route
from travana.domain.services.hotel_service import (
    adjust_stay_dates,
    amenities_from_types,
    description_from_reviews,
    place_to_hotel,
    price_for_level,
)
from travana.domain.services.music_service import format_duration, playlist_types
from travana.domain.services.payment_service import format_amount
from travana.domain.services.weather_service import generate_recommendations, parse_forecast
from travana.domain.storage import InMemoryKeyValueStore, JsonFileKeyValueStore


def test_adjust_stay_dates():
    today = date(2030, 6, 10)
    assert adjust_stay_dates("2030-06-01", "2030-06-05", today) == ("2030-06-11", "2030-06-18")
    assert adjust_stay_dates("2030-07-01", "2030-07-01", today) == ("2030-07-01", "2030-07-08")
    assert adjust_stay_dates("2030-07-01", "2030-07-03", today) == ("2030-07-01", "2030-07-03")
    with pytest.raises(ValueError):
        adjust_stay_dates("07/01/2030", "2030-07-03", today)


def test_price_for_level_bands():
    assert 200 <= price_for_level(3) <= 349
    assert 100 <= price_for_level(None) <= 299
    assert price_for_level(9) == 150


def test_amenities_and_description():
    assert amenities_from_types(["lodging", "spa"]) == ["WiFi", "Air Conditioning", "Accommodation", "Spa"]
    assert amenities_from_types(None) == ["WiFi", "Air Conditioning"]
    assert description_from_reviews([]) == "Hotel accommodation"
    assert description_from_reviews([{"text": "x" * 150}]) == "x" * 100 + "..."


def test_place_to_hotel():
    search = HotelSearch(location="Rome", checkInDate="2030-01-01", checkOutDate="2030-01-03")
    place = {
        "place_id": "p1",
        "name": "Hotel Roma",
        "rating": 4.4,
        "price_level": 2,
        "vicinity": "Via Roma 1",
        "geometry": {"location": {"lat": 41.9, "lng": 12.5}},
    }
    hotel = place_to_hotel(place, {"types": ["restaurant"]}, search)
    assert hotel.id == "p1"
    assert hotel.location == "Via Roma 1"
    assert 125 <= hotel.price <= 224
    assert "Restaurant" in hotel.amenities
    assert (hotel.latitude, hotel.longitude) == (41.9, 12.5)
    assert hotel.bookingUrl.startswith("https://www.google.com/travel/hotels?")
    assert "checkin=2030-01-01" in hotel.bookingUrl


def test_event_helpers():
    assert map_category([{"segment": {"name": "Sports"}}]) == "Sports"
    assert map_category([{"segment": {"name": "Arts & Theatre"}}]) == "Culture"
    assert map_category(None) == "Entertainment"
    assert format_price([{"min": 20, "max": 80}]) == "From $20 - $80"
    assert format_price([{"min": 20, "max": 20}]) == "From $20"
    assert format_price(None) == "Price TBA"
    assert pick_image([{"ratio": "4_3", "url": "a"}, {"ratio": "16_9", "url": "b"}]) == "b"
    assert pick_image([{"ratio": "4_3", "url": "a"}]) == "a"


def test_ticketmaster_to_event():
    event = ticketmaster_to_event(
        {
            "id": "tm1",
            "name": "Concert",
            "dates": {"start": {"localDate": "2030-03-01"}},
            "_embedded": {
                "venues": [
                    {
                        "name": "Arena",
                        "address": {"line1": "1 Main St"},
                        "city": {"name": "Toronto"},
                        "location": {"latitude": "43.6", "longitude": "-79.3"},
                    }
                ]
            },
        }
    )
    assert event.startDate == "2030-03-01T19:00:00"
    assert event.endDate == event.startDate
    assert event.venue.address == "1 Main St, Toronto"
    assert event.venue.latitude == 43.6
    assert event.description == "Event details will be available soon."
    assert event.price == "Price TBA"


def test_route_classification():
    assert is_international_route("jfk", "LHR")
    assert not is_international_route("JFK", "LAX")
    assert not is_international_route("LHR", "CDG")
    assert stops_for_route("JFK", "NRT", True) == 1
    assert stops_for_route("JFK", "CDG", True) == 0


def _flight(number: str, departure: str) -> Flight:
    return Flight(
        id=number,
        airline="Delta",
        flightNumber=number,
        origin="JFK",
        destination="LAX",
        departureTime=departure,
        arrivalTime=departure,
        duration="3h 0m",
        price=100,
        stops=0,
        cabinClass="economy",
        bookingUrl="https://example.com",
    )


def test_remove_duplicate_flights_keeps_first():
    flights = [_flight("DL1", "t1"), _flight("DL1", "t1"), _flight("DL1", "t2")]
    assert len(remove_duplicate_flights(flights)) == 2


def test_music_helpers():
    assert format_duration(215000) == "3:35"
    assert format_duration(61000) == "1:01"
    names = [t["name"] for t in playlist_types("Tokyo, Japan", "adventure")]
    assert names == ["Tokyo Nights", "Adventure Anthems", "Road Trip Classics", "Travel Essentials"]


def test_format_amount():
    assert format_amount(1234, "usd") == "$12.34"
    assert format_amount(500000, "eur") == "€5,000.00"
    assert format_amount(100, "sek") == "SEK 1.00"


def test_weather_recommendations():
    current = CurrentWeather(temperature=5, feelsLike=3, humidity=80, windSpeed=10, description="rain", icon="10d")
    forecast = [DailyForecast(date="2030-01-01", high=7, low=1, description="rain", icon="10d", precipitation=60)]
    recs = generate_recommendations(current, forecast)
    assert recs.clothing[:2] == ["Warm jacket", "Scarf"]
    assert "Umbrella" in recs.clothing
    assert recs.activities[0] == "Indoor activities"
    assert "Waterproof bag" in recs.packing


def test_parse_forecast_takes_one_slot_per_day():
    slot = {"dt": 1893456000, "main": {"temp_max": 20.4, "temp_min": 10.6}, "weather": [{"description": "sun", "icon": "01d"}], "pop": 0.25}
    days = parse_forecast({"list": [slot] * 24}, 2)
    assert len(days) == 2
    assert days[0].high == 20
    assert days[0].low == 11
    assert days[0].precipitation == 25


def test_in_memory_store_copies_values():
    store = InMemoryKeyValueStore()
    value = {"items": [1]}
    store.set("k", value)
    value["items"].append(2)
    assert store.get("k") == {"items": [1]}
    store.delete("k")
    assert store.get("k", []) == []


def test_json_file_store_persists(tmp_path):
    path = tmp_path / "data" / "store.json"
    store = JsonFileKeyValueStore(path)
    store.set("trips", [{"id": "a"}])
    assert JsonFileKeyValueStore(path).get("trips") == [{"id": "a"}]
    store.delete("trips")
    assert JsonFileKeyValueStore(path).get("trips") is None


def test_json_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileKeyValueStore(path).get("anything") is None
