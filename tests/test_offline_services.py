"""With no API keys configured every service answers from its offline data."""

import pytest
import stripe

from travana.api.models.schemas import CarRentalSearch, FlightSearchParams, HotelSearch
from travana.core.config import settings
from travana.domain.services.car_rental_service import CarRentalService
from travana.domain.services.esim_service import ESIMService
from travana.domain.services.event_service import EventService
from travana.domain.services.flight_service import FlightService
from travana.domain.services.hotel_service import HotelService
from travana.domain.services.music_service import MusicService
from travana.domain.services.payment_service import PaymentService
from travana.domain.services.translation_service import TranslationService
from travana.domain.services.weather_service import MAX_FORECAST_DAYS, WeatherService


@pytest.mark.asyncio
async def test_hotels_fall_back_to_mock_inventory():
    hotels = await HotelService().search_hotels(
        HotelSearch(location="Paris", checkInDate="2030-05-01", checkOutDate="2030-05-05")
    )
    assert 6 <= len(hotels) <= 8
    for hotel in hotels:
        assert 3.5 <= hotel.rating <= 5.0
        assert hotel.bookingUrl.startswith("https://www.booking.com/searchresults.html?ss=Paris")
        assert abs(hotel.latitude - 48.8566) <= 0.05


@pytest.mark.asyncio
async def test_hotel_detail_without_key_uses_requested_id():
    hotel = await HotelService().get_hotel_details("abc123")
    assert hotel.id == "abc123"
    assert hotel.name


@pytest.mark.asyncio
async def test_car_rentals_fall_back_to_three_offers():
    rentals = await CarRentalService().search_car_rentals_for_trip("Paris", "2030-05-01", "2030-05-05")
    assert [r.company for r in rentals] == ["Hertz", "Avis", "Enterprise"]
    assert rentals[0].pickupLocation == "Paris Airport"


@pytest.mark.asyncio
async def test_car_rental_search_uses_location_label():
    search = CarRentalSearch(pickUpLatitude=1, pickUpLongitude=2, dropOffLatitude=1, dropOffLongitude=2)
    rentals = await CarRentalService().search_car_rentals(search)
    assert rentals[1].pickupLocation == "US Downtown"


@pytest.mark.asyncio
async def test_flights_fall_back_to_generated_schedule():
    params = FlightSearchParams(origin="JFK", destination="LHR", departureDate="2030-05-01")
    flights = await FlightService().search_flights(params)
    assert len(flights) == 8
    assert [f.price for f in flights] == sorted(f.price for f in flights)
    assert all(f.stops == 0 for f in flights)
    assert all(f.departureTime.startswith("2030-05-01") for f in flights)


@pytest.mark.asyncio
async def test_airport_search_filters_static_table():
    airports = await FlightService().search_airports("paris")
    assert "CDG" in {a.code for a in airports}


@pytest.mark.asyncio
async def test_events_fallback():
    events, source = await EventService().search_events("Toronto", "music")
    assert source == "fallback"
    assert [e.id for e in events] == ["fallback-1", "fallback-2"]


@pytest.mark.asyncio
async def test_music_fallbacks():
    svc = MusicService()
    assert len(await svc.search_tracks("jazz", 3)) == 3
    assert len(await svc.get_mood_based_recommendations("relaxed")) == 5
    recs = await svc.get_playlist_recommendations("Paris", "5 days", "romantic")
    assert recs
    assert all(r.tracks and r.duration == "5 days" for r in recs)
    playlist = await svc.create_playlist("Trip", "", ["a", "b"])
    assert playlist.trackCount == 2
    assert svc.get_popular_travel_playlists()


@pytest.mark.asyncio
async def test_translation_dictionary_fallback():
    svc = TranslationService()
    result = await svc.translate_text("Hello", "es")
    assert result.translatedText == "hola"
    assert result.sourceLanguage == "en"
    assert result.confidence == 0.8

    unknown = await svc.translate_text("Where is the station?", "fr", "en")
    assert unknown.translatedText == "Where is the station?"
    assert unknown.sourceLanguage == "en"

    assert await svc.detect_language("bonjour") == "en"


def test_phrase_book_and_languages():
    svc = TranslationService()
    assert [s.category for s in svc.get_phrase_book("fr")]
    assert svc.get_phrase_book("xx")[0].phrases[0].translated == "Hola"
    assert len(svc.get_supported_languages()) == 12


@pytest.mark.asyncio
async def test_weather_fallback():
    data = await WeatherService().get_weather_forecast("Lisbon", 3)
    assert data.location == "Lisbon"
    assert len(data.forecast) == 3
    for day in data.forecast:
        assert 22 <= day.high <= 31
        assert 15 <= day.low <= 22
        assert 0 <= day.precipitation <= 30


def test_esim_recommendations():
    svc = ESIMService()
    assert [p.id for p in svc.get_esim_plans("Japan")] == ["japan-1"]
    assert [p.id for p in svc.get_esim_plans("Peru")] == ["global-1"]

    rec = svc.get_recommendations("France", 7)
    assert [p.id for p in rec.recommendedPlans] == ["france-1"]
    assert rec.alternatives == []
    assert len(rec.tips) == 4
    assert svc.get_recommendations("France", 14).recommendedPlans == []


@pytest.mark.asyncio
async def test_payments_without_stripe():
    svc = PaymentService()
    intent = await svc.create_payment_intent(2500, "usd")
    assert intent.id.startswith("pi_mock_")
    assert intent.status == "requires_payment_method"
    assert await svc.get_payment_status(intent.id) == "succeeded"
    assert await svc.confirm_payment(intent.id, "pm_card")
    assert await svc.process_refund(intent.id, "requested_by_customer")
    assert await svc.validate_payment_method("pm_card")

    payment = await svc.create_booking_payment(2500, "usd", "Hotel", "a@example.com", "hotel-1", "user-1")
    assert payment.metadata == {"bookingId": "hotel-1", "userId": "user-1"}
    assert await svc.send_payment_confirmation(payment)
    invoice = svc.generate_invoice(payment)
    assert "Amount: 25 USD" in invoice
    assert "Booking ID: hotel-1" in invoice
    assert svc.convert_currency(2500, "usd", "eur") == 2500
    assert len(svc.get_supported_currencies()) == 8


def test_offline_routes(client):
    hotels = client.get("/api/hotels?destination=Tokyo&checkInDate=2000-01-01&checkOutDate=2000-01-02").json()
    assert hotels["hotels"]
    assert hotels["searchParams"]["checkInDate"] > "2000-01-01"

    events = client.get("/api/events").json()
    assert events["city"] == "Toronto"
    assert events["total"] == len(events["events"]) == 2
    assert events["source"] == "fallback"

    flights = client.get("/api/flights?action=search&origin=JFK&destination=LAX&departureDate=2030-01-10").json()
    assert len(flights) == 8

    assert client.get("/api/music?action=genres&genres=jazz,rock").json()
    assert client.get("/api/esim?action=global").json()[0]["id"] == "global-1"
    assert client.get("/api/translate?action=detect&text=hola").json() == {"language": "en"}
    assert client.get("/api/payment?action=status&paymentId=pi_1").json() == {"status": "succeeded"}

    payment = client.post("/api/payment", json={"amount": 1999, "currency": "usd", "description": "Tour"}).json()
    assert payment["success"] is True
    assert payment["paymentId"].startswith("pi_mock_")
    assert payment["message"] == "Payment created successfully"

    assert client.get("/api/hotels/some-place").json()["hotel"]["id"] == "some-place"


@pytest.mark.asyncio
async def test_weather_forecast_length_is_capped():
    data = await WeatherService().get_weather_forecast("Lisbon", 500)
    assert len(data.forecast) == MAX_FORECAST_DAYS


def test_weather_route_rejects_out_of_range_days(client):
    too_many = client.get(f"/api/weather?location=Paris&days={MAX_FORECAST_DAYS + 1}")
    assert too_many.status_code == 400
    assert too_many.json()["error"]["details"]["field"] == "days"
    assert client.get("/api/weather?location=Paris&days=0").status_code == 400

    ok = client.get(f"/api/weather?location=Paris&days={MAX_FORECAST_DAYS}")
    assert ok.status_code == 200
    assert len(ok.json()["forecast"]) == MAX_FORECAST_DAYS


def test_hotel_post_defaults_non_positive_counts(client):
    resp = client.post(
        "/api/hotels",
        json={"location": "Paris", "checkInDate": "2030-05-01", "checkOutDate": "2030-05-05", "adults": 0, "rooms": -1},
    )
    assert resp.status_code == 200
    hotels = resp.json()["hotels"]
    assert hotels
    assert all("group_adults=2" in hotel["bookingUrl"] for hotel in hotels)


class _StripeObject(dict):
    def to_dict(self):
        return dict(self)


@pytest.mark.asyncio
async def test_payment_intent_through_stripe_sdk(monkeypatch):
    sent = {}

    def create(**params):
        sent.update(params)
        return _StripeObject(
            id="pi_1", amount=2500, currency="usd", status="requires_payment_method", client_secret="sec"
        )

    def retrieve(**params):
        return _StripeObject(id=params["id"], status="succeeded")

    monkeypatch.setattr(settings, "stripe_secret_key", "sk_test")
    monkeypatch.setattr(stripe.PaymentIntent, "create", create)
    monkeypatch.setattr(stripe.PaymentIntent, "retrieve", retrieve)

    svc = PaymentService()
    intent = await svc.create_payment_intent(2500, "usd", {"bookingId": "hotel-1", "userId": "user-1"})

    assert (intent.id, intent.amount, intent.status, intent.clientSecret) == (
        "pi_1",
        2500,
        "requires_payment_method",
        "sec",
    )
    assert intent.paymentMethod is None
    assert sent["api_key"] == "sk_test"
    assert sent["metadata"] == {"service": "trip_booking", "booking_id": "hotel-1", "user_id": "user-1"}
    assert await svc.get_payment_status("pi_1") == "succeeded"
