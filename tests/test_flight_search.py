"""Provider chaining in FlightService.search_flights."""

import pytest

from travana.api.models.schemas import Flight, FlightSearchParams
from travana.core.config import settings
from travana.domain.services.flight_service import FlightService
from travana.external import flight_providers

PARAMS = FlightSearchParams(origin="JFK", destination="LAX", departureDate="2030-06-01")


def _flight(number: str, price: float) -> Flight:
    return Flight(
        id=number,
        airline="Delta",
        flightNumber=number,
        origin="JFK",
        destination="LAX",
        departureTime="2030-06-01T08:00:00",
        arrivalTime="2030-06-01T11:00:00",
        duration="3h 0m",
        price=price,
        stops=0,
        cabinClass="economy",
        bookingUrl="https://example.com",
    )


def _provider(flights, calls, name):
    async def search(params):
        calls.append(name)
        return list(flights)

    return search


@pytest.fixture
def all_keys(monkeypatch):
    monkeypatch.setattr(settings, "skyscanner_api_key", "k")
    monkeypatch.setattr(settings, "amadeus_api_key", "k")
    monkeypatch.setattr(settings, "kiwi_api_key", "k")


@pytest.mark.asyncio
async def test_first_provider_with_enough_results_short_circuits(monkeypatch, all_keys):
    calls = []
    five = [_flight(f"DL{i}", 500 - i * 10) for i in range(5)]
    monkeypatch.setattr(flight_providers, "search_skyscanner", _provider(five, calls, "skyscanner"))
    monkeypatch.setattr(flight_providers, "search_amadeus", _provider([], calls, "amadeus"))
    monkeypatch.setattr(flight_providers, "search_kiwi", _provider([], calls, "kiwi"))

    flights = await FlightService().search_flights(PARAMS)

    assert calls == ["skyscanner"]
    assert [f.price for f in flights] == sorted(f.price for f in five)


@pytest.mark.asyncio
async def test_short_results_fall_through_to_next_provider(monkeypatch, all_keys):
    calls = []
    monkeypatch.setattr(
        flight_providers, "search_skyscanner", _provider([_flight("SK1", 400), _flight("SK2", 150)], calls, "skyscanner")
    )
    monkeypatch.setattr(
        flight_providers,
        "search_amadeus",
        _provider([_flight("AM1", 90), _flight("AM2", 300), _flight("AM3", 210)], calls, "amadeus"),
    )
    monkeypatch.setattr(flight_providers, "search_kiwi", _provider([_flight("KW1", 50)], calls, "kiwi"))

    flights = await FlightService().search_flights(PARAMS)

    # Five results after Amadeus, so Kiwi is never asked
    assert calls == ["skyscanner", "amadeus"]
    assert [f.flightNumber for f in flights] == ["AM1", "SK2", "AM3", "AM2", "SK1"]


@pytest.mark.asyncio
async def test_provider_without_key_is_skipped(monkeypatch, all_keys):
    calls = []
    monkeypatch.setattr(settings, "skyscanner_api_key", None)
    monkeypatch.setattr(flight_providers, "search_skyscanner", _provider([_flight("SK1", 1)], calls, "skyscanner"))
    monkeypatch.setattr(flight_providers, "search_amadeus", _provider([_flight("AM1", 90)], calls, "amadeus"))
    monkeypatch.setattr(flight_providers, "search_kiwi", _provider([_flight("KW1", 80)], calls, "kiwi"))

    flights = await FlightService().search_flights(PARAMS)

    assert calls == ["amadeus", "kiwi"]
    assert [f.flightNumber for f in flights] == ["KW1", "AM1"]


@pytest.mark.asyncio
async def test_failing_provider_does_not_stop_the_chain(monkeypatch, all_keys):
    calls = []

    async def broken(params):
        calls.append("skyscanner")
        raise RuntimeError("upstream unavailable")

    monkeypatch.setattr(flight_providers, "search_skyscanner", broken)
    monkeypatch.setattr(flight_providers, "search_amadeus", _provider([_flight("AM1", 90)], calls, "amadeus"))
    monkeypatch.setattr(flight_providers, "search_kiwi", _provider([], calls, "kiwi"))

    flights = await FlightService().search_flights(PARAMS)

    assert calls == ["skyscanner", "amadeus", "kiwi"]
    assert [f.flightNumber for f in flights] == ["AM1"]


@pytest.mark.asyncio
async def test_empty_providers_use_generated_schedule(monkeypatch, all_keys):
    calls = []
    for name in ("skyscanner", "amadeus", "kiwi"):
        monkeypatch.setattr(flight_providers, f"search_{name}", _provider([], calls, name))

    flights = await FlightService().search_flights(PARAMS)

    assert calls == ["skyscanner", "amadeus", "kiwi"]
    assert len(flights) == 8
    assert {f.id for f in flights} == {f"flight-{i}" for i in range(1, 9)}
