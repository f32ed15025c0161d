"""Cached client-credentials tokens and their eviction on 401."""

import httpx
import pytest

from travana.api.models.schemas import FlightSearchParams
from travana.core.config import settings
from travana.external import flight_providers
from travana.external.oauth_token import TokenCache


def test_token_cache_store_get_clear():
    cache = TokenCache()
    assert cache.get() is None

    assert cache.store("abc", 3600) == "abc"
    assert cache.get() == "abc"

    cache.clear()
    assert cache.get() is None


def test_token_inside_expiry_margin_is_not_reused():
    cache = TokenCache()
    cache.store("short-lived", 30)
    assert cache.get() is None


@pytest.fixture
def fake_http(monkeypatch):
    """Routes every httpx.AsyncClient through a handler the test supplies."""
    real_client = httpx.AsyncClient
    seen = []

    def install(handler):
        def recording(request):
            seen.append(request)
            return handler(request)

        monkeypatch.setattr(
            httpx, "AsyncClient", lambda **kwargs: real_client(transport=httpx.MockTransport(recording), **kwargs)
        )
        return seen

    return install


@pytest.mark.asyncio
async def test_amadeus_token_is_dropped_after_unauthorized(monkeypatch, fake_http):
    monkeypatch.setattr(settings, "amadeus_api_key", "k")
    monkeypatch.setattr(flight_providers, "_amadeus_token", TokenCache())
    flight_providers._amadeus_token.store("revoked", 1800)
    seen = fake_http(lambda request: httpx.Response(401, json={"errors": []}))

    params = FlightSearchParams(origin="JFK", destination="LAX", departureDate="2030-06-01")
    with pytest.raises(httpx.HTTPStatusError):
        await flight_providers.search_amadeus(params)

    assert seen[0].headers["Authorization"] == "Bearer revoked"
    assert flight_providers._amadeus_token.get() is None


@pytest.mark.asyncio
async def test_amadeus_token_survives_successful_call(monkeypatch, fake_http):
    monkeypatch.setattr(settings, "amadeus_api_key", "k")
    monkeypatch.setattr(flight_providers, "_amadeus_token", TokenCache())
    flight_providers._amadeus_token.store("valid", 1800)
    fake_http(lambda request: httpx.Response(200, json={"data": []}))

    params = FlightSearchParams(origin="JFK", destination="LAX", departureDate="2030-06-01")
    assert await flight_providers.search_amadeus(params) == []
    assert flight_providers._amadeus_token.get() == "valid"
