"""
Shared fixtures: every API key is cleared so services use their offline data,
and each test gets its own in-memory store.
"""

import pytest
from fastapi.testclient import TestClient

from travana.core.config import settings
from travana.dependencies import get_store
from travana.domain.repositories import KeyValueTripRepository, SessionRepository, UserRepository
from travana.domain.storage import InMemoryKeyValueStore
from travana.main import app

OPTIONAL_KEYS = [
    "google_places_api_key",
    "google_translate_api_key",
    "openweather_api_key",
    "ticketmaster_api_key",
    "rapidapi_key",
    "skyscanner_api_key",
    "amadeus_api_key",
    "amadeus_client_secret",
    "kiwi_api_key",
    "spotify_client_id",
    "spotify_client_secret",
    "stripe_secret_key",
    "stripe_publishable_key",
    "airalo_affiliate_link",
]


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    for field in OPTIONAL_KEYS:
        monkeypatch.setattr(settings, field, None)
    monkeypatch.setattr(settings, "openai_api_key", "")


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def users(store):
    return UserRepository(store)


@pytest.fixture
def sessions(store):
    return SessionRepository(store)


@pytest.fixture
def trip_repo(store):
    return KeyValueTripRepository(store)


@pytest.fixture
def auth_headers(client):
    resp = client.post(
        "/api/auth/signup",
        json={"email": "traveler@example.com", "password": "secret123", "name": "Traveler"},
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
