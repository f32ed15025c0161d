"""Saved trip storage contract, through the service and over HTTP."""

import pytest

from travana.api.models.schemas import SaveTripRequest
from travana.domain.models import UserEntity, utcnow
from travana.domain.services.trip_service import TripService, generate_id, parse_budget


def _user(user_id="user-1"):
    return UserEntity(id=user_id, email=f"{user_id}@example.com", password="secret1", name="Test", created_at=utcnow())


def _request(**overrides):
    data = {
        "title": "Spring in Paris",
        "destination": "Paris, France",
        "duration": "5 days",
        "budget": "$2,500",
        "prompt": "5 days in Paris",
        "tripPlan": {"destination": "Paris, France"},
    }
    data.update(overrides)
    return SaveTripRequest(**data)


@pytest.mark.asyncio
async def test_save_then_list_returns_trip_for_same_user(trip_repo):
    svc = TripService(trip_repo)
    alice, bob = _user("alice"), _user("bob")

    saved = await svc.save_trip(alice, _request())

    trips = await svc.get_user_trips(alice)
    assert [t.id for t in trips] == [saved.id]
    assert trips[0].trip_plan == {"destination": "Paris, France"}
    assert trips[0].is_favorite is False
    assert await svc.get_user_trips(bob) == []


@pytest.mark.asyncio
async def test_save_without_user_stores_nothing(trip_repo):
    svc = TripService(trip_repo)
    assert await svc.save_trip(None, _request()) is None
    assert await trip_repo.list_all() == []


@pytest.mark.asyncio
async def test_toggle_favorite_twice_restores_flag(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    trip = await svc.save_trip(user, _request())

    assert await svc.toggle_favorite(user, trip.id)
    assert (await svc.get_trip(user, trip.id)).is_favorite is True
    assert await svc.toggle_favorite(user, trip.id)
    assert (await svc.get_trip(user, trip.id)).is_favorite is False


@pytest.mark.asyncio
async def test_delete_removes_exactly_one(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    first = await svc.save_trip(user, _request(title="One"))
    second = await svc.save_trip(user, _request(title="Two"))

    assert await svc.delete_trip(user, first.id)
    remaining = await trip_repo.list_all()
    assert [t.id for t in remaining] == [second.id]


@pytest.mark.asyncio
async def test_delete_unknown_id_is_noop(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    await svc.save_trip(user, _request())

    assert await svc.delete_trip(user, "missing") is False
    assert len(await trip_repo.list_all()) == 1


@pytest.mark.asyncio
async def test_other_users_trip_cannot_be_deleted(trip_repo):
    svc = TripService(trip_repo)
    owner, intruder = _user("owner"), _user("intruder")
    trip = await svc.save_trip(owner, _request())

    assert await svc.delete_trip(intruder, trip.id) is False
    assert len(await trip_repo.list_all()) == 1


@pytest.mark.asyncio
async def test_notes_and_tags(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    trip = await svc.save_trip(user, _request(tags=["europe"]))

    assert await svc.add_trip_note(user, trip.id, "Book the Louvre")
    assert await svc.add_trip_note(user, trip.id, "Pack an umbrella")
    assert await svc.add_trip_tag(user, trip.id, "food")
    assert await svc.add_trip_tag(user, trip.id, "food")
    assert await svc.remove_trip_tag(user, trip.id, "europe")

    stored = await svc.get_trip(user, trip.id)
    assert stored.tags == ["food"]
    first, second = stored.notes.split("\n\n")
    assert first.endswith(": Book the Louvre")
    assert second.endswith(": Pack an umbrella")


@pytest.mark.asyncio
async def test_search_and_filters(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    paris = await svc.save_trip(user, _request())
    await svc.save_trip(user, _request(title="Tokyo lights", destination="Tokyo, Japan", prompt="", tags=["neon"]))
    await svc.toggle_favorite(user, paris.id)

    assert [t.title for t in await svc.search_trips(user, "NEON")] == ["Tokyo lights"]
    assert [t.id for t in await svc.get_favorite_trips(user)] == [paris.id]
    assert [t.destination for t in await svc.get_trips_by_destination(user, "tokyo")] == ["Tokyo, Japan"]


@pytest.mark.asyncio
async def test_update_trip_fields(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    trip = await svc.save_trip(user, _request())

    assert await svc.update_trip(user, trip.id, {"title": "Autumn in Paris", "isFavorite": True})
    stored = await svc.get_trip(user, trip.id)
    assert stored.title == "Autumn in Paris"
    assert stored.is_favorite is True
    assert stored.updated_at >= stored.created_at
    assert await svc.update_trip(user, "missing", {"title": "x"}) is False


@pytest.mark.asyncio
async def test_trip_stats(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    first = await svc.save_trip(user, _request(budget="$2,000"))
    await svc.save_trip(user, _request(budget="$1,000"))
    await svc.save_trip(user, _request(destination="Rome, Italy", budget="flexible"))
    await svc.toggle_favorite(user, first.id)

    stats = await svc.get_trip_stats(user)
    assert stats.totalTrips == 3
    assert stats.favoriteTrips == 1
    assert stats.totalDestinations == 2
    assert stats.averageBudget == 1500
    assert stats.mostVisitedDestination == "Paris, France"


@pytest.mark.asyncio
async def test_update_ignores_null_fields(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    trip = await svc.save_trip(user, _request(tags=["food"]))

    assert await svc.update_trip(user, trip.id, {"title": None, "tags": None, "notes": "Pack light"})
    stored = await svc.get_trip(user, trip.id)
    assert stored.title == "Spring in Paris"
    assert stored.tags == ["food"]
    assert stored.notes == "Pack light"


@pytest.mark.asyncio
async def test_average_budget_rounds_half_up(trip_repo):
    svc = TripService(trip_repo)
    user = _user()
    await svc.save_trip(user, _request(budget="$1,000"))
    await svc.save_trip(user, _request(budget="$2,001"))
    assert (await svc.get_trip_stats(user)).averageBudget == 1501


@pytest.mark.asyncio
async def test_stats_without_trips(trip_repo):
    stats = await TripService(trip_repo).get_trip_stats(_user())
    assert stats.totalTrips == 0
    assert stats.mostVisitedDestination == ""


def test_parse_budget():
    assert parse_budget("$2,500") == 2500
    assert parse_budget("about 900 dollars") == 900
    assert parse_budget("flexible") == 0


def test_generate_id_is_unique_and_alphanumeric():
    ids = {generate_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(i.isalnum() and i == i.lower() for i in ids)


def test_http_trip_lifecycle(client, auth_headers):
    payload = _request().model_dump()
    saved = client.post("/api/save-trip", json=payload, headers=auth_headers)
    assert saved.status_code == 200
    trip_id = saved.json()["trip"]["id"]

    listed = client.get("/api/save-trip", headers=auth_headers).json()
    assert [t["id"] for t in listed["trips"]] == [trip_id]

    assert client.post(f"/api/trips/{trip_id}/favorite", headers=auth_headers).json() == {"success": True}
    favorites = client.get("/api/trips/favorites", headers=auth_headers).json()["trips"]
    assert [t["id"] for t in favorites] == [trip_id]

    assert client.post(f"/api/trips/{trip_id}/tags", json={"tag": "art"}, headers=auth_headers).status_code == 200
    assert client.get(f"/api/trips/{trip_id}", headers=auth_headers).json()["trip"]["tags"] == ["art"]

    assert client.delete(f"/api/trips/{trip_id}", headers=auth_headers).status_code == 200
    assert client.delete(f"/api/trips/{trip_id}", headers=auth_headers).status_code == 404
    assert client.get("/api/save-trip", headers=auth_headers).json()["trips"] == []


def test_list_without_sign_in_is_empty(client):
    resp = client.get("/api/save-trip")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "trips": []}


def test_http_partial_update(client, auth_headers):
    payload = _request(tags=["food"]).model_dump()
    trip_id = client.post("/api/save-trip", json=payload, headers=auth_headers).json()["trip"]["id"]

    resp = client.patch(f"/api/trips/{trip_id}", json={"title": "Paris in May"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    resp = client.patch(f"/api/trips/{trip_id}", json={"tags": None, "title": None}, headers=auth_headers)
    assert resp.status_code == 200

    trip = client.get(f"/api/trips/{trip_id}", headers=auth_headers).json()["trip"]
    assert trip["title"] == "Paris in May"
    assert trip["tags"] == ["food"]
    assert trip["destination"] == "Paris, France"

    missing = client.patch("/api/trips/no-such-trip", json={"title": "x"}, headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["message"] == "Trip not found"


def test_http_remove_tag(client, auth_headers):
    payload = _request(tags=["food", "art"]).model_dump()
    trip_id = client.post("/api/save-trip", json=payload, headers=auth_headers).json()["trip"]["id"]

    assert client.delete(f"/api/trips/{trip_id}/tags/food", headers=auth_headers).json() == {"success": True}
    assert client.get(f"/api/trips/{trip_id}", headers=auth_headers).json()["trip"]["tags"] == ["art"]
    assert client.delete("/api/trips/no-such-trip/tags/art", headers=auth_headers).status_code == 404
