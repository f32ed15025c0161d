"""Routes reject requests that are missing required parameters."""

import pytest


def _error(resp):
    body = resp.json()
    assert body["success"] is False
    return body["error"]


@pytest.mark.parametrize(
    "method, path, payload, message",
    [
        ("post", "/api/generate-trip", {}, "Prompt is required"),
        ("post", "/api/chat", {}, "Message is required"),
        ("post", "/api/chatbot", {"message": ""}, "Message is required"),
        (
            "get",
            "/api/hotels?destination=Paris",
            None,
            "Missing required parameters: destination, checkInDate, checkOutDate",
        ),
        (
            "post",
            "/api/hotels",
            {"location": "Paris"},
            "Missing required parameters: location, checkInDate, checkOutDate",
        ),
        (
            "get",
            "/api/car-rentals?destination=Paris&startDate=2030-01-01",
            None,
            "Missing required parameters: destination, startDate, endDate",
        ),
        ("post", "/api/car-rentals", {"pickUpLatitude": 1.0, "pickUpLongitude": 2.0}, "Missing required coordinates"),
        ("get", "/api/flights?action=search&origin=JFK", None, "Origin, destination, and departureDate are required"),
        ("get", "/api/flights?action=airports", None, "Query parameter is required"),
        ("get", "/api/music?action=search", None, "Query parameter is required"),
        ("get", "/api/music?action=recommendations", None, "Destination parameter is required"),
        ("get", "/api/music?action=mood", None, "Mood parameter is required"),
        ("post", "/api/music", {"name": "Road trip"}, "Name and trackIds array are required"),
        ("post", "/api/translate", {"text": "hello"}, "Text and targetLanguage are required"),
        ("get", "/api/translate?action=phrasebook", None, "Language parameter is required"),
        ("get", "/api/weather", None, "Location parameter is required"),
        ("get", "/api/esim?action=plans", None, "Country parameter is required"),
        ("get", "/api/esim?action=recommendations", None, "Destination parameter is required"),
        ("post", "/api/payment", {"amount": 1000, "currency": "usd"}, "Amount, currency, and description are required"),
        ("get", "/api/payment?action=status", None, "Payment ID is required"),
    ],
)
def test_missing_parameters_return_400(client, method, path, payload, message):
    if method == "get":
        resp = client.get(path)
    else:
        resp = client.post(path, json=payload)
    assert resp.status_code == 400
    error = _error(resp)
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == message


@pytest.mark.parametrize(
    "path",
    ["/api/flights", "/api/flights?action=book", "/api/music?action=nope", "/api/translate", "/api/esim", "/api/payment"],
)
def test_unknown_action_returns_400(client, path):
    resp = client.get(path)
    assert resp.status_code == 400
    assert _error(resp)["message"] == "Invalid action parameter"


def test_wrong_type_is_reported_with_field(client):
    resp = client.get("/api/hotels?destination=Paris&checkInDate=2030-01-01&checkOutDate=2030-01-05&adults=many")
    assert resp.status_code == 400
    error = _error(resp)
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["field"] == "adults"


def test_save_trip_requires_sign_in(client):
    resp = client.post("/api/save-trip", json={"title": "Paris", "destination": "Paris, France"})
    assert resp.status_code == 400
    assert _error(resp)["message"] == "Failed to save trip"


def test_trip_routes_require_sign_in(client):
    resp = client.get("/api/trips/stats")
    assert resp.status_code == 401
    assert _error(resp)["code"] == "UNAUTHORIZED"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
