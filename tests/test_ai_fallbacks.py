"""Trip generation and chat behaviour without an OpenAI key."""

import pytest

from travana.ai.chat_assistant import (
    assistant_status,
    extract_suggestions,
    extract_trip_recommendations,
    fallback_reply,
    is_available,
    send_message,
)
from travana.ai.mock_trips import (
    extract_budget,
    extract_destination,
    extract_duration,
    fallback_trip_plan,
    generate_itinerary,
)
from travana.ai.trip_generator import accept_correction, generate_trip_plan


def test_extract_duration_units():
    assert extract_duration("4 days in Rome") == "4 days"
    assert extract_duration("2 weeks around Spain") == "14 days"
    assert extract_duration("1 month in Asia") == "30 days"
    assert extract_duration("a long weekend") is None


def test_extract_budget_formats():
    assert extract_budget("under $1500") == "$1,500"
    assert extract_budget("about 3000 dollars") == "$3,000"
    assert extract_budget("budget of 800") == "$800"
    assert extract_budget("no idea") is None


def test_extract_destination_from_known_cities():
    assert extract_destination("weekend in barcelona please") == "Barcelona, Spain"
    assert extract_destination("somewhere warm") is None


def test_template_plan_is_customised():
    plan = fallback_trip_plan("Tokyo for 3 days with $4000")
    assert plan["destination"] == "Tokyo, Japan"
    assert plan["duration"] == "3 days"
    assert plan["budget"] == "$4,000"
    assert plan["itinerary"][0]["title"] == "Arrival & Asakusa"


def test_template_is_not_mutated_between_calls():
    fallback_trip_plan("paris for 2 days")
    assert fallback_trip_plan("paris")["duration"] == "5 days"


def test_generated_plan_for_other_destinations():
    plan = fallback_trip_plan("4 days in Lisbon")
    assert plan["destination"] == "Lisbon"
    assert plan["duration"] == "4 days"
    assert plan["budget"] == "$2,000"
    assert [d["day"] for d in plan["itinerary"]] == [1, 2, 3, 4]
    assert plan["accommodationSuggestions"][0]["name"] == "Lisbon Grand Hotel"


def test_generated_days_do_not_repeat_activities():
    days = generate_itinerary("Oslo, Norway", 5, (59.91, 10.75))
    activities = [d[slot]["activity"] for d in days for slot in ("morning", "afternoon", "evening")]
    assert len(activities) == len(set(activities))
    assert days[0]["theme"] == "Cultural"
    assert days[0]["morning"]["time"] == "09:00"


def test_accept_correction():
    assert accept_correction("trip to pariss", "Trip to Paris") == "Trip to Paris"
    assert accept_correction("tokyo", "Here is the corrected version: Tokyo, Japan") == "tokyo"
    assert accept_correction("rome", "A much longer rewrite of the request") == "rome"
    assert accept_correction("rome", "") == "rome"


@pytest.mark.asyncio
async def test_generate_trip_plan_without_key():
    plan = await generate_trip_plan("1 week in New York City with $3000")
    assert plan["destination"] == "New York City, USA"
    assert plan["duration"] == "7 days"
    assert plan["budget"] == "$3,000"


def test_generate_trip_route(client):
    resp = client.post("/api/generate-trip", json={"prompt": "5 days in Paris"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["tripPlan"]["destination"] == "Paris, France"


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Hello there", "Tell me about your dream destination"),
        ("Any cheap ideas?", "Suggest budget destinations"),
        ("Where should I go?", "I want adventure and nature"),
        ("What is the climate like?", "Check weather for Paris"),
        ("Tell me something", "Help me choose a destination"),
    ],
)
def test_fallback_reply_topics(message, expected):
    reply = fallback_reply(message)
    assert reply.suggestions[0] == expected
    assert len(reply.suggestions) == 3


def test_extract_suggestions_caps_at_three():
    text = "You could visit Kyoto. Consider the rail pass. Try ramen. I recommend Nara. You could rest."
    assert extract_suggestions(text) == ["You could visit Kyoto", "You could rest", "Consider the rail pass"]


def test_extract_trip_recommendations():
    recs = extract_trip_recommendations("Visit Lisbon in spring. Enjoy the pastries. One tip: carry cash")
    assert recs.destinations == ["Visit Lisbon in spring"]
    assert recs.activities == ["Visit Lisbon in spring", "Enjoy the pastries"]
    assert recs.tips == ["One tip: carry cash"]


@pytest.mark.asyncio
async def test_send_message_without_key():
    reply = await send_message("hi")
    assert reply.message.startswith("Hello!")
    assert not is_available()
    status = assistant_status()
    assert status.available is False
    assert len(status.features) == 5


def test_chat_routes(client):
    wrapped = client.post("/api/chat", json={"message": "budget tips?"}).json()
    assert wrapped["success"] is True
    assert wrapped["response"]["suggestions"][0] == "Suggest budget destinations"

    bare = client.post("/api/chatbot", json={"message": "weather", "conversationHistory": []}).json()
    assert bare["suggestions"][0] == "Check weather for Paris"

    status = client.get("/api/chatbot").json()
    assert status["service"] == "OpenAI"
