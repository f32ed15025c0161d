from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, TypedDict

from langgraph.graph import END, StateGraph

from travana.ai.openai_client import get_client
from travana.ai.prompts import CHAT_SYSTEM_PROMPT
from travana.api.models.schemas import ChatbotStatus, ChatMessage, ChatReply, TripRecommendations
from travana.core.config import settings

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3

SUGGESTION_PATTERNS = [
    re.compile(r"you could (.*?)(?=\.|$)", re.IGNORECASE),
    re.compile(r"consider (.*?)(?=\.|$)", re.IGNORECASE),
    re.compile(r"try (.*?)(?=\.|$)", re.IGNORECASE),
    re.compile(r"I recommend (.*?)(?=\.|$)", re.IGNORECASE),
]

DESTINATION_KEYWORDS = ("visit", "go to", "travel to", "explore")
ACTIVITY_KEYWORDS = ("try", "experience", "enjoy", "see", "visit")
TIP_KEYWORDS = ("remember", "tip", "advice", "suggestion")

ASSISTANT_FEATURES = [
    "Trip planning assistance",
    "Destination recommendations",
    "Travel tips and advice",
    "Budget planning help",
    "Itinerary suggestions",
]

_GREETING = re.compile(r"\b(hello|hi)\b")

FALLBACK_REPLIES: Dict[str, ChatReply] = {
    "greeting": ChatReply(
        message=(
            "Hello! I'm your travel planning assistant. I can help you plan trips, suggest destinations, "
            "and provide travel tips. What would you like to know?"
        ),
        suggestions=["Tell me about your dream destination", "Help me plan a budget trip", "What are the best travel tips?"],
    ),
    "budget": ChatReply(
        message=(
            "Great question! Here are some budget travel tips: 1) Travel during off-peak seasons, "
            "2) Use budget airlines and accommodation, 3) Cook your own meals, 4) Use public transportation, "
            "5) Look for free activities and attractions. What's your budget range?"
        ),
        suggestions=["Suggest budget destinations", "How to save money on flights", "Best budget accommodation options"],
    ),
    "destination": ChatReply(
        message=(
            "I'd love to help you choose a destination! To give you the best recommendations, could you tell me: "
            "1) What type of experience you're looking for (adventure, relaxation, culture, etc.), 2) Your budget, "
            "3) How long you want to travel, and 4) Any specific interests or preferences?"
        ),
        suggestions=["I want adventure and nature", "Looking for cultural experiences", "Need a relaxing beach vacation"],
    ),
    "weather": ChatReply(
        message=(
            "Weather is crucial for trip planning! You can check the weather for any destination using our weather "
            "service. Just search for your destination and we'll show you current conditions and forecasts. "
            "What destination are you interested in?"
        ),
        suggestions=["Check weather for Paris", "Best time to visit Japan", "Weather in tropical destinations"],
    ),
    "general": ChatReply(
        message=(
            "I'm here to help with your travel planning! I can assist with destination recommendations, budget "
            "planning, travel tips, and more. What specific aspect of travel would you like to discuss?"
        ),
        suggestions=["Help me choose a destination", "Travel planning tips", "Budget travel advice"],
    ),
}


class ChatState(TypedDict):
    message: str
    history: List[ChatMessage]
    ai_text: Optional[str]
    reply: Optional[ChatReply]


def fallback_reply(message: str) -> ChatReply:
    lowered = message.lower()
    if _GREETING.search(lowered):
        key = "greeting"
    elif "budget" in lowered or "cheap" in lowered:
        key = "budget"
    elif "destination" in lowered or "where" in lowered:
        key = "destination"
    elif "weather" in lowered or "climate" in lowered:
        key = "weather"
    else:
        key = "general"
    return FALLBACK_REPLIES[key].model_copy(deep=True)


def extract_suggestions(text: str) -> List[str]:
    suggestions: List[str] = []
    for pattern in SUGGESTION_PATTERNS:
        suggestions.extend(match.group(0).strip() for match in pattern.finditer(text))
    return suggestions[:MAX_SUGGESTIONS]


def extract_trip_recommendations(text: str) -> TripRecommendations:
    recs = TripRecommendations()
    for sentence in text.split("."):
        lowered = sentence.lower()
        cleaned = sentence.strip()
        if any(word in lowered for word in DESTINATION_KEYWORDS):
            recs.destinations.append(cleaned)
        if any(word in lowered for word in ACTIVITY_KEYWORDS):
            recs.activities.append(cleaned)
        if any(word in lowered for word in TIP_KEYWORDS):
            recs.tips.append(cleaned)
    return recs


async def ask_model(state: ChatState) -> Dict[str, Any]:
    client = get_client()
    if not client:
        return {"ai_text": None}

    messages: List[Dict[str, str]] = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
    messages.extend({"role": m.role, "content": m.content} for m in state["history"])
    messages.append({"role": "user", "content": state["message"]})
    try:
        resp = await client.chat.completions.create(
            model=settings.openai_model_chat,
            messages=messages,
            temperature=0.7,
            max_tokens=1000,
        )
        text = (resp.choices[0].message.content or "").strip()
        return {"ai_text": text or None}
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("OpenAI chat failed, using canned reply: %s", exc)
        return {"ai_text": None}


async def compose_reply(state: ChatState) -> Dict[str, Any]:
    text = state.get("ai_text")
    if not text:
        return {"reply": fallback_reply(state["message"])}
    return {
        "reply": ChatReply(
            message=text,
            suggestions=extract_suggestions(text),
            tripRecommendations=extract_trip_recommendations(text),
        )
    }


def build_chat_graph():
    builder = StateGraph(ChatState)
    builder.add_node("ask_model", ask_model)
    builder.add_node("compose_reply", compose_reply)

    builder.set_entry_point("ask_model")
    builder.add_edge("ask_model", "compose_reply")
    builder.add_edge("compose_reply", END)
    return builder.compile()


_GRAPH = build_chat_graph()


async def send_message(message: str, history: Optional[List[ChatMessage]] = None) -> ChatReply:
    state: ChatState = {
        "message": message,
        "history": list(history or []),
        "ai_text": None,
        "reply": None,
    }
    try:
        result = await _GRAPH.ainvoke(state)
        return result["reply"] or fallback_reply(message)
    except Exception as exc:  # pragma: no cover - ensures API still works without graph
        logger.exception("Chat graph failed: %s", exc)
        return fallback_reply(message)


def is_available() -> bool:
    return bool(settings.openai_api_key)


def assistant_status() -> ChatbotStatus:
    return ChatbotStatus(available=is_available(), service="OpenAI", features=list(ASSISTANT_FEATURES))
