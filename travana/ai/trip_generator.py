from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, TypedDict

from langgraph.graph import END, StateGraph

from travana.ai.mock_trips import fallback_trip_plan
from travana.ai.openai_client import get_client
from travana.ai.prompts import AUTOCORRECT_PROMPT, TRIP_PLAN_PROMPT
from travana.core.config import settings

logger = logging.getLogger(__name__)

_EXPLANATION_MARKERS = ("corrected version:", "here is the corrected")


class TripState(TypedDict):
    prompt: str
    corrected_prompt: str
    trip_plan: Optional[Dict[str, Any]]
    source: str


def accept_correction(original: str, corrected: str) -> str:
    """Keep the model's correction unless it reads like commentary or balloons in size."""
    candidate = (corrected or "").strip().strip('"')
    lowered = candidate.lower()
    if not candidate or any(marker in lowered for marker in _EXPLANATION_MARKERS):
        return original
    if len(candidate) > len(original) * 2:
        return original
    return candidate


async def autocorrect_prompt(state: TripState) -> Dict[str, Any]:
    client = get_client()
    prompt = state["prompt"]
    if not client:
        return {"corrected_prompt": prompt}

    try:
        resp = await client.chat.completions.create(
            model=settings.openai_model_chat,
            messages=[{"role": "user", "content": AUTOCORRECT_PROMPT.format(prompt=prompt)}],
            temperature=0.3,
            max_tokens=500,
        )
        corrected = accept_correction(prompt, resp.choices[0].message.content or "")
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("Prompt autocorrect failed, keeping original: %s", exc)
        corrected = prompt

    if corrected != prompt:
        logger.info("Autocorrected trip prompt %r -> %r", prompt, corrected)
    return {"corrected_prompt": corrected}


async def generate_plan(state: TripState) -> Dict[str, Any]:
    client = get_client()
    if not client:
        return {"trip_plan": None}

    try:
        resp = await client.chat.completions.create(
            model=settings.openai_model_trip,
            messages=[
                {"role": "system", "content": TRIP_PLAN_PROMPT.format(prompt=state["corrected_prompt"])},
                {"role": "user", "content": state["corrected_prompt"]},
            ],
            temperature=0.7,
            response_format={"type": "json_object"},
        )
        plan = json.loads(resp.choices[0].message.content)
        if isinstance(plan, dict) and plan:
            return {"trip_plan": plan, "source": "openai"}
        logger.warning("Trip plan reply was not a JSON object")
    except Exception as exc:  # pragma: no cover - network dependent
        logger.warning("OpenAI trip plan generation failed: %s", exc)
    return {"trip_plan": None}


async def finalize_plan(state: TripState) -> Dict[str, Any]:
    if state.get("trip_plan"):
        return {}
    logger.info("Using offline trip plan")
    return {"trip_plan": fallback_trip_plan(state["corrected_prompt"] or state["prompt"]), "source": "fallback"}


def build_trip_graph():
    builder = StateGraph(TripState)
    builder.add_node("autocorrect_prompt", autocorrect_prompt)
    builder.add_node("generate_plan", generate_plan)
    builder.add_node("finalize_plan", finalize_plan)

    builder.set_entry_point("autocorrect_prompt")
    builder.add_edge("autocorrect_prompt", "generate_plan")
    builder.add_edge("generate_plan", "finalize_plan")
    builder.add_edge("finalize_plan", END)
    return builder.compile()


_GRAPH = build_trip_graph()


async def generate_trip_plan(prompt: str) -> Dict[str, Any]:
    """
    Turn a free-text travel request into a trip plan dict. Never raises:
    without OpenAI, or when any step fails, an offline plan is returned.
    """
    initial_state: TripState = {
        "prompt": prompt,
        "corrected_prompt": prompt,
        "trip_plan": None,
        "source": "fallback",
    }
    try:
        result = await _GRAPH.ainvoke(initial_state)
        return result["trip_plan"]
    except Exception as exc:  # pragma: no cover - ensures API still works without graph
        logger.exception("Trip graph failed, using offline plan: %s", exc)
        return fallback_trip_plan(prompt)
