from fastapi import APIRouter

from travana.ai.trip_generator import generate_trip_plan
from travana.api.models.schemas import GenerateTripRequest, GenerateTripResponse
from travana.core.errors import ValidationError

router = APIRouter(prefix="/generate-trip", tags=["trips"])


@router.post("", response_model=GenerateTripResponse)
async def generate_trip(body: GenerateTripRequest):
    if not body.prompt:
        raise ValidationError("Prompt is required")
    plan = await generate_trip_plan(body.prompt)
    return GenerateTripResponse(tripPlan=plan)
