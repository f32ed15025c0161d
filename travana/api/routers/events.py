from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import EventsResponse
from travana.dependencies import get_event_service
from travana.domain.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=EventsResponse)
async def list_events(
    city: str = "Toronto",
    category: Optional[str] = None,
    svc: EventService = Depends(get_event_service),
):
    events, source = await svc.search_events(city, category)
    return EventsResponse(events=events, city=city, total=len(events), source=source)
