from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import (
    SaveTripRequest,
    SaveTripResponse,
    SuccessResponse,
    TripListResponse,
    TripNoteRequest,
    TripStats,
    TripTagRequest,
    TripUpdateRequest,
)
from travana.core.errors import NotFoundError, ValidationError
from travana.dependencies import get_current_user, get_trip_service, require_user
from travana.domain.models import UserEntity
from travana.domain.services.trip_service import TripService

router = APIRouter(tags=["saved-trips"])


def _trip_list(trips) -> TripListResponse:
    return TripListResponse(trips=[trip.to_api_model() for trip in trips])


@router.post("/save-trip", response_model=SaveTripResponse)
async def save_trip(
    body: SaveTripRequest,
    user: Optional[UserEntity] = Depends(get_current_user),
    svc: TripService = Depends(get_trip_service),
):
    trip = await svc.save_trip(user, body)
    if not trip:
        raise ValidationError("Failed to save trip")
    return SaveTripResponse(trip=trip.to_api_model())


@router.get("/save-trip", response_model=TripListResponse)
async def list_saved_trips(
    user: Optional[UserEntity] = Depends(get_current_user),
    svc: TripService = Depends(get_trip_service),
):
    return _trip_list(await svc.get_user_trips(user))


@router.get("/trips/search", response_model=TripListResponse)
async def search_trips(
    q: str = "",
    user: UserEntity = Depends(require_user),
    svc: TripService = Depends(get_trip_service),
):
    return _trip_list(await svc.search_trips(user, q))


@router.get("/trips/favorites", response_model=TripListResponse)
async def favorite_trips(user: UserEntity = Depends(require_user), svc: TripService = Depends(get_trip_service)):
    return _trip_list(await svc.get_favorite_trips(user))


@router.get("/trips/by-destination", response_model=TripListResponse)
async def trips_by_destination(
    destination: Optional[str] = None,
    user: UserEntity = Depends(require_user),
    svc: TripService = Depends(get_trip_service),
):
    if not destination:
        raise ValidationError("Destination parameter is required")
    return _trip_list(await svc.get_trips_by_destination(user, destination))


@router.get("/trips/stats", response_model=TripStats)
async def trip_stats(user: UserEntity = Depends(require_user), svc: TripService = Depends(get_trip_service)):
    return await svc.get_trip_stats(user)


@router.get("/trips/{trip_id}", response_model=SaveTripResponse)
async def get_trip(trip_id: str, user: UserEntity = Depends(require_user), svc: TripService = Depends(get_trip_service)):
    trip = await svc.get_trip(user, trip_id)
    if not trip:
        raise NotFoundError("Trip not found")
    return SaveTripResponse(trip=trip.to_api_model())


@router.patch("/trips/{trip_id}", response_model=SuccessResponse)
async def update_trip(
    trip_id: str,
    body: TripUpdateRequest,
    user: UserEntity = Depends(require_user),
    svc: TripService = Depends(get_trip_service),
):
    if not await svc.update_trip(user, trip_id, body.model_dump(exclude_unset=True, exclude_none=True)):
        raise NotFoundError("Trip not found")
    return SuccessResponse()


@router.delete("/trips/{trip_id}", response_model=SuccessResponse)
async def delete_trip(trip_id: str, user: UserEntity = Depends(require_user), svc: TripService = Depends(get_trip_service)):
    if not await svc.delete_trip(user, trip_id):
        raise NotFoundError("Trip not found")
    return SuccessResponse()


@router.post("/trips/{trip_id}/favorite", response_model=SuccessResponse)
async def toggle_favorite(
    trip_id: str, user: UserEntity = Depends(require_user), svc: TripService = Depends(get_trip_service)
):
    if not await svc.toggle_favorite(user, trip_id):
        raise NotFoundError("Trip not found")
    return SuccessResponse()


@router.post("/trips/{trip_id}/notes", response_model=SuccessResponse)
async def add_note(
    trip_id: str,
    body: TripNoteRequest,
    user: UserEntity = Depends(require_user),
    svc: TripService = Depends(get_trip_service),
):
    if not await svc.add_trip_note(user, trip_id, body.note):
        raise NotFoundError("Trip not found")
    return SuccessResponse()


@router.post("/trips/{trip_id}/tags", response_model=SuccessResponse)
async def add_tag(
    trip_id: str,
    body: TripTagRequest,
    user: UserEntity = Depends(require_user),
    svc: TripService = Depends(get_trip_service),
):
    if not await svc.add_trip_tag(user, trip_id, body.tag):
        raise NotFoundError("Trip not found")
    return SuccessResponse()


@router.delete("/trips/{trip_id}/tags/{tag}", response_model=SuccessResponse)
async def remove_tag(
    trip_id: str,
    tag: str,
    user: UserEntity = Depends(require_user),
    svc: TripService = Depends(get_trip_service),
):
    if not await svc.remove_trip_tag(user, trip_id, tag):
        raise NotFoundError("Trip not found")
    return SuccessResponse()
