import logging
from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import (
    HotelDetailResponse,
    HotelListResponse,
    HotelQueryEcho,
    HotelSearch,
    HotelSearchRequest,
    HotelSearchResponse,
)
from travana.core.errors import NotFoundError, ValidationError
from travana.dependencies import get_hotel_service
from travana.domain.services.hotel_service import HotelService, adjust_stay_dates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hotels", tags=["hotels"])


@router.get("", response_model=HotelListResponse)
async def list_hotels(
    destination: Optional[str] = None,
    checkInDate: Optional[str] = None,
    checkOutDate: Optional[str] = None,
    adults: int = 2,
    children: int = 0,
    rooms: int = 1,
    svc: HotelService = Depends(get_hotel_service),
):
    if not destination or not checkInDate or not checkOutDate:
        raise ValidationError("Missing required parameters: destination, checkInDate, checkOutDate")
    try:
        check_in, check_out = adjust_stay_dates(checkInDate, checkOutDate)
    except ValueError:
        raise ValidationError("Dates must be formatted as YYYY-MM-DD")

    logger.info("Hotel search for %s from %s to %s", destination, check_in, check_out)
    hotels = await svc.search_hotels_for_trip(destination, check_in, check_out, adults, children, rooms)
    return HotelListResponse(
        hotels=hotels,
        searchParams=HotelQueryEcho(
            destination=destination,
            checkInDate=check_in,
            checkOutDate=check_out,
            adults=adults,
            children=children,
            rooms=rooms,
        ),
    )


@router.post("", response_model=HotelSearchResponse)
async def search_hotels(body: HotelSearchRequest, svc: HotelService = Depends(get_hotel_service)):
    if not body.location or not body.checkInDate or not body.checkOutDate:
        raise ValidationError("Missing required parameters: location, checkInDate, checkOutDate")
    fields = body.model_dump(exclude_none=True)
    # Zero or negative guest and room counts take the defaults
    for key in ("adults", "children", "rooms"):
        if key in fields and fields[key] <= 0:
            del fields[key]
    hotels = await svc.search_hotels(HotelSearch(**fields))
    return HotelSearchResponse(hotels=hotels)


@router.get("/{hotel_id}", response_model=HotelDetailResponse)
async def get_hotel(hotel_id: str, svc: HotelService = Depends(get_hotel_service)):
    hotel = await svc.get_hotel_details(hotel_id)
    if not hotel:
        raise NotFoundError("Hotel not found")
    return HotelDetailResponse(hotel=hotel)
