import logging
from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import CabinClass, FlightSearchParams
from travana.core.errors import ValidationError
from travana.dependencies import get_flight_service
from travana.domain.services.flight_service import FlightService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])


@router.get("")
async def flights(
    action: Optional[str] = None,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    departureDate: Optional[str] = None,
    returnDate: Optional[str] = None,
    passengers: int = 1,
    cabinClass: CabinClass = "economy",
    maxPrice: Optional[int] = None,
    query: Optional[str] = None,
    svc: FlightService = Depends(get_flight_service),
):
    if action == "search":
        if not origin or not destination or not departureDate:
            raise ValidationError("Origin, destination, and departureDate are required")
        params = FlightSearchParams(
            origin=origin,
            destination=destination,
            departureDate=departureDate,
            returnDate=returnDate,
            passengers=passengers,
            cabinClass=cabinClass,
            maxPrice=maxPrice,
        )
        return await svc.search_flights(params)

    if action == "airports":
        if not query:
            raise ValidationError("Query parameter is required")
        return await svc.search_airports(query)

    logger.info("Flights request with invalid action %r", action)
    raise ValidationError("Invalid action parameter")
