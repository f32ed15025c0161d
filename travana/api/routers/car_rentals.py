from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import CarRentalResponse, CarRentalSearch, CarRentalSearchRequest
from travana.core.errors import ValidationError
from travana.dependencies import get_car_rental_service
from travana.domain.services.car_rental_service import CarRentalService

router = APIRouter(prefix="/car-rentals", tags=["car-rentals"])


@router.get("", response_model=CarRentalResponse)
async def list_car_rentals(
    destination: Optional[str] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    driverAge: int = 25,
    svc: CarRentalService = Depends(get_car_rental_service),
):
    if not destination or not startDate or not endDate:
        raise ValidationError("Missing required parameters: destination, startDate, endDate")
    rentals = await svc.search_car_rentals_for_trip(destination, startDate, endDate, driverAge)
    return CarRentalResponse(carRentals=rentals)


@router.post("", response_model=CarRentalResponse)
async def search_car_rentals(body: CarRentalSearchRequest, svc: CarRentalService = Depends(get_car_rental_service)):
    coords = (body.pickUpLatitude, body.pickUpLongitude, body.dropOffLatitude, body.dropOffLongitude)
    if any(value is None for value in coords):
        raise ValidationError("Missing required coordinates")
    rentals = await svc.search_car_rentals(CarRentalSearch(**body.model_dump(exclude_none=True)))
    return CarRentalResponse(carRentals=rentals)
