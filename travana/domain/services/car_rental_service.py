from __future__ import annotations

import logging
import random
import uuid
from typing import Any, Dict, List, Optional

from travana.api.models.schemas import CarRental, CarRentalSearch
from travana.domain.geo import JFK_AIRPORT, coords_for
from travana.external import booking_cars_api

logger = logging.getLogger(__name__)


def item_to_car_rental(item: Dict[str, Any]) -> CarRental:
    return CarRental(
        id=str(item.get("id") or uuid.uuid4().hex[:12]),
        company=item.get("company") or "Unknown Company",
        carType=item.get("car_type") or item.get("carType") or "Standard",
        price=item.get("price") or random.randint(50, 149),
        currency=item.get("currency") or "USD",
        pickupLocation=item.get("pickup_location") or "Pickup Location",
        dropoffLocation=item.get("dropoff_location") or "Dropoff Location",
        rating=item.get("rating") or 4.0,
        imageUrl=item.get("image_url") or item.get("imageUrl"),
    )


def mock_car_rentals(location: str) -> List[CarRental]:
    return [
        CarRental(
            id="1",
            company="Hertz",
            carType="Economy",
            price=45,
            pickupLocation=f"{location} Airport",
            dropoffLocation=f"{location} Airport",
            rating=4.3,
            imageUrl="https://images.unsplash.com/photo-1549317661-bd32c8ce0db2?w=400",
        ),
        CarRental(
            id="2",
            company="Avis",
            carType="SUV",
            price=75,
            pickupLocation=f"{location} Downtown",
            dropoffLocation=f"{location} Downtown",
            rating=4.5,
            imageUrl="https://images.unsplash.com/photo-1549924231-f129b911e442?w=400",
        ),
        CarRental(
            id="3",
            company="Enterprise",
            carType="Luxury",
            price=120,
            pickupLocation=f"{location} City Center",
            dropoffLocation=f"{location} City Center",
            rating=4.7,
            imageUrl="https://images.unsplash.com/photo-1552519507-da3b142c6e3d?w=400",
        ),
    ]


class CarRentalService:
    async def search_car_rentals(self, search: CarRentalSearch, label: Optional[str] = None) -> List[CarRental]:
        """`label` names the place in mock results; defaults to the search location code."""
        items = await booking_cars_api.search_car_rentals(search)
        rentals: List[CarRental] = []
        for item in items:
            try:
                rentals.append(item_to_car_rental(item))
            except Exception as exc:
                logger.warning("Skipping malformed car rental entry: %s", exc)
        if not rentals:
            logger.info("No car rentals from provider; using mock data for '%s'", label or search.location)
            return mock_car_rentals(label or search.location)
        return rentals

    async def search_car_rentals_for_trip(
        self, destination: str, start_date: str, end_date: str, driver_age: int = 25
    ) -> List[CarRental]:
        lat, lng = coords_for(destination) or JFK_AIRPORT
        search = CarRentalSearch(
            pickUpLatitude=lat,
            pickUpLongitude=lng,
            dropOffLatitude=lat,
            dropOffLongitude=lng,
            driverAge=driver_age,
        )
        return await self.search_car_rentals(search, label=destination)
