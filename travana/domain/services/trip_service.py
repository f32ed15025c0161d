from __future__ import annotations

import logging
import math
import random
import re
import string
import time
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional

from travana.api.models.schemas import SaveTripRequest, TripStats
from travana.domain.models import TripEntity, UserEntity, utcnow
from travana.domain.repositories import TripRepository

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
_BUDGET_RE = re.compile(r"\$?(\d+(?:,\d+)*)")

# Request field -> entity attribute for partial updates
_UPDATABLE_FIELDS = {
    "title": "title",
    "destination": "destination",
    "duration": "duration",
    "budget": "budget",
    "prompt": "prompt",
    "tripPlan": "trip_plan",
    "isFavorite": "is_favorite",
    "tags": "tags",
    "notes": "notes",
}


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def generate_id() -> str:
    """Nine random base-36 characters followed by the current time in base 36."""
    prefix = "".join(random.choice(_BASE36) for _ in range(9))
    return prefix + _to_base36(int(time.time() * 1000))


def parse_budget(budget: str) -> int:
    match = _BUDGET_RE.search(budget or "")
    return int(match.group(1).replace(",", "")) if match else 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _newest_first(trips: List[TripEntity]) -> List[TripEntity]:
    return sorted(trips, key=lambda t: t.updated_at, reverse=True)


class TripService:
    """
    Saved trips scoped to the signed-in user. Without a user every read
    returns an empty result and every write returns False/None.
    """

    def __init__(self, repo: TripRepository):
        self.repo = repo

    async def _find(self, user: Optional[UserEntity], trip_id: str) -> Optional[TripEntity]:
        if not user:
            return None
        for trip in await self.repo.list_for_user(user.id):
            if trip.id == trip_id:
                return trip
        return None

    async def _touch(self, trip: TripEntity) -> bool:
        trip.updated_at = utcnow()
        try:
            await self.repo.replace(trip)
        except KeyError:
            return False
        return True

    async def save_trip(self, user: Optional[UserEntity], data: SaveTripRequest) -> Optional[TripEntity]:
        if not user:
            return None
        now = utcnow()
        trip = TripEntity(
            id=generate_id(),
            user_id=user.id,
            title=data.title,
            destination=data.destination,
            duration=data.duration,
            budget=data.budget,
            prompt=data.prompt,
            trip_plan=data.tripPlan,
            created_at=now,
            updated_at=now,
            is_favorite=False,
            tags=list(data.tags or []),
            notes=data.notes or "",
        )
        await self.repo.add(trip)
        logger.info("Saved trip %s for user %s", trip.id, user.id)
        return trip

    async def get_user_trips(self, user: Optional[UserEntity]) -> List[TripEntity]:
        if not user:
            return []
        return _newest_first(await self.repo.list_for_user(user.id))

    async def get_trip(self, user: Optional[UserEntity], trip_id: str) -> Optional[TripEntity]:
        return await self._find(user, trip_id)

    async def update_trip(self, user: Optional[UserEntity], trip_id: str, updates: Dict[str, Any]) -> bool:
        trip = await self._find(user, trip_id)
        if not trip:
            return False
        for key, value in updates.items():
            attr = _UPDATABLE_FIELDS.get(key)
            # null leaves the stored value as it is
            if attr and value is not None:
                setattr(trip, attr, value)
        return await self._touch(trip)

    async def delete_trip(self, user: Optional[UserEntity], trip_id: str) -> bool:
        trip = await self._find(user, trip_id)
        if not trip:
            return False
        try:
            await self.repo.remove(trip.id)
        except KeyError:
            return False
        return True

    async def toggle_favorite(self, user: Optional[UserEntity], trip_id: str) -> bool:
        trip = await self._find(user, trip_id)
        if not trip:
            return False
        trip.is_favorite = not trip.is_favorite
        return await self._touch(trip)

    async def search_trips(self, user: Optional[UserEntity], query: str) -> List[TripEntity]:
        term = query.lower()
        return [
            trip
            for trip in await self.get_user_trips(user)
            if term in trip.title.lower()
            or term in trip.destination.lower()
            or term in trip.prompt.lower()
            or any(term in tag.lower() for tag in trip.tags)
        ]

    async def get_favorite_trips(self, user: Optional[UserEntity]) -> List[TripEntity]:
        return [trip for trip in await self.get_user_trips(user) if trip.is_favorite]

    async def get_trips_by_destination(self, user: Optional[UserEntity], destination: str) -> List[TripEntity]:
        term = destination.lower()
        return [trip for trip in await self.get_user_trips(user) if term in trip.destination.lower()]

    async def add_trip_note(self, user: Optional[UserEntity], trip_id: str, note: str) -> bool:
        trip = await self._find(user, trip_id)
        if not trip:
            return False
        entry = f"{datetime.now().strftime('%m/%d/%Y, %I:%M:%S %p')}: {note}"
        trip.notes = f"{trip.notes}\n\n{entry}" if trip.notes else entry
        return await self._touch(trip)

    async def add_trip_tag(self, user: Optional[UserEntity], trip_id: str, tag: str) -> bool:
        trip = await self._find(user, trip_id)
        if not trip:
            return False
        if tag in trip.tags:
            return True
        trip.tags.append(tag)
        return await self._touch(trip)

    async def remove_trip_tag(self, user: Optional[UserEntity], trip_id: str, tag: str) -> bool:
        trip = await self._find(user, trip_id)
        if not trip:
            return False
        trip.tags = [t for t in trip.tags if t != tag]
        return await self._touch(trip)

    async def get_trip_stats(self, user: Optional[UserEntity]) -> TripStats:
        # Storage order, not recency, decides ties for the most visited destination
        trips = await self.repo.list_for_user(user.id) if user else []
        if not trips:
            return TripStats()

        budgets = [b for b in (parse_budget(trip.budget) for trip in trips) if b > 0]
        counts = Counter(trip.destination for trip in trips)
        most_visited = ""
        for destination, count in counts.items():
            if count >= counts.get(most_visited, 0):
                most_visited = destination

        return TripStats(
            totalTrips=len(trips),
            favoriteTrips=sum(1 for trip in trips if trip.is_favorite),
            totalDestinations=len(counts),
            averageBudget=_round_half_up(sum(budgets) / len(budgets)) if budgets else 0,
            mostVisitedDestination=most_visited,
        )
