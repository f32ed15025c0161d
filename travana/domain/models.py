from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from travana.api.models.schemas import SavedTrip, UserPreferences, UserProfile


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_dt(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.endswith("Z"):
        value = value.replace("Z", "+00:00")
    return datetime.fromisoformat(value)


@dataclass
class TripEntity:
    id: str
    user_id: str
    title: str
    destination: str
    duration: str
    budget: str
    prompt: str
    trip_plan: Any
    created_at: datetime
    updated_at: datetime
    is_favorite: bool = False
    tags: List[str] = field(default_factory=list)
    notes: str = ""

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "destination": self.destination,
            "duration": self.duration,
            "budget": self.budget,
            "prompt": self.prompt,
            "tripPlan": self.trip_plan,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "isFavorite": self.is_favorite,
            "tags": list(self.tags),
            "notes": self.notes,
        }

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "TripEntity":
        now = utcnow()
        return cls(
            id=row["id"],
            user_id=row["userId"],
            title=row.get("title") or "",
            destination=row.get("destination") or "",
            duration=row.get("duration") or "",
            budget=row.get("budget") or "",
            prompt=row.get("prompt") or "",
            trip_plan=row.get("tripPlan"),
            created_at=_parse_dt(row.get("createdAt") or now),
            updated_at=_parse_dt(row.get("updatedAt") or now),
            is_favorite=bool(row.get("isFavorite", False)),
            tags=list(row.get("tags") or []),
            notes=row.get("notes") or "",
        )

    def to_api_model(self) -> SavedTrip:
        return SavedTrip(
            id=self.id,
            userId=self.user_id,
            title=self.title,
            destination=self.destination,
            duration=self.duration,
            budget=self.budget,
            prompt=self.prompt,
            tripPlan=self.trip_plan,
            createdAt=self.created_at,
            updatedAt=self.updated_at,
            isFavorite=self.is_favorite,
            tags=self.tags,
            notes=self.notes,
        )


@dataclass
class UserEntity:
    id: str
    email: str
    # Plaintext, demo accounts only
    password: str
    name: str
    created_at: datetime
    picture: Optional[str] = None
    preferences: Optional[UserPreferences] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "password": self.password,
            "name": self.name,
            "picture": self.picture,
            "preferences": self.preferences.model_dump() if self.preferences else None,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "UserEntity":
        prefs = row.get("preferences")
        return cls(
            id=row["id"],
            email=row["email"],
            password=row.get("password") or "",
            name=row.get("name") or "",
            picture=row.get("picture"),
            preferences=UserPreferences.model_validate(prefs) if prefs else None,
            created_at=_parse_dt(row.get("createdAt") or utcnow()),
        )

    def to_profile(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            email=self.email,
            name=self.name,
            picture=self.picture,
            preferences=self.preferences,
        )
