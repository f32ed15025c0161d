from abc import ABC, abstractmethod
import asyncio
import secrets
from typing import Dict, List, Optional

from .models import TripEntity, UserEntity
from .storage import SESSIONS_KEY, TRIPS_KEY, USERS_KEY, KeyValueStore


class TripRepository(ABC):
    @abstractmethod
    async def list_all(self) -> List[TripEntity]:
        raise NotImplementedError

    @abstractmethod
    async def add(self, trip: TripEntity) -> TripEntity:
        raise NotImplementedError

    @abstractmethod
    async def replace(self, trip: TripEntity) -> TripEntity:
        raise NotImplementedError

    @abstractmethod
    async def remove(self, trip_id: str) -> None:
        raise NotImplementedError

    async def list_for_user(self, user_id: str) -> List[TripEntity]:
        return [trip for trip in await self.list_all() if trip.user_id == user_id]


class KeyValueTripRepository(TripRepository):
    """All trips live as one flat list under a single key."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load(self) -> List[Dict]:
        return self.store.get(TRIPS_KEY, []) or []

    async def list_all(self) -> List[TripEntity]:
        return [TripEntity.from_record(row) for row in self._load()]

    async def add(self, trip: TripEntity) -> TripEntity:
        rows = self._load()
        rows.append(trip.to_record())
        self.store.set(TRIPS_KEY, rows)
        return trip

    async def replace(self, trip: TripEntity) -> TripEntity:
        rows = self._load()
        for idx, row in enumerate(rows):
            if row.get("id") == trip.id:
                rows[idx] = trip.to_record()
                self.store.set(TRIPS_KEY, rows)
                return trip
        raise KeyError("Trip not found")

    async def remove(self, trip_id: str) -> None:
        rows = self._load()
        for idx, row in enumerate(rows):
            if row.get("id") == trip_id:
                rows.pop(idx)
                self.store.set(TRIPS_KEY, rows)
                return
        raise KeyError("Trip not found")


class SupabaseTripRepository(TripRepository):
    """
    Supabase-backed repository storing one row per trip in `saved_trips`.
    Row columns mirror the camelCase record used by the key-value store.
    """

    def __init__(self, client):
        if client is None:
            raise ValueError("Supabase client is required for SupabaseTripRepository")
        self.client = client
        self.table_name = "saved_trips"

    async def list_all(self) -> List[TripEntity]:
        response = await asyncio.to_thread(lambda: self.client.table(self.table_name).select("*").execute())
        rows = getattr(response, "data", None) or []
        return [TripEntity.from_record(row) for row in rows]

    async def list_for_user(self, user_id: str) -> List[TripEntity]:
        response = await asyncio.to_thread(
            lambda: self.client.table(self.table_name).select("*").eq("userId", user_id).execute()
        )
        rows = getattr(response, "data", None) or []
        return [TripEntity.from_record(row) for row in rows]

    async def add(self, trip: TripEntity) -> TripEntity:
        payload = trip.to_record()
        await asyncio.to_thread(lambda: self.client.table(self.table_name).insert(payload).execute())
        return trip

    async def replace(self, trip: TripEntity) -> TripEntity:
        payload = trip.to_record()
        response = await asyncio.to_thread(
            lambda: self.client.table(self.table_name).update(payload).eq("id", trip.id).execute()
        )
        if not (getattr(response, "data", None) or []):
            raise KeyError("Trip not found")
        return trip

    async def remove(self, trip_id: str) -> None:
        response = await asyncio.to_thread(
            lambda: self.client.table(self.table_name).delete().eq("id", trip_id).execute()
        )
        if not (getattr(response, "data", None) or []):
            raise KeyError("Trip not found")


class UserRepository:
    """Registered users as a flat list; emails are unique by linear scan."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load(self) -> List[Dict]:
        return self.store.get(USERS_KEY, []) or []

    async def list_all(self) -> List[UserEntity]:
        return [UserEntity.from_record(row) for row in self._load()]

    async def get(self, user_id: str) -> UserEntity:
        for row in self._load():
            if row.get("id") == user_id:
                return UserEntity.from_record(row)
        raise KeyError("User not found")

    async def find_by_email(self, email: str) -> Optional[UserEntity]:
        target = email.lower()
        for row in self._load():
            if str(row.get("email", "")).lower() == target:
                return UserEntity.from_record(row)
        return None

    async def add(self, user: UserEntity) -> UserEntity:
        rows = self._load()
        rows.append(user.to_record())
        self.store.set(USERS_KEY, rows)
        return user

    async def update(self, user: UserEntity) -> UserEntity:
        rows = self._load()
        for idx, row in enumerate(rows):
            if row.get("id") == user.id:
                rows[idx] = user.to_record()
                self.store.set(USERS_KEY, rows)
                return user
        raise KeyError("User not found")


class SessionRepository:
    """Bearer token -> user id. A user holds at most one token; signing in again replaces it."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def create(self, user_id: str) -> str:
        token = secrets.token_urlsafe(24)
        sessions = {
            existing: owner
            for existing, owner in (self.store.get(SESSIONS_KEY, {}) or {}).items()
            if owner != user_id
        }
        sessions[token] = user_id
        self.store.set(SESSIONS_KEY, sessions)
        return token

    async def resolve(self, token: str) -> Optional[str]:
        sessions = self.store.get(SESSIONS_KEY, {}) or {}
        return sessions.get(token)

    async def revoke(self, token: str) -> bool:
        sessions = self.store.get(SESSIONS_KEY, {}) or {}
        if token not in sessions:
            return False
        sessions.pop(token)
        self.store.set(SESSIONS_KEY, sessions)
        return True
