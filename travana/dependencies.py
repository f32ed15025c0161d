from typing import Optional

from fastapi import Depends, Header

from travana.core.config import settings
from travana.core.errors import UnauthorizedError
from travana.domain.models import UserEntity
from travana.domain.repositories import (
    KeyValueTripRepository,
    SessionRepository,
    SupabaseTripRepository,
    TripRepository,
    UserRepository,
)
from travana.domain.services.auth_service import AuthService
from travana.domain.services.car_rental_service import CarRentalService
from travana.domain.services.esim_service import ESIMService
from travana.domain.services.event_service import EventService
from travana.domain.services.flight_service import FlightService
from travana.domain.services.hotel_service import HotelService
from travana.domain.services.music_service import MusicService
from travana.domain.services.payment_service import PaymentService
from travana.domain.services.translation_service import TranslationService
from travana.domain.services.trip_service import TripService
from travana.domain.services.weather_service import WeatherService
from travana.domain.storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from travana.external.supabase_client import get_supabase_client

if settings.storage_path:
    _store: KeyValueStore = JsonFileKeyValueStore(settings.storage_path)
else:
    _store = InMemoryKeyValueStore()


def get_store() -> KeyValueStore:
    return _store


def get_trip_repo(store: KeyValueStore = Depends(get_store)) -> TripRepository:
    client = get_supabase_client()
    if client is not None:
        return SupabaseTripRepository(client)
    return KeyValueTripRepository(store)


def get_user_repo(store: KeyValueStore = Depends(get_store)) -> UserRepository:
    return UserRepository(store)


def get_session_repo(store: KeyValueStore = Depends(get_store)) -> SessionRepository:
    return SessionRepository(store)


def get_auth_service(
    users: UserRepository = Depends(get_user_repo),
    sessions: SessionRepository = Depends(get_session_repo),
) -> AuthService:
    return AuthService(users=users, sessions=sessions)


def get_trip_service(repo: TripRepository = Depends(get_trip_repo)) -> TripService:
    return TripService(repo=repo)


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[UserEntity]:
    return await auth.get_current_user(token)


async def require_user(user: Optional[UserEntity] = Depends(get_current_user)) -> UserEntity:
    if not user:
        raise UnauthorizedError()
    return user


def get_hotel_service() -> HotelService:
    return HotelService()


def get_car_rental_service() -> CarRentalService:
    return CarRentalService()


def get_flight_service() -> FlightService:
    return FlightService()


def get_event_service() -> EventService:
    return EventService()


def get_music_service() -> MusicService:
    return MusicService()


def get_translation_service() -> TranslationService:
    return TranslationService()


def get_weather_service() -> WeatherService:
    return WeatherService()


def get_esim_service() -> ESIMService:
    return ESIMService()


def get_payment_service() -> PaymentService:
    return PaymentService()


__all__ = [
    "get_store",
    "get_trip_repo",
    "get_user_repo",
    "get_session_repo",
    "get_auth_service",
    "get_trip_service",
    "get_bearer_token",
    "get_current_user",
    "require_user",
    "get_hotel_service",
    "get_car_rental_service",
    "get_flight_service",
    "get_event_service",
    "get_music_service",
    "get_translation_service",
    "get_weather_service",
    "get_esim_service",
    "get_payment_service",
    "settings",
]
