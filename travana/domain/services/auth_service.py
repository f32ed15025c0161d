from __future__ import annotations

import logging
from typing import Optional, Tuple

from travana.api.models.schemas import PreferencesUpdate, UserPreferences
from travana.core.errors import AuthError
from travana.domain.models import UserEntity, utcnow
from travana.domain.repositories import SessionRepository, UserRepository
from travana.domain.services.trip_service import generate_id

logger = logging.getLogger(__name__)

DEMO_GOOGLE_USER = {
    "id": "google-demo-user",
    "email": "demo@example.com",
    "name": "Demo User",
    "picture": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&h=150&fit=crop&crop=face",
}


def demo_users() -> list[UserEntity]:
    now = utcnow()
    return [
        UserEntity(
            id="demo-1",
            email="john@example.com",
            password="password123",
            name="John Doe",
            picture="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150&fit=crop&crop=face",
            preferences=UserPreferences(),
            created_at=now,
        ),
        UserEntity(
            id="demo-2",
            email="jane@example.com",
            password="password123",
            name="Jane Smith",
            picture="https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150&h=150&fit=crop&crop=face",
            preferences=UserPreferences(
                preferredCurrency="EUR", travelStyle="luxury", dietaryRestrictions=["vegetarian"]
            ),
            created_at=now,
        ),
    ]


class AuthService:
    """
    Local demo authentication. Passwords are stored as given and sessions are
    opaque bearer tokens in the key-value store.
    """

    def __init__(self, users: UserRepository, sessions: SessionRepository):
        self.users = users
        self.sessions = sessions

    async def sign_up(self, email: str, password: str, name: str) -> Tuple[UserEntity, str]:
        if email and await self.users.find_by_email(email):
            raise AuthError("User with this email already exists")
        if not email or not password or not name:
            raise AuthError("All fields are required")
        if len(password) < 6:
            raise AuthError("Password must be at least 6 characters long")
        if "@" not in email:
            raise AuthError("Please enter a valid email address")

        user = UserEntity(
            id=generate_id(),
            email=email.lower(),
            password=password,
            name=name,
            preferences=UserPreferences(),
            created_at=utcnow(),
        )
        await self.users.add(user)
        logger.info("Registered user %s", user.id)
        return user, await self.sessions.create(user.id)

    async def sign_in(self, email: str, password: str) -> Tuple[UserEntity, str]:
        user = await self.users.find_by_email(email) if email else None
        if not user or not password or user.password != password:
            raise AuthError("Invalid email or password")
        return user, await self.sessions.create(user.id)

    async def sign_in_demo(self) -> Tuple[UserEntity, str]:
        """Stands in for a Google sign-in with a fixed demo profile."""
        try:
            user = await self.users.get(DEMO_GOOGLE_USER["id"])
        except KeyError:
            user = UserEntity(
                password="",
                preferences=UserPreferences(),
                created_at=utcnow(),
                **DEMO_GOOGLE_USER,
            )
            await self.users.add(user)
        return user, await self.sessions.create(user.id)

    async def sign_out(self, token: Optional[str]) -> None:
        if token:
            await self.sessions.revoke(token)

    async def get_current_user(self, token: Optional[str]) -> Optional[UserEntity]:
        if not token:
            return None
        user_id = await self.sessions.resolve(token)
        if not user_id:
            return None
        try:
            return await self.users.get(user_id)
        except KeyError:
            return None

    async def update_preferences(self, user: Optional[UserEntity], updates: PreferencesUpdate) -> Optional[UserEntity]:
        if not user:
            return None
        merged = {
            **UserPreferences().model_dump(),
            **(user.preferences.model_dump() if user.preferences else {}),
            **updates.model_dump(exclude_none=True),
        }
        user.preferences = UserPreferences.model_validate(merged)
        try:
            await self.users.update(user)
        except KeyError:
            return None
        return user

    async def reset_password(self, email: str) -> None:
        if not email or not await self.users.find_by_email(email):
            raise AuthError("No account found with this email address")
        # No mail provider is wired up
        logger.info("Password reset requested for %s", email.lower())

    async def update_password(self, user: Optional[UserEntity], new_password: str) -> None:
        if not user:
            raise AuthError("No user logged in")
        user.password = new_password
        try:
            await self.users.update(user)
        except KeyError:
            logger.warning("User %s vanished before password update", user.id)

    async def create_demo_data(self) -> bool:
        """Seed the demo accounts when no users exist yet. Returns True when seeded."""
        if await self.users.list_all():
            return False
        for user in demo_users():
            await self.users.add(user)
        logger.info("Seeded demo users")
        return True
