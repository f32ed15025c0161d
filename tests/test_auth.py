"""Local demo authentication."""

import pytest

from travana.api.models.schemas import PreferencesUpdate
from travana.core.errors import AuthError
from travana.domain.services.auth_service import AuthService
from travana.domain.storage import SESSIONS_KEY


@pytest.fixture
def auth(users, sessions):
    return AuthService(users, sessions)


@pytest.mark.asyncio
async def test_sign_up_normalises_email_and_signs_in(auth):
    user, token = await auth.sign_up("Ana@Example.com", "secret123", "Ana")
    assert user.email == "ana@example.com"
    assert user.preferences.preferredCurrency == "USD"
    assert user.preferences.travelStyle == "adventure"
    assert (await auth.get_current_user(token)).id == user.id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, password, name, message",
    [
        ("", "secret123", "Ana", "All fields are required"),
        ("ana@example.com", "", "Ana", "All fields are required"),
        ("ana@example.com", "12345", "Ana", "Password must be at least 6 characters long"),
        ("ana.example.com", "secret123", "Ana", "Please enter a valid email address"),
    ],
)
async def test_sign_up_rejects_bad_input(auth, email, password, name, message):
    with pytest.raises(AuthError, match=message):
        await auth.sign_up(email, password, name)


@pytest.mark.asyncio
async def test_duplicate_email_is_checked_first(auth):
    await auth.sign_up("ana@example.com", "secret123", "Ana")
    with pytest.raises(AuthError, match="User with this email already exists"):
        await auth.sign_up("ANA@example.com", "1", "")


@pytest.mark.asyncio
async def test_sign_in(auth):
    await auth.sign_up("ana@example.com", "secret123", "Ana")
    user, token = await auth.sign_in("ANA@EXAMPLE.COM", "secret123")
    assert user.name == "Ana"
    assert token
    with pytest.raises(AuthError, match="Invalid email or password"):
        await auth.sign_in("ana@example.com", "wrong-password")


@pytest.mark.asyncio
async def test_sign_out_revokes_token(auth):
    _, token = await auth.sign_up("ana@example.com", "secret123", "Ana")
    await auth.sign_out(token)
    assert await auth.get_current_user(token) is None


@pytest.mark.asyncio
async def test_signing_in_again_replaces_previous_token(auth, sessions, store):
    user, first = await auth.sign_up("ana@example.com", "secret123", "Ana")
    other, other_token = await auth.sign_up("ben@example.com", "secret123", "Ben")
    _, second = await auth.sign_in("ana@example.com", "secret123")

    assert await sessions.resolve(first) is None
    assert await sessions.resolve(second) == user.id
    assert await sessions.resolve(other_token) == other.id
    assert len(store.get(SESSIONS_KEY, {})) == 2

    await auth.sign_out(second)
    assert await auth.get_current_user(second) is None
    assert await sessions.resolve(other_token) == other.id


@pytest.mark.asyncio
async def test_demo_sign_in_reuses_profile(auth, users):
    first, _ = await auth.sign_in_demo()
    second, _ = await auth.sign_in_demo()
    assert first.id == second.id == "google-demo-user"
    assert len(await users.list_all()) == 1


@pytest.mark.asyncio
async def test_update_preferences_merges(auth):
    user, _ = await auth.sign_up("ana@example.com", "secret123", "Ana")
    updated = await auth.update_preferences(user, PreferencesUpdate(preferredCurrency="EUR"))
    assert updated.preferences.preferredCurrency == "EUR"
    assert updated.preferences.preferredLanguage == "en"
    assert await auth.update_preferences(None, PreferencesUpdate()) is None


@pytest.mark.asyncio
async def test_password_reset_and_update(auth):
    user, _ = await auth.sign_up("ana@example.com", "secret123", "Ana")
    await auth.reset_password("ana@example.com")
    with pytest.raises(AuthError, match="No account found with this email address"):
        await auth.reset_password("nobody@example.com")

    await auth.update_password(user, "newsecret")
    await auth.sign_in("ana@example.com", "newsecret")
    with pytest.raises(AuthError, match="No user logged in"):
        await auth.update_password(None, "whatever")


@pytest.mark.asyncio
async def test_demo_data_only_seeds_empty_store(auth, users):
    assert await auth.create_demo_data() is True
    emails = sorted(u.email for u in await users.list_all())
    assert emails == ["jane@example.com", "john@example.com"]
    jane = await users.find_by_email("jane@example.com")
    assert jane.preferences.dietaryRestrictions == ["vegetarian"]
    assert await auth.create_demo_data() is False


def test_auth_routes(client, auth_headers):
    me = client.get("/api/auth/me", headers=auth_headers)
    assert me.status_code == 200
    assert me.json()["email"] == "traveler@example.com"

    prefs = client.patch("/api/auth/preferences", json={"travelStyle": "luxury"}, headers=auth_headers)
    assert prefs.json()["preferences"]["travelStyle"] == "luxury"

    dup = client.post("/api/auth/signup", json={"email": "traveler@example.com", "password": "secret123", "name": "T"})
    assert dup.status_code == 400
    assert dup.json()["error"]["message"] == "User with this email already exists"

    bad = client.post("/api/auth/signin", json={"email": "traveler@example.com", "password": "nope"})
    assert bad.status_code == 401

    assert client.post("/api/auth/signout", headers=auth_headers).json() == {"success": True}
    assert client.get("/api/auth/me", headers=auth_headers).status_code == 401


def test_demo_route(client):
    resp = client.post("/api/auth/demo")
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "demo@example.com"
