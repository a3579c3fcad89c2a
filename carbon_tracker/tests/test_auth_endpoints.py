"""
Tests for the signup, sign-in and session endpoints.
"""

import asyncio
import threading
import time
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from carbon_tracker.auth.security import hash_password, verify_password
from carbon_tracker.config.settings import settings
from carbon_tracker.models.user_orm import UserORM

from .conftest import TEST_PASSWORD

SIGNUP_URL = "/api/auth/signup"
HASH_DELAY = 0.5


def slowed(target, entered):
    def _slowed(*args, **kwargs):
        entered.set()
        time.sleep(HASH_DELAY)
        return target(*args, **kwargs)
    return _slowed


async def health_check_during(entered, client):
    """Hit /health once hashing has started; latency counts from the call."""
    started = time.perf_counter()
    while not entered.is_set():
        await asyncio.sleep(0.01)
    response = await client.get("/health")
    return response, time.perf_counter() - started


async def count_users(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(UserORM))
    return result.scalar_one()


@pytest.mark.asyncio
class TestSignup:

    async def test_creates_user(self, client, db_session):
        response = await client.post(
            SIGNUP_URL,
            json={"email": "Ada@Example.com", "password": "longenough", "name": "Ada"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["email"] == "ada@example.com"
        assert body["user"]["name"] == "Ada"
        assert body["user"]["onboardingCompleted"] is False
        assert "password" not in body["user"]
        assert body["user"]["id"]

        stored = (await db_session.execute(select(UserORM))).scalar_one()
        assert stored.password != "longenough"
        assert verify_password("longenough", stored.password)

    async def test_name_is_optional(self, client):
        response = await client.post(SIGNUP_URL, json={"email": "anon@example.com", "password": "longenough"})

        assert response.status_code == 201
        assert response.json()["user"]["name"] is None

    async def test_duplicate_email_is_case_insensitive(self, client, make_user, db_session):
        await make_user(email="ada@example.com")

        response = await client.post(SIGNUP_URL, json={"email": "ADA@example.com", "password": "longenough"})

        assert response.status_code == 409
        assert response.json() == {"error": "User with this email already exists"}
        assert await count_users(db_session) == 1

    async def test_short_password(self, client, db_session):
        response = await client.post(SIGNUP_URL, json={"email": "bob@example.com", "password": "1234567"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid input"
        assert body["details"]["password"] == ["Password must be at least 8 characters long"]
        assert await count_users(db_session) == 0

    async def test_invalid_email(self, client):
        response = await client.post(SIGNUP_URL, json={"email": "not-an-email", "password": "longenough"})

        assert response.status_code == 400
        assert response.json()["details"]["email"] == ["Invalid email address"]

    async def test_empty_name(self, client):
        response = await client.post(
            SIGNUP_URL,
            json={"email": "bob@example.com", "password": "longenough", "name": ""},
        )

        assert response.status_code == 400
        assert response.json()["details"]["name"] == ["Name is required"]

    async def test_null_name(self, client):
        response = await client.post(
            SIGNUP_URL,
            json={"email": "bob@example.com", "password": "longenough", "name": None},
        )

        assert response.status_code == 400
        assert response.json()["details"]["name"] == ["Name is required"]

    async def test_missing_field(self, client):
        response = await client.post(SIGNUP_URL, json={"password": "longenough"})

        assert response.status_code == 400
        assert response.json()["details"]["email"] == ["Required"]

    async def test_multiple_field_errors_are_reported_together(self, client):
        response = await client.post(SIGNUP_URL, json={"email": "nope", "password": "short"})

        details = response.json()["details"]
        assert set(details) == {"email", "password"}

    async def test_invalid_json(self, client):
        response = await client.post(
            SIGNUP_URL,
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    async def test_unexpected_failure_returns_500(self, client, mocker):
        mocker.patch(
            "carbon_tracker.api.endpoints.auth.register_user",
            new=AsyncMock(side_effect=RuntimeError("database is on fire")),
        )

        response = await client.post(SIGNUP_URL, json={"email": "bob@example.com", "password": "longenough"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


@pytest.mark.asyncio
class TestSignin:

    async def test_returns_token_and_sets_cookie(self, client, make_user):
        user = await make_user(email="ada@example.com")

        response = await client.post(
            "/api/auth/signin",
            json={"email": "ADA@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["user"]["id"] == user.id
        assert "password" not in body["user"]
        assert settings.SESSION_COOKIE_NAME in response.cookies

    async def test_wrong_password(self, client, make_user):
        await make_user(email="ada@example.com")

        response = await client.post(
            "/api/auth/signin",
            json={"email": "ada@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401

    async def test_unknown_email(self, client):
        response = await client.post(
            "/api/auth/signin",
            json={"email": "ghost@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401

    async def test_signout_clears_cookie(self, client):
        response = await client.post("/api/auth/signout")

        assert response.status_code == 204
        assert settings.SESSION_COOKIE_NAME in response.headers.get("set-cookie", "")


@pytest.mark.asyncio
class TestSession:

    async def test_returns_session_identity(self, client, make_user, auth_headers):
        user = await make_user(email="ada@example.com", onboarding_completed=False)

        response = await client.get("/api/auth/session", headers=auth_headers(user))

        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == user.id
        assert body["email"] == "ada@example.com"
        assert body["onboardingCompleted"] is False

    async def test_requires_authentication(self, client):
        response = await client.get("/api/auth/session")
        assert response.status_code == 401


@pytest.mark.asyncio
class TestPasswordHashingConcurrency:

    async def test_signup_does_not_block_other_requests(self, client, mocker):
        entered = threading.Event()
        mocker.patch("carbon_tracker.core.accounts.hash_password", side_effect=slowed(hash_password, entered))

        signup, (health, latency) = await asyncio.gather(
            client.post(SIGNUP_URL, json={"email": "ada@example.com", "password": "longenough"}),
            health_check_during(entered, client),
        )

        assert signup.status_code == 201
        assert health.status_code == 200
        assert latency < HASH_DELAY / 2

    async def test_signin_does_not_block_other_requests(self, client, make_user, mocker):
        await make_user(email="ada@example.com")
        entered = threading.Event()
        mocker.patch("carbon_tracker.core.accounts.verify_password", side_effect=slowed(verify_password, entered))

        signin, (health, latency) = await asyncio.gather(
            client.post("/api/auth/signin", json={"email": "ada@example.com", "password": TEST_PASSWORD}),
            health_check_during(entered, client),
        )

        assert signin.status_code == 200
        assert health.status_code == 200
        assert latency < HASH_DELAY / 2
