"""Shared fixtures for the carbon tracker test-suite.

Every test gets its own in-memory SQLite database; the API's session
dependency is overridden so requests and direct queries share it.
"""

import os
from datetime import datetime, timezone
from typing import Optional

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Load test environment variables from .env.test in the project root
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
dotenv_path = os.path.join(project_root, '.env.test')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path)

from carbon_tracker.config.settings import settings as _app_settings

# bcrypt's minimum cost keeps signup tests fast
_app_settings.PASSWORD_HASH_ROUNDS = 4

from carbon_tracker.api.main import app
from carbon_tracker.auth.security import create_session_token, hash_password
from carbon_tracker.models.base import Base
from carbon_tracker.models.submission_orm import SubmissionORM
from carbon_tracker.models.user_orm import UserORM
from carbon_tracker.utils.db_session import get_db_session

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "correct-horse-battery"

CORE_SCORES = dict(
    transportation_score=10.0,
    energy_score=8.0,
    water_score=1.0,
    diet_score=6.0,
    food_waste_score=2.0,
    shopping_score=3.0,
    waste_score=1.5,
    electronics_score=2.5,
    travel_score=4.0,
    appliance_score=1.0,
)


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """A session for arranging and inspecting data directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """AsyncClient with get_db_session overridden to use the test database."""

    async def _override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory that persists a user with TEST_PASSWORD."""

    async def _make_user(
        email: str = "ada@example.com",
        name: Optional[str] = "Ada",
        onboarding_completed: bool = True,
    ) -> UserORM:
        user = UserORM(
            email=email,
            password=hash_password(TEST_PASSWORD),
            name=name,
            onboarding_completed=onboarding_completed,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_submission(db_session):
    """Factory that persists a submission with sensible default scores."""

    async def _make_submission(
        user: UserORM,
        total: float = 40.0,
        created_at: Optional[datetime] = None,
        impact_category: str = "Medium",
        **scores,
    ) -> SubmissionORM:
        values = {**CORE_SCORES, **scores}
        submission = SubmissionORM(
            user_id=user.id,
            total_emission_score=total,
            impact_category=impact_category,
            created_at=created_at or datetime.now(timezone.utc),
            **values,
        )
        db_session.add(submission)
        await db_session.commit()
        await db_session.refresh(submission)
        return submission

    return _make_submission


@pytest.fixture
def auth_headers():
    """Build an Authorization header carrying a fresh session token for a user."""

    def _auth_headers(user: UserORM) -> dict:
        return {"Authorization": f"Bearer {create_session_token(user)}"}

    return _auth_headers
