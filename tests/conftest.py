"""Shared fixtures: a fresh SQLite database per test, profile factory, HTTP client."""

import itertools
import os

# Point the app's module-level engine at SQLite before settings are first read
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import UserProfile  # noqa: F401 - register all models
from app.services import profiles


# ============================================================================
# Database
# ============================================================================

@pytest.fixture
async def engine(tmp_path):
    """File-backed so concurrent sessions each get their own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fitpair.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


# ============================================================================
# Profiles
# ============================================================================

@pytest.fixture
def make_profile(db):
    """Create a profile; email defaults to a unique address."""
    counter = itertools.count(1)

    async def _make(**attrs):
        attrs.setdefault("email", f"user{next(counter)}@example.com")
        return await profiles.create_profile(db, attrs)

    return _make


@pytest.fixture
async def morning_runner(make_profile):
    return await make_profile(
        display_name="X",
        fitness_goal="lose-weight",
        workout_type="cardio",
        availability="morning",
    )


@pytest.fixture
async def morning_runner_twin(make_profile):
    return await make_profile(
        display_name="Y",
        fitness_goal="lose-weight",
        workout_type="cardio",
        availability="morning",
    )


@pytest.fixture
async def night_lifter(make_profile):
    return await make_profile(
        display_name="Z",
        fitness_goal="build-muscle",
        workout_type="strength",
        availability="night",
    )


# ============================================================================
# HTTP
# ============================================================================

@pytest.fixture
async def client(session_maker):
    """httpx client against the app, with get_db bound to the test database."""

    async def _override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
