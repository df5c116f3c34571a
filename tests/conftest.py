"""Shared fixtures: exercise library, a small training history and an in-memory database."""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from repledger.core.config import Settings
from repledger.core.enums import Equipment, MuscleGroup
from repledger.db.session import create_session_maker, init_models
from tests.factories import NOW, UTC, make_exercise, make_set, make_workout


@pytest.fixture
def settings():
    return Settings(database_url_override="sqlite+aiosqlite://")


@pytest.fixture
def bench():
    return make_exercise("Bench Press", MuscleGroup.CHEST, Equipment.BARBELL)


@pytest.fixture
def squat():
    return make_exercise("Squat", MuscleGroup.QUADRICEPS, Equipment.BARBELL)


@pytest.fixture
def row():
    return make_exercise("Cable Row", MuscleGroup.BACK, Equipment.CABLE)


@pytest.fixture
def library(bench, squat, row):
    return [bench, squat, row]


@pytest.fixture
def history(bench, squat, row):
    """Three finished workouts: one last week, two this week.

    - Tue 2024-06-04 10:00: bench 100x10 (1000 kg)
    - Mon 2024-06-10 10:00: bench 100x10, squat 100x5 (1500 kg)
    - Wed 2024-06-12 08:00: squat 140x5, row 60x10 (1300 kg)
    """
    last_week = make_workout(
        datetime(2024, 6, 4, 10, 0, tzinfo=UTC),
        [(bench, [make_set(100, 10)])],
        title="Push",
    )
    monday = make_workout(
        datetime(2024, 6, 10, 10, 0, tzinfo=UTC),
        [(bench, [make_set(100, 10)]), (squat, [make_set(100, 5)])],
        title="Full A",
    )
    wednesday = make_workout(
        datetime(2024, 6, 12, 8, 0, tzinfo=UTC),
        [(squat, [make_set(140, 5)]), (row, [make_set(60, 10)])],
        title="Legs and Back",
    )
    return [last_week, monday, wednesday]


@pytest.fixture
def now():
    return NOW


@pytest_asyncio.fixture
async def session():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(engine)
    async with create_session_maker(engine)() as db:
        yield db
    await engine.dispose()
