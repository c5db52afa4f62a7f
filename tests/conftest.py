"""
Shared fixtures. Every test gets a fresh in-memory SQLite database (aiosqlite).
"""

import os

# Override env BEFORE importing wodlog so the app engine points at SQLite, not PostgreSQL
os.environ["DATABASE_DSN"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"

from datetime import date  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import wodlog.models  # noqa: E402, F401
from wodlog.core.enums import MovementType, ScoreType, WODSource, WODType  # noqa: E402
from wodlog.db.base import Base  # noqa: E402
from wodlog.db.repositories import Repositories  # noqa: E402
from wodlog.db.session import get_db  # noqa: E402
from wodlog.main import app  # noqa: E402
from wodlog.models.movement import Movement  # noqa: E402
from wodlog.models.wod import WOD  # noqa: E402
from wodlog.models.workout import LoggedWorkout, MovementPerformance  # noqa: E402

USER_ID = 1
OTHER_USER_ID = 2


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def repos(session):
    return Repositories.for_session(session)


@pytest_asyncio.fixture
async def client(session_maker):
    """API client whose requests run against the per-test database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ─── Sample catalog ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def back_squat(repos):
    return await repos.movements.add(
        Movement(name="Back Squat", type=MovementType.WEIGHTLIFTING, is_standard=True)
    )


@pytest_asyncio.fixture
async def deadlift(repos):
    return await repos.movements.add(
        Movement(name="Deadlift", type=MovementType.WEIGHTLIFTING, is_standard=True)
    )


@pytest_asyncio.fixture
async def fran(repos):
    return await repos.wods.add(
        WOD(
            name="Fran",
            source=WODSource.CROSSFIT.value,
            type=WODType.GIRL.value,
            score_type=ScoreType.TIME.value,
            description="21-15-9 Thrusters and Pull-ups",
            is_standard=True,
        )
    )


@pytest_asyncio.fixture
async def cindy(repos):
    return await repos.wods.add(
        WOD(
            name="Cindy",
            source=WODSource.CROSSFIT.value,
            type=WODType.GIRL.value,
            score_type=ScoreType.ROUNDS_REPS.value,
            is_standard=True,
        )
    )


@pytest_asyncio.fixture
async def crossfit_total(repos):
    return await repos.wods.add(
        WOD(
            name="CrossFit Total",
            source=WODSource.CROSSFIT.value,
            type=WODType.BENCHMARK.value,
            score_type=ScoreType.MAX_WEIGHT.value,
            is_standard=True,
        )
    )


async def store_workout(
    repos: Repositories,
    user_id: int,
    workout_date: date,
    movement_rows: list[MovementPerformance] = (),
    wod_rows=(),
) -> LoggedWorkout:
    """Persist a workout exactly as given (no validation, no PR detection)."""
    workout = LoggedWorkout(user_id=user_id, workout_name="Session", workout_date=workout_date)
    return await repos.performances.create_performance_batch(workout, list(movement_rows), list(wod_rows))
