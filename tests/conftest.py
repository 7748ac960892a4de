"""Pytest fixtures for unit and integration tests."""
from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.v1.deps import get_now
from app.database import get_db
from app.main import app
from app.models.base import Base
from app.models.weekly_plan import WeeklyPlan
from app.services import task_service

# Fresh in-memory SQLite per test; routes commit, so nothing may leak between tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Wednesday
NOW = datetime(2026, 10, 14, 9, 30)


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    TestSession = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestSession() as session:
        yield session
        await session.rollback()


@pytest.fixture(autouse=True)
def clear_task_locks():
    """Task ids repeat across per-test databases and loops, so locks must not carry over."""
    task_service._task_locks.clear()
    yield
    task_service._task_locks.clear()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest_asyncio.fixture
async def current_week(db, now) -> WeeklyPlan:
    """Weekly plan covering ``now`` (Monday to Sunday)."""
    start = now.date() - timedelta(days=now.weekday())
    plan = WeeklyPlan(week_number=3, start_date=start, end_date=start + timedelta(days=6))
    db.add(plan)
    await db.flush()
    return plan


@pytest_asyncio.fixture
async def client(db, now) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client with DB and clock overrides."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_now] = lambda: now
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


