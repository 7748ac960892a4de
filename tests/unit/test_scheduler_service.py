"""Tests for the daily reset job wiring."""
import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.task import Task
from app.schemas.task import TaskCreate
from app.services import scheduler_service, task_service


@pytest.fixture
def session_factory(test_engine, monkeypatch):
    factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(scheduler_service, "AsyncSessionLocal", factory)
    return factory


def test_setup_scheduler_registers_daily_reset():
    scheduler_service.setup_scheduler()
    job = scheduler_service.scheduler.get_job("daily_reset")
    assert job is not None
    assert "hour='0'" in str(job.trigger)
    assert "minute='5'" in str(job.trigger)


@pytest.mark.asyncio
async def test_run_reset_pass_commits(session_factory, now):
    async with session_factory() as db:
        task = await task_service.create_task(
            db, TaskCreate(title="Floss", frequency="daily", task_type="recurring"), now
        )
        await task_service.toggle_task(db, task.id, now)
        await db.commit()
        task_id = task.id

    assert await scheduler_service.run_reset_pass(now + timedelta(days=1)) == 1
    assert await scheduler_service.run_reset_pass(now + timedelta(days=1)) == 0

    async with session_factory() as db:
        stored = await db.get(Task, task_id)
        assert stored.completion_count == 0
        assert stored.last_completed is None


@pytest.mark.asyncio
async def test_run_reset_pass_reraises_after_rollback(session_factory, now):
    with patch(
        "app.services.task_service.run_daily_reset",
        new_callable=AsyncMock,
        side_effect=RuntimeError("boom"),
    ):
        with pytest.raises(RuntimeError):
            await scheduler_service.run_reset_pass(now)


@pytest.mark.asyncio
async def test_daily_reset_job_logs_failures(session_factory):
    with patch(
        "app.services.scheduler_service.run_reset_pass",
        new_callable=AsyncMock,
        side_effect=RuntimeError("boom"),
    ) as failing:
        await scheduler_service._daily_reset_job()
    failing.assert_awaited_once()


@pytest.mark.asyncio
async def test_reset_pass_waits_for_in_flight_toggle(session_factory, now):
    async with session_factory() as db:
        task = await task_service.create_task(
            db, TaskCreate(title="Stretch", frequency="daily", task_type="recurring"), now
        )
        for _ in range(3):
            await task_service.toggle_task(db, task.id, now)
        await db.commit()
        task_id = task.id

    tomorrow = now + timedelta(days=1)
    lock = task_service.task_lock(task_id)
    await lock.acquire()
    try:
        reset_job = asyncio.create_task(scheduler_service.run_reset_pass(tomorrow))
        await asyncio.sleep(0.05)
        assert not reset_job.done()

        # A toggle holding the lock commits while the pass is waiting
        async with session_factory() as db:
            await task_service.toggle_task(db, task_id, tomorrow)
            await db.commit()
    finally:
        lock.release()

    # The fresh completion is inside today's window, so nothing is revoked
    assert await reset_job == 0
    async with session_factory() as db:
        stored = await db.get(Task, task_id)
        assert stored.completion_count == 4
        assert stored.last_completed == tomorrow


@pytest.mark.asyncio
async def test_reset_pass_rereads_rows_changed_by_other_sessions(session_factory, now):
    async with session_factory() as db:
        task = await task_service.create_task(
            db, TaskCreate(title="Journal", frequency="daily", task_type="recurring"), now
        )
        for _ in range(3):
            await task_service.toggle_task(db, task.id, now)
        await db.commit()
        task_id = task.id

    async with session_factory() as reset_db:
        # Stale copy in the reset session's identity map
        stale = await reset_db.get(Task, task_id)
        assert stale.completion_count == 3

        async with session_factory() as other:
            row = await other.get(Task, task_id)
            row.completion_count = 5
            await other.commit()

        async with task_service.reset_pass(reset_db, now + timedelta(days=1)) as reset:
            await reset_db.commit()
        assert [t.id for t in reset] == [task_id]
        assert stale.completion_count == 4
