"""Tests for task creation, toggling, partial updates and the daily reset pass."""
from datetime import timedelta
from types import SimpleNamespace

import pytest

from app.models.task import TaskFrequency, TaskType
from app.schemas.task import TaskCreate, TaskUpdate
from app.services import task_service
from app.services.task_service import CompletedOnceTaskError, NotFoundError, toggle_completion


def _recurring(title="Meditate", frequency="daily") -> TaskCreate:
    return TaskCreate(title=title, frequency=frequency, task_type="recurring")


def _week_task(plan_id, title="Ship draft", frequency="weekly") -> TaskCreate:
    return TaskCreate(
        title=title, frequency=frequency, task_type="week_specific", weekly_plan_id=plan_id
    )


# ---------------------------------------------------------------------------
# create_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_recurring_target_derived_from_frequency(db, now):
    task = await task_service.create_task(db, _recurring(frequency="WEEKDAYS"), now)
    assert task.frequency == TaskFrequency.weekdays
    assert task.task_type == TaskType.recurring
    assert task.completion_target == 5
    assert task.completion_count == 0
    assert task.weekly_plan_id is None


@pytest.mark.asyncio
async def test_recurring_task_drops_weekly_plan(db, now, current_week):
    data = TaskCreate(
        title="Run", frequency="daily", task_type="recurring", weekly_plan_id=current_week.id
    )
    task = await task_service.create_task(db, data, now)
    assert task.weekly_plan_id is None
    assert task.completion_target == 7


@pytest.mark.asyncio
async def test_week_specific_task_requires_plan(db, now):
    with pytest.raises(ValueError):
        await task_service.create_task(
            db, TaskCreate(title="x", task_type="week_specific"), now
        )
    with pytest.raises(NotFoundError):
        await task_service.create_task(db, _week_task(9999), now)


# ---------------------------------------------------------------------------
# toggle_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_toggle_unknown_task_is_noop(db, now):
    assert await task_service.toggle_task(db, 4242, now) is None


@pytest.mark.asyncio
async def test_week_specific_toggle_flips_and_stamps(db, now, current_week):
    task = await task_service.create_task(db, _week_task(current_week.id), now)

    result = await task_service.toggle_task(db, task.id, now)
    assert result.changed
    assert task.completed is True
    assert task.last_completed == now

    await task_service.toggle_task(db, task.id, now)
    assert task.completed is False
    assert task.last_completed is None


@pytest.mark.asyncio
async def test_completed_once_task_cannot_be_unchecked(db, now, current_week):
    task = await task_service.create_task(
        db, _week_task(current_week.id, frequency="once"), now
    )
    first = await task_service.toggle_task(db, task.id, now)
    assert first.changed and task.completed

    second = await task_service.toggle_task(db, task.id, now)
    assert second.changed is False
    assert task.completed is True
    assert task.last_completed == now


@pytest.mark.asyncio
async def test_weekdays_round_trip(db, now, current_week):
    task = await task_service.create_task(db, _recurring(frequency="weekdays"), now)
    assert task.completion_target == 5

    for _ in range(5):
        await task_service.toggle_task(db, task.id, now)
    assert task.completion_count == 5
    assert task.completed is True

    # Thursday: the stale completion is revoked, earlier ones stay credited
    reset = await task_service.run_daily_reset(db, now + timedelta(days=1))
    assert [t.id for t in reset] == [task.id]
    assert task.completion_count == 4
    assert task.completed is False
    assert task.last_completed is None


@pytest.mark.asyncio
async def test_toggling_recurring_task_at_target_takes_one_back(db, now):
    task = await task_service.create_task(db, _recurring(frequency="twice_week"), now)
    await task_service.toggle_task(db, task.id, now)
    await task_service.toggle_task(db, task.id, now)
    assert task.completed is True

    await task_service.toggle_task(db, task.id, now)
    assert task.completion_count == 1
    assert task.completed is False
    assert task.last_completed is None


def test_toggle_completion_keeps_count_invariant(now):
    task = SimpleNamespace(
        frequency=TaskFrequency.weekends,
        task_type=TaskType.recurring,
        completed=False,
        completion_count=0,
        completion_target=2,
        last_completed=None,
    )
    for _ in range(5):
        assert toggle_completion(task, now)
        assert task.completed == (task.completion_count >= task.completion_target)
        assert task.completion_count >= 0


@pytest.mark.asyncio
async def test_toggle_recalculates_weekly_plan(db, now, current_week):
    daily = await task_service.create_task(
        db, _week_task(current_week.id, title="Workout", frequency="daily"), now
    )
    await task_service.create_task(db, _week_task(current_week.id, title="Review"), now)

    await task_service.toggle_task(db, daily.id, now)
    assert current_week.completion_percentage == pytest.approx(87.5)
    assert current_week.is_successful is True


@pytest.mark.asyncio
async def test_recurring_toggle_updates_current_week(db, now, current_week):
    task = await task_service.create_task(db, _recurring(frequency="daily"), now)
    for _ in range(3):
        await task_service.toggle_task(db, task.id, now)
    assert current_week.completion_percentage == pytest.approx(300 / 7)
    assert current_week.is_successful is False


# ---------------------------------------------------------------------------
# update_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_count_recomputes_completed(db, now, current_week):
    task = await task_service.create_task(db, _recurring(frequency="three_times_week"), now)

    await task_service.update_task(db, task.id, TaskUpdate(completion_count=3), now)
    assert task.completed is True

    # Explicit completed cannot contradict the count
    await task_service.update_task(
        db, task.id, TaskUpdate(completion_count=1, completed=True), now
    )
    assert task.completion_count == 1
    assert task.completed is False


@pytest.mark.asyncio
async def test_update_frequency_rederives_target(db, now):
    task = await task_service.create_task(db, _recurring(frequency="daily"), now)
    await task_service.update_task(db, task.id, TaskUpdate(completion_count=2), now)

    await task_service.update_task(db, task.id, TaskUpdate(frequency="twice_week"), now)
    assert task.completion_target == 2
    assert task.completed is True


@pytest.mark.asyncio
async def test_partial_update_leaves_other_fields(db, now, current_week):
    task = await task_service.create_task(db, _week_task(current_week.id), now)
    await task_service.update_task(db, task.id, TaskUpdate(category="Health"), now)
    assert task.title == "Ship draft"
    assert task.category == "Health"
    assert task.frequency == TaskFrequency.weekly


@pytest.mark.asyncio
async def test_update_completed_stamps_last_completed(db, now, current_week):
    task = await task_service.create_task(db, _week_task(current_week.id), now)

    await task_service.update_task(db, task.id, TaskUpdate(completed=True), now)
    assert task.last_completed == now
    assert current_week.completion_percentage == 100

    later = now + timedelta(hours=2)
    await task_service.update_task(db, task.id, TaskUpdate(completed=True), later)
    assert task.last_completed == now

    await task_service.update_task(db, task.id, TaskUpdate(completed=False), later)
    assert task.last_completed is None
    assert current_week.completion_percentage == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("update", [
    TaskUpdate(completed=False),
    TaskUpdate(frequency="weekly"),
])
async def test_update_cannot_reopen_completed_once_week_task(db, now, current_week, update):
    task = await task_service.create_task(
        db, _week_task(current_week.id, frequency="once"), now
    )
    await task_service.toggle_task(db, task.id, now)
    assert current_week.completion_percentage == 100

    with pytest.raises(CompletedOnceTaskError):
        await task_service.update_task(db, task.id, update, now)
    assert task.completed is True
    assert task.frequency == TaskFrequency.once
    assert task.last_completed == now
    assert current_week.completion_percentage == 100


@pytest.mark.asyncio
@pytest.mark.parametrize("update", [
    TaskUpdate(completion_count=0),
    TaskUpdate(frequency="daily"),
])
async def test_update_cannot_reopen_completed_once_recurring_task(
    db, now, current_week, update
):
    task = await task_service.create_task(db, _recurring(title="Book", frequency="once"), now)
    await task_service.toggle_task(db, task.id, now)
    assert task.completed is True

    with pytest.raises(CompletedOnceTaskError):
        await task_service.update_task(db, task.id, update, now)
    assert task.completion_count == 1
    assert task.completion_target == 1
    assert task.completed is True
    assert current_week.completion_percentage == 100


@pytest.mark.asyncio
async def test_completed_once_task_accepts_other_edits(db, now, current_week):
    task = await task_service.create_task(db, _recurring(title="Book", frequency="once"), now)
    await task_service.toggle_task(db, task.id, now)

    await task_service.update_task(
        db, task.id, TaskUpdate(title="Book flights", completion_count=2), now
    )
    assert task.title == "Book flights"
    assert task.completed is True


@pytest.mark.asyncio
async def test_update_unknown_task_raises(db, now):
    with pytest.raises(NotFoundError):
        await task_service.update_task(db, 777, TaskUpdate(title="x"), now)


# ---------------------------------------------------------------------------
# run_daily_reset / delete_task
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_daily_reset_is_idempotent(db, now, current_week):
    task = await task_service.create_task(db, _recurring(frequency="daily"), now)
    await task_service.toggle_task(db, task.id, now)

    tomorrow = now + timedelta(days=1)
    assert len(await task_service.run_daily_reset(db, tomorrow)) == 1
    assert await task_service.run_daily_reset(db, tomorrow) == []
    assert task.completion_count == 0


@pytest.mark.asyncio
async def test_daily_reset_ignores_once_and_week_specific(db, now, current_week):
    once = await task_service.create_task(db, _recurring(title="Book", frequency="once"), now)
    week_task = await task_service.create_task(
        db, _week_task(current_week.id, frequency="daily"), now
    )
    await task_service.toggle_task(db, once.id, now)
    await task_service.toggle_task(db, week_task.id, now)

    reset = await task_service.run_daily_reset(db, now + timedelta(days=30))
    assert reset == []
    assert once.completed is True
    assert week_task.completed is True


@pytest.mark.asyncio
async def test_daily_reset_refreshes_current_week(db, now, current_week):
    task = await task_service.create_task(db, _recurring(frequency="daily"), now)
    for _ in range(7):
        await task_service.toggle_task(db, task.id, now)
    assert current_week.completion_percentage == 100

    # Thursday is still inside the same weekly plan
    await task_service.run_daily_reset(db, now + timedelta(days=1))
    assert task.completion_count == 6
    assert current_week.completion_percentage == pytest.approx(600 / 7)
    assert current_week.is_successful is True


@pytest.mark.asyncio
async def test_delete_task_recalculates_plan(db, now, current_week):
    done = await task_service.create_task(db, _week_task(current_week.id, title="A"), now)
    open_task = await task_service.create_task(db, _week_task(current_week.id, title="B"), now)
    await task_service.toggle_task(db, done.id, now)
    assert current_week.completion_percentage == 50

    await task_service.delete_task(db, open_task.id, now)
    assert current_week.completion_percentage == 100

    with pytest.raises(NotFoundError):
        await task_service.delete_task(db, open_task.id, now)
