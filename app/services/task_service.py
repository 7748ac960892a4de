"""Task lifecycle: creation, partial updates, toggling and the daily reset pass."""

import asyncio
import logging
from collections import defaultdict
from contextlib import AsyncExitStack, asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Iterable, NamedTuple, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_task, crud_weekly_plan
from app.models.task import Task, TaskFrequency, TaskType
from app.schemas.task import TaskCreate, TaskUpdate
from app.services import progress_service
from app.services.completion_engine import is_done, target_for
from app.services.reset_scheduler import apply_reset, tasks_to_reset

logger = logging.getLogger(__name__)

# Fields that may not be cleared by a partial update
_NON_NULLABLE = ("title", "priority", "frequency", "completed", "completion_count")

_task_locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)


class NotFoundError(Exception):
    pass


class CompletedOnceTaskError(ValueError):
    """A completed one-time task may not be re-opened."""


class ToggleResult(NamedTuple):
    task: Task
    changed: bool


def task_lock(task_id: int) -> asyncio.Lock:
    """Per-task lock; hold it across toggle and commit to keep writes to one task serial."""
    return _task_locks[task_id]


@asynccontextmanager
async def hold_task_locks(task_ids: Iterable[int]) -> AsyncIterator[None]:
    """Hold several task locks at once, taken in id order so two holders never deadlock."""
    async with AsyncExitStack() as stack:
        for task_id in sorted(set(task_ids)):
            await stack.enter_async_context(task_lock(task_id))
        yield


def forget_task_lock(task_id: int) -> None:
    """Drop a deleted task's lock. Call after the delete is committed."""
    _task_locks.pop(task_id, None)


def toggle_completion(task, now: datetime) -> bool:
    """Flip a task's completion state in place. Returns False when the toggle is refused."""
    if task.frequency == TaskFrequency.once and is_done(task):
        # One-time tasks cannot be un-completed
        return False

    if task.task_type == TaskType.recurring:
        if task.completion_count >= task.completion_target:
            task.completion_count = max(task.completion_count - 1, 0)
            task.last_completed = None
        else:
            task.completion_count += 1
            task.last_completed = now
        task.completed = task.completion_count >= task.completion_target
    else:
        task.completed = not task.completed
        task.last_completed = now if task.completed else None
    return True


def _reopens_once_task(task, values: dict) -> bool:
    """True when applying ``values`` would leave a completed one-time task open."""
    if task.frequency != TaskFrequency.once or not is_done(task):
        return False
    if values.get("frequency", task.frequency) != TaskFrequency.once:
        return True
    if task.task_type == TaskType.recurring:
        return values.get("completion_count", task.completion_count) < task.completion_target
    return values.get("completed", task.completed) is False


async def get_task(db: AsyncSession, task_id: int) -> Task:
    task = await crud_task.get(db, task_id)
    if task is None:
        raise NotFoundError(f"Task {task_id} not found")
    return task


async def create_task(db: AsyncSession, data: TaskCreate, now: datetime) -> Task:
    values = data.model_dump()
    if data.task_type == TaskType.recurring:
        values["weekly_plan_id"] = None
        values["completion_target"] = target_for(data.frequency)
    else:
        if data.weekly_plan_id is None:
            raise ValueError("Week-specific tasks require a weekly_plan_id")
        if await crud_weekly_plan.get(db, data.weekly_plan_id) is None:
            raise NotFoundError(f"Weekly plan {data.weekly_plan_id} not found")
        values["completion_target"] = 1
    values["completion_count"] = 0
    values["completed"] = False

    task = await crud_task.create(db, obj_in=values)
    logger.info(
        "Created %s task %d '%s' (%s, target %d)",
        task.task_type.value,
        task.id,
        task.title,
        task.frequency.value,
        task.completion_target,
    )
    await progress_service.recalculate_for_task(db, task, now)
    return task


async def update_task(
    db: AsyncSession, task_id: int, data: TaskUpdate, now: datetime
) -> Task:
    task = await get_task(db, task_id)
    values = data.model_dump(exclude_unset=True)
    for field in _NON_NULLABLE:
        if field in values and values[field] is None:
            values.pop(field)

    if task.task_type == TaskType.recurring:
        # completed is derived from the count and never set directly
        values.pop("completed", None)
        if "frequency" in values:
            values["completion_target"] = target_for(values["frequency"])
    else:
        values.pop("completion_count", None)
        if "completed" in values and values["completed"] != task.completed:
            values.setdefault("last_completed", now if values["completed"] else None)

    if _reopens_once_task(task, values):
        raise CompletedOnceTaskError(f"Task {task.id} is a completed one-time task")

    for field, value in values.items():
        setattr(task, field, value)
    if task.task_type == TaskType.recurring:
        task.completed = task.completion_count >= task.completion_target

    db.add(task)
    await db.flush()
    await progress_service.recalculate_for_task(db, task, now)
    return task


async def toggle_task(
    db: AsyncSession, task_id: int, now: datetime
) -> Optional[ToggleResult]:
    """Toggle a task and refresh its weekly plan. Unknown ids are a no-op (None).

    Callers should hold ``task_lock(task_id)`` until the session is committed.
    """
    task = await crud_task.get(db, task_id)
    if task is None:
        logger.debug("Toggle ignored for unknown task %s", task_id)
        return None

    if not toggle_completion(task, now):
        logger.info("Task %d is a completed one-time task; toggle refused", task.id)
        return ToggleResult(task=task, changed=False)

    db.add(task)
    await db.flush()
    logger.info(
        "Toggled task %d: completed=%s count=%d/%d",
        task.id,
        task.completed,
        task.completion_count,
        task.completion_target,
    )
    await progress_service.recalculate_for_task(db, task, now)
    return ToggleResult(task=task, changed=True)


async def delete_task(db: AsyncSession, task_id: int, now: datetime) -> Task:
    task = await get_task(db, task_id)
    task_type, plan_id = task.task_type, task.weekly_plan_id
    await crud_task.remove(db, id=task_id)

    if task_type == TaskType.recurring:
        await progress_service.recalculate_current(db, now)
    elif plan_id is not None:
        plan = await crud_weekly_plan.get(db, plan_id)
        if plan is not None:
            await progress_service.recalculate_plan(db, plan, now)
    return task


async def run_daily_reset(
    db: AsyncSession, now: datetime, task_ids: Optional[Iterable[int]] = None
) -> list[Task]:
    """Roll back completions whose recurrence window has elapsed, then refresh the current week.

    Candidates are re-read from the database so a toggle committed by another
    session is not overwritten. ``task_ids`` limits the pass to tasks whose
    locks the caller holds; use ``reset_pass`` for that.
    """
    candidates = await crud_task.get_completed_recurring(db, refresh=True)
    if task_ids is not None:
        wanted = set(task_ids)
        candidates = [t for t in candidates if t.id in wanted]
    stale = tasks_to_reset(candidates, now)
    for task in stale:
        apply_reset(task)
        db.add(task)
    if stale:
        await db.flush()
    logger.info("Reset %d tasks based on their frequency", len(stale))
    await progress_service.recalculate_current(db, now)
    return stale


@asynccontextmanager
async def reset_pass(db: AsyncSession, now: datetime) -> AsyncIterator[list[Task]]:
    """Run the daily reset while holding the lock of every candidate task.

    Commit inside the ``async with`` block; the locks are released on exit.
    """
    task_ids = [t.id for t in await crud_task.get_completed_recurring(db)]
    async with hold_task_locks(task_ids):
        yield await run_daily_reset(db, now, task_ids)
