"""Weekly plan scoping, recalculation and the dashboard summary."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_task, crud_weekly_plan
from app.models.task import Task, TaskType
from app.models.weekly_plan import WeeklyPlan
from app.services.completion_engine import CompletionResult, overall_progress, weighted_completion

logger = logging.getLogger(__name__)


async def resolve_current_plan(db: AsyncSession, now: datetime) -> Optional[WeeklyPlan]:
    """The weekly plan whose date range contains ``now``."""
    return await crud_weekly_plan.get_containing(db, now.date())


async def tasks_for_plan(
    db: AsyncSession,
    plan: WeeklyPlan,
    now: datetime,
    current: Optional[WeeklyPlan] = None,
) -> list[Task]:
    """Week-specific tasks of the plan, plus every recurring task if it is the current week."""
    tasks = list(await crud_task.get_for_plan(db, plan.id))
    if current is None:
        current = await resolve_current_plan(db, now)
    if current is not None and current.id == plan.id:
        tasks.extend(await crud_task.get_recurring(db))
    return tasks


async def recalculate_plan(
    db: AsyncSession,
    plan: WeeklyPlan,
    now: datetime,
    current: Optional[WeeklyPlan] = None,
) -> CompletionResult:
    """Recompute the plan's weighted completion and write it to the row (flush only)."""
    tasks = await tasks_for_plan(db, plan, now, current)
    result = weighted_completion(tasks)
    plan.completion_percentage = result.percentage
    plan.is_successful = result.is_successful
    db.add(plan)
    await db.flush()
    logger.info(
        "Week %d (plan %d): %.1f%% (%.2f/%.2f)%s",
        plan.week_number,
        plan.id,
        result.percentage,
        result.completed_weight,
        result.total_weight,
        " successful" if result.is_successful else "",
    )
    return result


async def recalculate_current(db: AsyncSession, now: datetime) -> Optional[CompletionResult]:
    plan = await resolve_current_plan(db, now)
    if plan is None:
        logger.info("No weekly plan covers %s; nothing to recalculate", now.date())
        return None
    return await recalculate_plan(db, plan, now, current=plan)


async def recalculate_for_task(
    db: AsyncSession, task: Task, now: datetime
) -> Optional[CompletionResult]:
    """Recalculate the plan a task counts toward."""
    if task.task_type == TaskType.recurring:
        return await recalculate_current(db, now)
    if task.weekly_plan_id is None:
        return None
    plan = await crud_weekly_plan.get(db, task.weekly_plan_id)
    if plan is None:
        return None
    return await recalculate_plan(db, plan, now)


async def recalculate_all(db: AsyncSession, now: datetime) -> dict[int, CompletionResult]:
    plans = await crud_weekly_plan.get_all(db)
    current = await resolve_current_plan(db, now)
    results = {}
    for plan in plans:
        results[plan.id] = await recalculate_plan(db, plan, now, current=current)
    return results


async def get_dashboard(db: AsyncSession, now: datetime) -> dict:
    """Current week's live completion next to the overall (cached) progress."""
    plans = list(await crud_weekly_plan.get_all(db))
    current = await resolve_current_plan(db, now)
    current_week = None
    if current is not None:
        current_week = weighted_completion(await tasks_for_plan(db, current, now, current))
    return {
        "current_plan": current,
        "current_week": current_week._asdict() if current_week else None,
        "overall_progress": overall_progress(plans),
        "successful_weeks": sum(1 for p in plans if p.is_successful),
        "total_weeks": len(plans),
    }
