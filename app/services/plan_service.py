"""Twelve-week plans and their weekly slots."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import crud_twelve_week_plan, crud_weekly_plan
from app.models.twelve_week_plan import TwelveWeekPlan
from app.models.weekly_plan import WeeklyPlan
from app.schemas.twelve_week_plan import TwelveWeekPlanCreate
from app.schemas.weekly_plan import WeeklyPlanCreate, WeeklyPlanUpdate
from app.services import progress_service
from app.services.task_service import NotFoundError

logger = logging.getLogger(__name__)

WEEKS_PER_PLAN = 12


async def create_twelve_week_plan(db: AsyncSession, data: TwelveWeekPlanCreate) -> TwelveWeekPlan:
    plan = await crud_twelve_week_plan.create(
        db, obj_in=data.model_dump(exclude={"create_weeks"})
    )
    if data.create_weeks:
        for week in range(1, WEEKS_PER_PLAN + 1):
            week_start = data.start_date + timedelta(days=(week - 1) * 7)
            db.add(
                WeeklyPlan(
                    twelve_week_plan_id=plan.id,
                    week_number=week,
                    start_date=week_start,
                    end_date=week_start + timedelta(days=6),
                )
            )
        await db.flush()
    logger.info("Created 12-week plan %d '%s' starting %s", plan.id, plan.title, plan.start_date)
    return plan


async def create_weekly_plan(db: AsyncSession, data: WeeklyPlanCreate) -> WeeklyPlan:
    if data.twelve_week_plan_id is not None:
        if await crud_twelve_week_plan.get(db, data.twelve_week_plan_id) is None:
            raise NotFoundError(f"12-week plan {data.twelve_week_plan_id} not found")
    return await crud_weekly_plan.create(db, obj_in=data)


async def update_weekly_plan(
    db: AsyncSession, plan_id: int, data: WeeklyPlanUpdate, now: datetime
) -> WeeklyPlan:
    plan = await crud_weekly_plan.get(db, plan_id)
    if plan is None:
        raise NotFoundError(f"Weekly plan {plan_id} not found")
    values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
    start = values.get("start_date", plan.start_date)
    end = values.get("end_date", plan.end_date)
    if end < start:
        raise ValueError("end_date must not be before start_date")
    plan = await crud_weekly_plan.update(db, db_obj=plan, obj_in=values)
    # Moving the window can change which plan owns the recurring tasks
    await progress_service.recalculate_all(db, now)
    return plan


async def delete_weekly_plan(db: AsyncSession, plan_id: int) -> WeeklyPlan:
    plan = await crud_weekly_plan.remove(db, id=plan_id)
    if plan is None:
        raise NotFoundError(f"Weekly plan {plan_id} not found")
    return plan
