from datetime import date
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.weekly_plan import WeeklyPlan
from app.schemas.weekly_plan import WeeklyPlanCreate, WeeklyPlanUpdate


class CRUDWeeklyPlan(CRUDBase[WeeklyPlan, WeeklyPlanCreate, WeeklyPlanUpdate]):
    async def get_all(self, db: AsyncSession) -> Sequence[WeeklyPlan]:
        result = await db.execute(
            select(WeeklyPlan).order_by(WeeklyPlan.start_date, WeeklyPlan.week_number)
        )
        return result.scalars().all()

    async def get_with_tasks(self, db: AsyncSession, plan_id: int) -> Optional[WeeklyPlan]:
        result = await db.execute(
            select(WeeklyPlan)
            .options(selectinload(WeeklyPlan.tasks))
            .where(WeeklyPlan.id == plan_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_containing(self, db: AsyncSession, day: date) -> Optional[WeeklyPlan]:
        """The plan whose window covers ``day``; earliest week wins on overlap."""
        result = await db.execute(
            select(WeeklyPlan)
            .where(WeeklyPlan.start_date <= day, WeeklyPlan.end_date >= day)
            .order_by(WeeklyPlan.start_date, WeeklyPlan.week_number, WeeklyPlan.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_by_twelve_week_plan(
        self, db: AsyncSession, twelve_week_plan_id: int
    ) -> Sequence[WeeklyPlan]:
        result = await db.execute(
            select(WeeklyPlan)
            .where(WeeklyPlan.twelve_week_plan_id == twelve_week_plan_id)
            .order_by(WeeklyPlan.week_number)
        )
        return result.scalars().all()


crud_weekly_plan = CRUDWeeklyPlan(WeeklyPlan)
