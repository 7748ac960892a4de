from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.twelve_week_plan import TwelveWeekPlan
from app.schemas.twelve_week_plan import TwelveWeekPlanCreate, TwelveWeekPlanResponse


class CRUDTwelveWeekPlan(CRUDBase[TwelveWeekPlan, TwelveWeekPlanCreate, TwelveWeekPlanResponse]):
    async def get_all(self, db: AsyncSession) -> Sequence[TwelveWeekPlan]:
        result = await db.execute(select(TwelveWeekPlan).order_by(TwelveWeekPlan.start_date.desc()))
        return result.scalars().all()


crud_twelve_week_plan = CRUDTwelveWeekPlan(TwelveWeekPlan)
