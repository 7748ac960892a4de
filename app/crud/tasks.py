from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.task import Task, TaskType
from app.schemas.task import TaskCreate, TaskUpdate


class CRUDTask(CRUDBase[Task, TaskCreate, TaskUpdate]):
    async def get_all(self, db: AsyncSession) -> Sequence[Task]:
        result = await db.execute(select(Task).order_by(Task.created_at.desc(), Task.id.desc()))
        return result.scalars().all()

    async def get_for_plan(self, db: AsyncSession, weekly_plan_id: int) -> Sequence[Task]:
        """Week-specific tasks bound to one weekly plan."""
        result = await db.execute(
            select(Task)
            .where(
                Task.weekly_plan_id == weekly_plan_id,
                Task.task_type == TaskType.week_specific,
            )
            .order_by(Task.id)
        )
        return result.scalars().all()

    async def get_recurring(self, db: AsyncSession) -> Sequence[Task]:
        result = await db.execute(
            select(Task).where(Task.task_type == TaskType.recurring).order_by(Task.id)
        )
        return result.scalars().all()

    async def get_completed_recurring(
        self, db: AsyncSession, refresh: bool = False
    ) -> Sequence[Task]:
        """Recurring tasks with at least one completion on record.

        ``refresh`` locks the rows and overwrites any copies already in the session.
        """
        stmt = (
            select(Task)
            .where(
                Task.task_type == TaskType.recurring,
                Task.last_completed.is_not(None),
            )
            .order_by(Task.id)
        )
        if refresh:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await db.execute(stmt)
        return result.scalars().all()


crud_task = CRUDTask(Task)
