from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Date, Float, ForeignKey, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.task import Task
    from app.models.twelve_week_plan import TwelveWeekPlan


class WeeklyPlan(Base, TimestampMixin):
    __tablename__ = "weekly_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    twelve_week_plan_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("twelve_week_plans.id"), nullable=True
    )
    week_number: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 1-12
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    # Materialised weighted completion, rewritten whenever a constituent task changes
    completion_percentage: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    is_successful: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    twelve_week_plan: Mapped[Optional["TwelveWeekPlan"]] = relationship(
        "TwelveWeekPlan", back_populates="weekly_plans"
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task",
        back_populates="weekly_plan",
        cascade="all, delete-orphan",
        order_by="Task.id",
    )

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
