import enum
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.weekly_plan import WeeklyPlan


class TaskFrequency(str, enum.Enum):
    daily = "daily"
    weekdays = "weekdays"
    weekends = "weekends"
    three_times_week = "three_times_week"
    twice_week = "twice_week"
    weekly = "weekly"
    biweekly = "biweekly"
    monthly = "monthly"
    once = "once"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskType(str, enum.Enum):
    recurring = "recurring"
    week_specific = "week_specific"


class Task(Base, TimestampMixin):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority), nullable=False, default=TaskPriority.medium
    )
    frequency: Mapped[TaskFrequency] = mapped_column(
        Enum(TaskFrequency), nullable=False, default=TaskFrequency.weekly
    )
    task_type: Mapped[TaskType] = mapped_column(
        Enum(TaskType), nullable=False, default=TaskType.week_specific
    )
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Recurring tasks only: completed == (completion_count >= completion_target)
    completion_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completion_target: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    last_completed: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    # Null for recurring tasks
    weekly_plan_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("weekly_plans.id", ondelete="CASCADE"), nullable=True
    )

    # Relationships
    weekly_plan: Mapped[Optional["WeeklyPlan"]] = relationship(
        "WeeklyPlan", back_populates="tasks"
    )
