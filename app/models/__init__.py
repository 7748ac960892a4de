from app.models.base import Base, TimestampMixin
from app.models.vision import Vision
from app.models.twelve_week_plan import TwelveWeekPlan
from app.models.weekly_plan import WeeklyPlan
from app.models.task import Task, TaskFrequency, TaskPriority, TaskType

__all__ = [
    "Base",
    "TimestampMixin",
    "Vision",
    "TwelveWeekPlan",
    "WeeklyPlan",
    "Task",
    "TaskFrequency",
    "TaskPriority",
    "TaskType",
]
