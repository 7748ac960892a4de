from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.task import TaskFrequency, TaskPriority, TaskType


def _lower(v):
    # Stored lower-case; older clients send DAILY / WEEK_SPECIFIC
    return v.strip().lower() if isinstance(v, str) else v


class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    priority: TaskPriority = TaskPriority.medium
    frequency: TaskFrequency = TaskFrequency.weekly
    due_date: Optional[date] = None

    @field_validator("priority", "frequency", mode="before")
    @classmethod
    def normalise_case(cls, v):
        return _lower(v)


class TaskCreate(TaskBase):
    task_type: TaskType = TaskType.week_specific
    weekly_plan_id: Optional[int] = None

    @field_validator("task_type", mode="before")
    @classmethod
    def normalise_task_type(cls, v):
        return _lower(v)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    priority: Optional[TaskPriority] = None
    frequency: Optional[TaskFrequency] = None
    due_date: Optional[date] = None
    completed: Optional[bool] = None
    completion_count: Optional[int] = Field(None, ge=0)
    last_completed: Optional[datetime] = None

    @field_validator("priority", "frequency", mode="before")
    @classmethod
    def normalise_case(cls, v):
        return _lower(v)


class TaskResponse(TaskBase):
    model_config = {"from_attributes": True}
    id: int
    task_type: TaskType
    completed: bool
    completion_count: int
    completion_target: int
    last_completed: Optional[datetime]
    weekly_plan_id: Optional[int]
    created_at: datetime
    updated_at: datetime
