from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.schemas.task import TaskResponse


class WeeklyPlanBase(BaseModel):
    week_number: int = Field(..., ge=1, le=12)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class WeeklyPlanCreate(WeeklyPlanBase):
    twelve_week_plan_id: Optional[int] = None


class WeeklyPlanUpdate(BaseModel):
    week_number: Optional[int] = Field(None, ge=1, le=12)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class WeeklyPlanResponse(WeeklyPlanBase):
    model_config = {"from_attributes": True}
    id: int
    twelve_week_plan_id: Optional[int]
    completion_percentage: float
    is_successful: bool
    created_at: datetime
    updated_at: datetime


class WeeklyPlanDetail(WeeklyPlanResponse):
    tasks: list[TaskResponse] = []
