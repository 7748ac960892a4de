from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.schemas.weekly_plan import WeeklyPlanResponse


class TwelveWeekPlanBase(BaseModel):
    title: str = Field(..., max_length=200)
    description: Optional[str] = None
    start_date: date
    end_date: date
    goals: list[str] = Field(default_factory=list, max_length=3)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TwelveWeekPlanCreate(TwelveWeekPlanBase):
    vision_id: Optional[int] = None
    # Create the week 1..12 slots alongside the plan
    create_weeks: bool = True


class TwelveWeekPlanResponse(TwelveWeekPlanBase):
    model_config = {"from_attributes": True}
    id: int
    vision_id: Optional[int]
    created_at: datetime
    updated_at: datetime


class TwelveWeekPlanDetail(TwelveWeekPlanResponse):
    weekly_plans: list[WeeklyPlanResponse] = []
    overall_progress: float = 0.0
