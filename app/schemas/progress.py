from typing import Optional

from pydantic import BaseModel

from app.schemas.task import TaskResponse
from app.schemas.weekly_plan import WeeklyPlanResponse


class CompletionSummary(BaseModel):
    percentage: float
    is_successful: bool
    total_weight: float
    completed_weight: float
    completed_count: int
    total_count: int


class DashboardResponse(BaseModel):
    current_plan: Optional[WeeklyPlanResponse]
    current_week: Optional[CompletionSummary]
    overall_progress: float
    successful_weeks: int
    total_weeks: int


class ResetResult(BaseModel):
    reset_count: int
    tasks: list[TaskResponse]
