from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from app.schemas.weekly_plan import (
    WeeklyPlanCreate,
    WeeklyPlanUpdate,
    WeeklyPlanResponse,
    WeeklyPlanDetail,
)
from app.schemas.twelve_week_plan import (
    TwelveWeekPlanCreate,
    TwelveWeekPlanResponse,
    TwelveWeekPlanDetail,
)
from app.schemas.vision import VisionUpdate, VisionResponse
from app.schemas.progress import CompletionSummary, DashboardResponse, ResetResult
