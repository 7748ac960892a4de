from app.crud.tasks import crud_task
from app.crud.weekly_plans import crud_weekly_plan
from app.crud.twelve_week_plans import crud_twelve_week_plan
from app.crud.visions import crud_vision

__all__ = [
    "crud_task",
    "crud_weekly_plan",
    "crud_twelve_week_plan",
    "crud_vision",
]
