"""Task MCP tools: list and toggle."""

from datetime import datetime
from typing import Optional

from app.crud import crud_task
from app.database import AsyncSessionLocal
from app.mcp.server import mcp
from app.models.task import Task, TaskType
from app.services import task_service


def _parse_task_type(value: Optional[str]) -> Optional[TaskType]:
    if not value:
        return None
    try:
        return TaskType(value.strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in TaskType)
        raise ValueError(f"Unknown task type '{value}'. Use one of: {allowed}") from None


def _task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "title": task.title,
        "category": task.category,
        "priority": task.priority.value,
        "frequency": task.frequency.value,
        "task_type": task.task_type.value,
        "completed": task.completed,
        "completion_count": task.completion_count,
        "completion_target": task.completion_target,
        "last_completed": task.last_completed.isoformat() if task.last_completed else None,
        "weekly_plan_id": task.weekly_plan_id,
    }


@mcp.tool()
async def list_tasks(task_type: Optional[str] = None) -> list[dict]:
    """List tasks, optionally filtered by type ('recurring' or 'week_specific')."""
    wanted = _parse_task_type(task_type)
    async with AsyncSessionLocal() as db:
        tasks = await crud_task.get_all(db)
        return [_task_to_dict(t) for t in tasks if wanted is None or t.task_type == wanted]


@mcp.tool()
async def toggle_task(task_id: int) -> dict:
    """Toggle a task's completion and refresh the weekly percentage it counts toward."""
    now = datetime.now()
    async with task_service.task_lock(task_id):
        async with AsyncSessionLocal() as db:
            result = await task_service.toggle_task(db, task_id, now)
            if result is None:
                raise ValueError(f"Task {task_id} not found")
            if not result.changed:
                return {
                    "changed": False,
                    "reason": "One-time task is already completed",
                    "task": _task_to_dict(result.task),
                }
            try:
                await db.commit()
            except Exception:
                await db.rollback()
                raise
            return {"changed": True, "task": _task_to_dict(result.task)}
