"""Task endpoints."""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import commit_or_503, get_now
from app.crud import crud_task
from app.database import get_db
from app.models.task import TaskType
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from app.services import task_service
from app.services.task_service import CompletedOnceTaskError, NotFoundError

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    db: Annotated[AsyncSession, Depends(get_db)],
    task_type: Optional[TaskType] = None,
):
    tasks = await crud_task.get_all(db)
    if task_type is not None:
        tasks = [t for t in tasks if t.task_type == task_type]
    return tasks


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    try:
        task = await task_service.create_task(db, body, now)
    except NotFoundError as e:
        raise HTTPException(404, str(e)) from e
    except ValueError as e:
        raise HTTPException(422, str(e)) from e
    await commit_or_503(db)
    return task


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    task = await crud_task.get(db, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    async with task_service.task_lock(task_id):
        try:
            task = await task_service.update_task(db, task_id, body, now)
        except NotFoundError as e:
            raise HTTPException(404, "Task not found") from e
        except CompletedOnceTaskError as e:
            raise HTTPException(409, "One-time task is already completed") from e
        await commit_or_503(db)
    return task


@router.post("/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(
    task_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    async with task_service.task_lock(task_id):
        result = await task_service.toggle_task(db, task_id, now)
        if result is None:
            raise HTTPException(404, "Task not found")
        if not result.changed:
            raise HTTPException(409, "One-time task is already completed")
        await commit_or_503(db)
    return result.task


@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    async with task_service.task_lock(task_id):
        try:
            await task_service.delete_task(db, task_id, now)
        except NotFoundError as e:
            raise HTTPException(404, "Task not found") from e
        await commit_or_503(db)
    task_service.forget_task_lock(task_id)
    return {"success": True}
