"""Weekly plan endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import commit_or_503, get_now
from app.crud import crud_weekly_plan
from app.database import get_db
from app.schemas.progress import CompletionSummary
from app.schemas.weekly_plan import (
    WeeklyPlanCreate,
    WeeklyPlanDetail,
    WeeklyPlanResponse,
    WeeklyPlanUpdate,
)
from app.services import plan_service, progress_service
from app.services.task_service import NotFoundError

router = APIRouter(prefix="/weekly-plans", tags=["weekly-plans"])


@router.get("", response_model=list[WeeklyPlanResponse])
async def list_weekly_plans(db: Annotated[AsyncSession, Depends(get_db)]):
    return await crud_weekly_plan.get_all(db)


@router.post("", response_model=WeeklyPlanResponse, status_code=201)
async def create_weekly_plan(
    body: WeeklyPlanCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    try:
        plan = await plan_service.create_weekly_plan(db, body)
    except NotFoundError as e:
        raise HTTPException(404, str(e)) from e
    await commit_or_503(db)
    return plan


@router.get("/current", response_model=WeeklyPlanResponse)
async def get_current_weekly_plan(
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    plan = await progress_service.resolve_current_plan(db, now)
    if not plan:
        raise HTTPException(404, "No weekly plan covers today")
    return plan


@router.get("/{plan_id}", response_model=WeeklyPlanDetail)
async def get_weekly_plan(plan_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    plan = await crud_weekly_plan.get_with_tasks(db, plan_id)
    if not plan:
        raise HTTPException(404, "Weekly plan not found")
    return plan


@router.patch("/{plan_id}", response_model=WeeklyPlanResponse)
async def update_weekly_plan(
    plan_id: int,
    body: WeeklyPlanUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    try:
        plan = await plan_service.update_weekly_plan(db, plan_id, body, now)
    except NotFoundError as e:
        raise HTTPException(404, "Weekly plan not found") from e
    except ValueError as e:
        raise HTTPException(422, str(e)) from e
    await commit_or_503(db)
    return plan


@router.post("/{plan_id}/recalculate", response_model=CompletionSummary)
async def recalculate_weekly_plan(
    plan_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    plan = await crud_weekly_plan.get(db, plan_id)
    if not plan:
        raise HTTPException(404, "Weekly plan not found")
    result = await progress_service.recalculate_plan(db, plan, now)
    await commit_or_503(db)
    return result._asdict()


@router.delete("/{plan_id}")
async def delete_weekly_plan(plan_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    try:
        await plan_service.delete_weekly_plan(db, plan_id)
    except NotFoundError as e:
        raise HTTPException(404, "Weekly plan not found") from e
    await commit_or_503(db)
    return {"success": True}
