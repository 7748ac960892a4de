"""Twelve-week plan endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import commit_or_503
from app.crud import crud_twelve_week_plan, crud_weekly_plan
from app.database import get_db
from app.schemas.twelve_week_plan import (
    TwelveWeekPlanCreate,
    TwelveWeekPlanDetail,
    TwelveWeekPlanResponse,
)
from app.schemas.weekly_plan import WeeklyPlanResponse
from app.services import plan_service
from app.services.completion_engine import overall_progress

router = APIRouter(prefix="/twelve-week-plans", tags=["twelve-week-plans"])


@router.get("", response_model=list[TwelveWeekPlanResponse])
async def list_twelve_week_plans(db: Annotated[AsyncSession, Depends(get_db)]):
    return await crud_twelve_week_plan.get_all(db)


@router.post("", response_model=TwelveWeekPlanResponse, status_code=201)
async def create_twelve_week_plan(
    body: TwelveWeekPlanCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    plan = await plan_service.create_twelve_week_plan(db, body)
    await commit_or_503(db)
    return plan


@router.get("/{plan_id}", response_model=TwelveWeekPlanDetail)
async def get_twelve_week_plan(plan_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    plan = await crud_twelve_week_plan.get(db, plan_id)
    if not plan:
        raise HTTPException(404, "12-week plan not found")
    weeks = await crud_weekly_plan.get_by_twelve_week_plan(db, plan_id)
    base = TwelveWeekPlanResponse.model_validate(plan)
    return TwelveWeekPlanDetail(
        **base.model_dump(),
        weekly_plans=[WeeklyPlanResponse.model_validate(w) for w in weeks],
        overall_progress=overall_progress(weeks),
    )
