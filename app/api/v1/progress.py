"""Dashboard progress and the manual reset trigger."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import commit_or_503, get_now
from app.database import get_db
from app.schemas.progress import DashboardResponse, ResetResult
from app.services import progress_service, task_service

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("", response_model=DashboardResponse)
async def get_progress(
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    return await progress_service.get_dashboard(db, now)


@router.post("/reset", response_model=ResetResult)
async def run_reset(
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    async with task_service.reset_pass(db, now) as reset:
        await commit_or_503(db)
    return {"reset_count": len(reset), "tasks": reset}
