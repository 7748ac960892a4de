"""Vision endpoints (single implicit user)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import commit_or_503
from app.crud import crud_vision
from app.database import get_db
from app.schemas.vision import VisionResponse, VisionUpdate

router = APIRouter(prefix="/vision", tags=["vision"])


@router.get("", response_model=VisionResponse)
async def get_vision(db: Annotated[AsyncSession, Depends(get_db)]):
    vision = await crud_vision.get_or_create(db)
    await commit_or_503(db)
    return vision


@router.put("", response_model=VisionResponse)
async def update_vision(body: VisionUpdate, db: Annotated[AsyncSession, Depends(get_db)]):
    vision = await crud_vision.get_or_create(db)
    vision = await crud_vision.update(
        db,
        db_obj=vision,
        obj_in={
            "three_year_vision": body.three_year_vision or "",
            "twelve_week_goals": list(body.twelve_week_goals),
        },
    )
    await commit_or_503(db)
    return vision
