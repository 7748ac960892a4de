from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.vision import Vision
from app.schemas.vision import VisionUpdate


class CRUDVision(CRUDBase[Vision, VisionUpdate, VisionUpdate]):
    async def get_singleton(self, db: AsyncSession) -> Optional[Vision]:
        result = await db.execute(
            select(Vision).order_by(Vision.created_at.desc(), Vision.id.desc()).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, db: AsyncSession) -> Vision:
        vision = await self.get_singleton(db)
        if vision is None:
            vision = await self.create(
                db, obj_in={"three_year_vision": None, "twelve_week_goals": []}
            )
        return vision


crud_vision = CRUDVision(Vision)
