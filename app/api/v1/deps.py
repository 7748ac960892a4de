"""FastAPI dependencies."""

import logging
from datetime import datetime

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


async def get_now() -> datetime:
    """Request clock; overridden in tests."""
    return datetime.now()


async def commit_or_503(db: AsyncSession) -> None:
    """Commit the request's changes; on failure roll back so no computed value is kept."""
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        logger.error("Persisting changes failed: %s", exc)
        await db.rollback()
        raise HTTPException(status_code=503, detail="Failed to persist changes") from exc
