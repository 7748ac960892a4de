"""APScheduler cron jobs (runs in-process with single uvicorn worker)."""
import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import get_settings
from app.database import AsyncSessionLocal

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def run_reset_pass(now: Optional[datetime] = None) -> int:
    """Reset stale recurring completions and refresh the current week in one transaction."""
    from app.services import task_service

    now = now or datetime.now()
    async with AsyncSessionLocal() as db:
        try:
            async with task_service.reset_pass(db, now) as reset:
                await db.commit()
        except Exception as exc:
            logger.error("Daily reset failed: %s", exc)
            await db.rollback()
            raise
    return len(reset)


async def _daily_reset_job():
    """Cron wrapper: a failed pass is logged and retried on the next run."""
    try:
        await run_reset_pass()
    except Exception:
        logger.exception("Daily reset job failed")


def setup_scheduler():
    """Register all cron jobs. Call once at app startup."""
    settings = get_settings()
    scheduler.add_job(
        _daily_reset_job,
        CronTrigger(hour=settings.DAILY_RESET_HOUR, minute=settings.DAILY_RESET_MINUTE),
        id="daily_reset",
        replace_existing=True,
    )
    logger.info("Scheduler jobs registered: %s", [j.id for j in scheduler.get_jobs()])
