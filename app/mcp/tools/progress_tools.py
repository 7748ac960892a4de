"""Progress MCP tools: dashboard summary and reset pass."""

from datetime import datetime

from app.database import AsyncSessionLocal
from app.mcp.server import mcp
from app.services import progress_service
from app.services.scheduler_service import run_reset_pass


def _summary_to_dict(summary: dict) -> dict:
    plan = summary["current_plan"]
    week = summary["current_week"]
    return {
        "current_week_number": plan.week_number if plan else None,
        "current_week_percentage": round(week["percentage"], 2) if week else None,
        "current_week_successful": week["is_successful"] if week else False,
        "overall_progress": round(summary["overall_progress"], 2),
        "successful_weeks": summary["successful_weeks"],
        "total_weeks": summary["total_weeks"],
    }


@mcp.tool()
async def get_progress() -> dict:
    """Current week's weighted completion and overall 12-week progress."""
    async with AsyncSessionLocal() as db:
        summary = await progress_service.get_dashboard(db, datetime.now())
        return _summary_to_dict(summary)


@mcp.tool()
async def run_reset() -> dict:
    """Run the recurrence reset pass now. Safe to repeat within a day."""
    count = await run_reset_pass()
    return {"reset_count": count}
