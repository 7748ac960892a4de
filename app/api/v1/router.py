"""Aggregates all v1 routers."""
from fastapi import APIRouter
from app.api.v1.tasks import router as tasks_router
from app.api.v1.weekly_plans import router as weekly_plans_router
from app.api.v1.twelve_week_plans import router as twelve_week_plans_router
from app.api.v1.vision import router as vision_router
from app.api.v1.progress import router as progress_router

router = APIRouter()
router.include_router(tasks_router)
router.include_router(weekly_plans_router)
router.include_router(twelve_week_plans_router)
router.include_router(vision_router)
router.include_router(progress_router)
