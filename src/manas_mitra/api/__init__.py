"""API routes."""

from fastapi import APIRouter

from .health import router as health_router
from .sessions import router as sessions_router
from .reflections import router as reflections_router
from .resources import router as resources_router

router = APIRouter()
router.include_router(health_router)
router.include_router(sessions_router)
router.include_router(reflections_router)
router.include_router(resources_router)
