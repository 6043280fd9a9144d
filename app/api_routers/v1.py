from fastapi import APIRouter

from app.features.assistant.routes.assistant import router as assistant_router
from app.features.health.routes.health import router as health_router
from app.features.platform_detection.routes.platform import router as platform_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(health_router)
api_router.include_router(platform_router)
api_router.include_router(assistant_router)
