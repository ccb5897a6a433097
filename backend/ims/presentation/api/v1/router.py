"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from ims.presentation.api.v1.endpoints.health import router as health_router
from ims.presentation.api.v1.endpoints.components import router as components_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(components_router)
