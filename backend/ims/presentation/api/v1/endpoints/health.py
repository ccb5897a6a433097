"""Health check endpoint: no database access, always available."""

from fastapi import APIRouter, Depends

from ims.application.services import CatalogService
from ims.config import get_settings
from ims.domain.entities import ComponentType
from ims.infrastructure.dependencies import get_catalog_service

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    catalog: CatalogService = Depends(get_catalog_service),
) -> dict:
    """Returns the application health status and which catalogs are loadable."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "catalogs": {ct.value: catalog.is_available(ct) for ct in ComponentType},
    }
