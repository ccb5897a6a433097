"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ims.config import get_settings
from ims.application.services import CatalogService, InventoryService
from ims.infrastructure.catalog import JsonFileCatalogSource
from ims.infrastructure.database.session import get_db_session
from ims.infrastructure.database.repositories import SQLAlchemyInventoryRecordRepository


def get_catalog_service() -> CatalogService:
    """Provides a CatalogService reading the configured catalog directory."""
    settings = get_settings()
    source = JsonFileCatalogSource(settings.catalog_dir, settings.catalog_files)
    return CatalogService(source)


async def get_inventory_service(
    session: AsyncSession = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> AsyncGenerator[InventoryService, None]:
    """Provides an InventoryService with its repository and catalog wired up."""
    settings = get_settings()
    repository = SQLAlchemyInventoryRecordRepository(session)
    yield InventoryService(
        repository,
        catalog,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
        enforce_status_transitions=settings.enforce_status_transitions,
    )
