from .catalog_service import CatalogService
from .catalog_resolver import CatalogSelection, brands_of, models_of, series_of
from .inventory_service import (
    BulkUpdateOutcome,
    InventoryPage,
    InventoryService,
    UpdateOutcome,
)

__all__ = [
    "CatalogService",
    "CatalogSelection",
    "brands_of",
    "models_of",
    "series_of",
    "BulkUpdateOutcome",
    "InventoryPage",
    "InventoryService",
    "UpdateOutcome",
]
