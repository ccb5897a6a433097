from .catalog_source import CatalogSource
from .inventory_record_repository import InventoryRecordRepository

__all__ = [
    "CatalogSource",
    "InventoryRecordRepository",
]
