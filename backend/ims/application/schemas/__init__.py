from .inventory import (
    ApiEnvelope,
    CatalogModelOption,
    CatalogOptions,
    ComponentActionRequest,
    InventoryBulkUpdate,
    InventoryPageResponse,
    InventoryRecordCreate,
    InventoryRecordResponse,
    InventoryRecordUpdate,
)

__all__ = [
    "ApiEnvelope",
    "CatalogModelOption",
    "CatalogOptions",
    "ComponentActionRequest",
    "InventoryBulkUpdate",
    "InventoryPageResponse",
    "InventoryRecordCreate",
    "InventoryRecordResponse",
    "InventoryRecordUpdate",
]
