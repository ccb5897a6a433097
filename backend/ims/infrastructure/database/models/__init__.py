from .inventory import (
    MODEL_BY_TYPE,
    CaddyInventoryModel,
    CpuInventoryModel,
    InventoryColumnsMixin,
    MotherboardInventoryModel,
    NicInventoryModel,
    RamInventoryModel,
    StorageInventoryModel,
)

__all__ = [
    "MODEL_BY_TYPE",
    "CaddyInventoryModel",
    "CpuInventoryModel",
    "InventoryColumnsMixin",
    "MotherboardInventoryModel",
    "NicInventoryModel",
    "RamInventoryModel",
    "StorageInventoryModel",
]
