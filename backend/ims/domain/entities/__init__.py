from .component_type import ComponentType
from .catalog_entry import CatalogEntry
from .custom_specification import (
    CustomSpecification,
    SPECIFICATION_CHOICES,
    SPECIFICATION_FIELDS,
)
from .inventory_record import (
    ALLOWED_TRANSITIONS,
    EDITABLE_FIELDS,
    NETWORK_FIELDS,
    ComponentStatus,
    InventoryRecord,
    check_transition,
    editable_fields_for,
)

__all__ = [
    "ComponentType",
    "CatalogEntry",
    "CustomSpecification",
    "SPECIFICATION_CHOICES",
    "SPECIFICATION_FIELDS",
    "ALLOWED_TRANSITIONS",
    "EDITABLE_FIELDS",
    "NETWORK_FIELDS",
    "ComponentStatus",
    "InventoryRecord",
    "check_transition",
    "editable_fields_for",
]
