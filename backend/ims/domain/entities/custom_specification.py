"""Domain entity for a component configuration declared without catalog backing."""

import time
from dataclasses import dataclass, field

from ims.domain.entities.component_type import ComponentType
from ims.domain.exceptions import InventoryValidationError

# Required fields per type, in serialization order.
SPECIFICATION_FIELDS: dict[ComponentType, tuple[str, ...]] = {
    ComponentType.RAM: ("type", "ecc", "size"),
    ComponentType.STORAGE: ("type", "capacity"),
    ComponentType.CADDY: ("type",),
}

# Values offered for manual entry.
SPECIFICATION_CHOICES: dict[ComponentType, dict[str, list[str]]] = {
    ComponentType.RAM: {
        "type": ["DDR4", "DDR5"],
        "ecc": ["Yes", "No"],
        "size": ["16GB", "32GB", "64GB", "128GB"],
    },
    ComponentType.STORAGE: {
        "type": ["HDD", "SSD"],
        "capacity": ["120", "240", "480", "960", "1920", "3840", "7680"],
    },
    ComponentType.CADDY: {
        "type": ["2.5 Inch", "3.5 Inch"],
    },
}

_LABELS = {"type": "Type", "ecc": "ECC", "size": "Size", "capacity": "Capacity"}


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CustomSpecification:
    """A user-declared RAM, storage or caddy configuration.

    ``created_at_ms`` is part of the identifier key, so the same logical
    configuration declared twice gets two different identifiers.
    """

    component_type: ComponentType
    fields: dict[str, str]
    created_at_ms: int = field(default_factory=_now_ms)

    @classmethod
    def build(
        cls,
        component_type: ComponentType,
        fields: dict[str, object],
        created_at_ms: int | None = None,
    ) -> "CustomSpecification":
        """Validate and normalize user input into a specification."""
        required = SPECIFICATION_FIELDS.get(component_type)
        if required is None:
            raise InventoryValidationError(
                f"Custom specifications are not supported for {component_type.value}",
                field="specification",
            )
        lowered = {str(k).strip().lower(): v for k, v in fields.items()}
        cleaned: dict[str, str] = {}
        for name in required:
            value = str(lowered.get(name) or "").strip()
            if not value:
                raise InventoryValidationError(
                    f"Specification field missing: {name}", field="specification"
                )
            cleaned[name] = value
        if created_at_ms is None:
            return cls(component_type=component_type, fields=cleaned)
        return cls(component_type=component_type, fields=cleaned, created_at_ms=created_at_ms)

    def serialize_fields(self) -> str:
        """Join field values in declaration order; storage capacity carries its unit."""
        values = []
        for name in SPECIFICATION_FIELDS[self.component_type]:
            value = self.fields[name]
            if self.component_type is ComponentType.STORAGE and name == "capacity":
                value = f"{value}GB"
            values.append(value)
        return "-".join(values)

    def composite_key(self) -> str:
        return f"{self.component_type.value}-{self.serialize_fields()}-{self.created_at_ms}"

    def describe(self) -> str:
        """Human-readable summary attached to the inventory record's notes."""
        parts = []
        for name in SPECIFICATION_FIELDS[self.component_type]:
            value = self.fields[name]
            if self.component_type is ComponentType.STORAGE and name == "capacity":
                value = f"{value}GB"
            parts.append(f"{_LABELS[name]}: {value}")
        return ", ".join(parts)
