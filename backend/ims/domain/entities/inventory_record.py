"""Domain entity for a physical hardware unit tracked in the inventory."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from ims.domain.entities.component_type import ComponentType
from ims.domain.exceptions import InvalidStatusTransitionError, InventoryValidationError


class ComponentStatus(str, Enum):
    """Lifecycle states of an inventory record."""

    AVAILABLE = "available"
    IN_USE = "in_use"
    MAINTENANCE = "maintenance"
    DECOMMISSIONED = "decommissioned"
    FAILED = "failed"

    @classmethod
    def _missing_(cls, value: object) -> "ComponentStatus | None":
        # camelCase spelling and the legacy numeric status codes
        aliases = {
            "inuse": cls.IN_USE,
            "in-use": cls.IN_USE,
            "0": cls.FAILED,
            "1": cls.AVAILABLE,
            "2": cls.IN_USE,
        }
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            key = str(value).strip().lower()
            if key in aliases:
                return aliases[key]
            for member in cls:
                if member.value == key:
                    return member
        return None

    @classmethod
    def parse(cls, value: "ComponentStatus | str | int | None") -> "ComponentStatus":
        """Return the matching member or raise ``InventoryValidationError``."""
        try:
            return cls(value)
        except ValueError:
            raise InventoryValidationError(
                f"Invalid status value: {value}", field="status"
            ) from None


# Only consulted when strict lifecycle enforcement is switched on.
ALLOWED_TRANSITIONS: dict[ComponentStatus, frozenset[ComponentStatus]] = {
    ComponentStatus.AVAILABLE: frozenset({
        ComponentStatus.IN_USE,
        ComponentStatus.MAINTENANCE,
        ComponentStatus.DECOMMISSIONED,
        ComponentStatus.FAILED,
    }),
    ComponentStatus.IN_USE: frozenset({
        ComponentStatus.AVAILABLE,
        ComponentStatus.MAINTENANCE,
        ComponentStatus.DECOMMISSIONED,
        ComponentStatus.FAILED,
    }),
    ComponentStatus.MAINTENANCE: frozenset({
        ComponentStatus.AVAILABLE,
        ComponentStatus.IN_USE,
        ComponentStatus.DECOMMISSIONED,
        ComponentStatus.FAILED,
    }),
    ComponentStatus.FAILED: frozenset({
        ComponentStatus.AVAILABLE,
        ComponentStatus.MAINTENANCE,
        ComponentStatus.DECOMMISSIONED,
    }),
    ComponentStatus.DECOMMISSIONED: frozenset(),
}

EDITABLE_FIELDS: tuple[str, ...] = (
    "status",
    "server_identifier",
    "location",
    "rack_position",
    "purchase_date",
    "installation_date",
    "warranty_end_date",
    "flag",
    "notes",
)
NETWORK_FIELDS: tuple[str, ...] = ("mac_address", "ip_address", "network_name")


def editable_fields_for(component_type: ComponentType) -> tuple[str, ...]:
    """Fields an update may write for the given component type."""
    if component_type.supports_network_fields:
        return EDITABLE_FIELDS + NETWORK_FIELDS
    return EDITABLE_FIELDS


def check_transition(current: ComponentStatus, requested: ComponentStatus) -> None:
    """Raise if ``requested`` is not reachable from ``current`` in strict mode."""
    if current == requested:
        return
    if requested not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current.value, requested.value)


@dataclass
class InventoryRecord:
    """One physical component unit.

    ``identifier`` references a catalog entry or a custom specification and
    is not checked against the catalog. ``identifier`` and ``serial_number``
    never change after creation.
    """

    component_type: ComponentType
    serial_number: str
    status: ComponentStatus = ComponentStatus.AVAILABLE
    identifier: str | None = None
    server_identifier: str | None = None
    location: str | None = None
    rack_position: str | None = None
    purchase_date: date | None = None
    installation_date: date | None = None
    warranty_end_date: date | None = None
    flag: str | None = None
    notes: str | None = None
    mac_address: str | None = None
    ip_address: str | None = None
    network_name: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def needs_server(self) -> bool:
        return self.status == ComponentStatus.IN_USE

    def ensure_server_assignment(self) -> None:
        """An in-use unit must name the server it is installed in."""
        if self.needs_server and not (self.server_identifier or "").strip():
            raise InventoryValidationError(
                "Server identifier is required when status is 'in_use'",
                field="server_identifier",
            )

    def apply_changes(self, changes: dict[str, Any]) -> list[str]:
        """Write the changed editable fields and return their names.

        Values equal to the current ones are skipped; ``updated_at`` is only
        refreshed when something actually changed.
        """
        allowed = editable_fields_for(self.component_type)
        updated: list[str] = []
        for name, value in changes.items():
            if name not in allowed:
                raise InventoryValidationError(
                    f"Field '{name}' cannot be updated", field=name
                )
            if getattr(self, name) != value:
                setattr(self, name, value)
                updated.append(name)
        if updated:
            self.updated_at = datetime.now(timezone.utc)
        return updated
