"""Component type enumeration: the fixed set of tracked hardware kinds."""

from enum import Enum

from ims.domain.exceptions import InvalidComponentTypeError


class ComponentType(str, Enum):
    """Hardware component kinds, one inventory table and one catalog each."""

    CPU = "cpu"
    RAM = "ram"
    MOTHERBOARD = "motherboard"
    STORAGE = "storage"
    CADDY = "caddy"
    NIC = "nic"

    @classmethod
    def parse(cls, value: "ComponentType | str | None") -> "ComponentType":
        """Return the matching member or raise ``InvalidComponentTypeError``."""
        if isinstance(value, cls):
            return value
        normalized = (value or "").strip().lower() if isinstance(value, str) else ""
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidComponentTypeError(value) from None

    @property
    def supports_network_fields(self) -> bool:
        return self is ComponentType.NIC

    @property
    def supports_custom_specification(self) -> bool:
        """RAM, storage and caddy may be recorded without catalog backing."""
        return self in (ComponentType.RAM, ComponentType.STORAGE, ComponentType.CADDY)
