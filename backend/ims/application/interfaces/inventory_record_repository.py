"""Abstract repository interface (port) for InventoryRecord persistence."""

from abc import ABC, abstractmethod

from ims.domain.entities import ComponentStatus, ComponentType, InventoryRecord


class InventoryRecordRepository(ABC):
    """Port for inventory persistence: one logical table per component type."""

    @abstractmethod
    async def get_by_id(
        self, component_type: ComponentType, record_id: int
    ) -> InventoryRecord | None:
        """Retrieve a single record by its surrogate key."""
        ...

    @abstractmethod
    async def get_by_serial(
        self, component_type: ComponentType, serial_number: str
    ) -> InventoryRecord | None:
        """Retrieve a record by serial number (unique per component type)."""
        ...

    @abstractmethod
    async def get_all(
        self,
        component_type: ComponentType,
        *,
        status: ComponentStatus | None = None,
        search: str | None = None,
        sort_by: str = "created_at",
        descending: bool = True,
        skip: int = 0,
        limit: int = 50,
    ) -> list[InventoryRecord]:
        """Retrieve a filtered, ordered, paginated list of records."""
        ...

    @abstractmethod
    async def count(
        self,
        component_type: ComponentType,
        *,
        status: ComponentStatus | None = None,
        search: str | None = None,
    ) -> int:
        """Count records matching the same filters as ``get_all``."""
        ...

    @abstractmethod
    async def count_by_status(
        self, component_type: ComponentType, *, search: str | None = None
    ) -> dict[ComponentStatus, int]:
        """Per-status record counts, ignoring any status filter."""
        ...

    @abstractmethod
    async def create(self, record: InventoryRecord) -> InventoryRecord:
        """Persist a new record and return it with its assigned id.

        Raises DuplicateEntityError when the serial number already exists.
        """
        ...

    @abstractmethod
    async def update(self, record: InventoryRecord) -> InventoryRecord:
        """Write the editable fields of an existing record."""
        ...

    @abstractmethod
    async def delete(self, component_type: ComponentType, record_id: int) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...
