"""Domain-specific exceptions: framework-independent."""

from typing import Any


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class InventoryValidationError(Exception):
    """Raised for caller-correctable input problems (missing serial, bad id, ...)."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class InvalidComponentTypeError(InventoryValidationError):
    """Raised when a component type selector is not one of the known kinds."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid component type: {value}", field="type")


class InvalidStatusTransitionError(InventoryValidationError):
    """Raised in strict lifecycle mode when a status change is not allowed."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Status cannot change from '{current}' to '{requested}'", field="status"
        )


class ComponentInUseError(Exception):
    """Raised when deleting an in-use component without forcing it."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.message = (
            "Cannot delete component that is currently in use. Use force=true to override."
        )
        super().__init__(self.message)


class InventoryPersistenceError(Exception):
    """Raised when the store fails for a reason the caller cannot correct.

    The message stays generic; the underlying error is only logged.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__("An unexpected error occurred")
