"""Abstract interface (port) for reading raw catalog documents."""

from abc import ABC, abstractmethod
from typing import Any

from ims.domain.entities import ComponentType


class CatalogSource(ABC):
    """Port for catalog document access: implemented in the infrastructure layer."""

    @abstractmethod
    def load(self, component_type: ComponentType) -> Any | None:
        """Return the parsed catalog document for a type.

        Returns None when the document is missing, unreadable or not valid
        JSON. Implementations must never raise for those cases.
        """
        ...
