"""Domain entity for one known hardware model from a component catalog."""

from dataclasses import dataclass, field, replace
from typing import Any

from ims.domain.entities.component_type import ComponentType


@dataclass(frozen=True)
class CatalogEntry:
    """A normalized catalog model.

    Entries are rebuilt from the catalog document on every load and never
    mutated. ``series`` is ``None`` when the document node has no series;
    ``identifier`` is ``None`` until one is supplied by the document or
    generated during resolution.
    """

    component_type: ComponentType
    brand: str
    series: str | None
    model: str
    attributes: dict[str, Any] = field(default_factory=dict)
    identifier: str | None = None

    @property
    def is_selectable(self) -> bool:
        """Nameless models keep their document position but are never offered."""
        return bool(self.model)

    def with_identifier(self, identifier: str) -> "CatalogEntry":
        return replace(self, identifier=identifier)

    def describe(self) -> str:
        return f"Brand: {self.brand}, Series: {self.series or ''}, Model: {self.model}"
