"""Catalog resolver: brand, series and model queries over normalized entries.

All queries keep document order and deduplicate exactly. Nameless entries
still count towards a model's index inside its brand/series listing, which
is what generated identifiers are keyed on.
"""

from dataclasses import dataclass, field

from ims.domain.entities import CatalogEntry, ComponentType
from ims.domain.identity_generator import catalog_identifier


def brands_of(entries: list[CatalogEntry]) -> list[str]:
    """Distinct non-empty brands in first-appearance order."""
    seen: dict[str, None] = {}
    for entry in entries:
        if entry.brand:
            seen.setdefault(entry.brand, None)
    return list(seen)


def series_of(entries: list[CatalogEntry], brand: str) -> list[str]:
    """Distinct non-empty series of a brand in first-appearance order."""
    seen: dict[str, None] = {}
    for entry in entries:
        if entry.brand == brand and entry.series:
            seen.setdefault(entry.series, None)
    return list(seen)


def models_of(
    entries: list[CatalogEntry], brand: str, series: str | None = None
) -> list[CatalogEntry]:
    """Entries of a brand (and series, when given) with their parent tags.

    Without a series, every entry of the brand is returned regardless of
    series. Nameless entries are included; callers offering choices filter
    them with ``CatalogEntry.is_selectable``.
    """
    return [
        entry
        for entry in entries
        if entry.brand == brand and (series is None or entry.series == series)
    ]


def assign_identifiers(models: list[CatalogEntry]) -> list[CatalogEntry]:
    """Give every entry of one brand/series listing an identifier.

    A document identifier wins; otherwise one is generated from the brand,
    series, model and the entry's position in ``models``.
    """
    return [
        entry if entry.identifier else entry.with_identifier(catalog_identifier(entry, index))
        for index, entry in enumerate(models)
    ]


@dataclass
class CatalogSelection:
    """Request-scoped view over one component type's catalog.

    Built fresh for each request from the freshly loaded entries, so
    concurrent requests never share selection state.
    """

    component_type: ComponentType
    entries: list[CatalogEntry] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return bool(self.entries)

    def brands(self) -> list[str]:
        return brands_of(self.entries)

    def series(self, brand: str) -> list[str]:
        return series_of(self.entries, brand)

    def models(self, brand: str, series: str | None = None) -> list[CatalogEntry]:
        """Selectable models with identifiers, as offered to a caller."""
        if series is None:
            # Identifiers are positional per series; resolve each listing separately.
            groups: dict[str | None, None] = {}
            for entry in models_of(self.entries, brand):
                groups.setdefault(entry.series, None)
            resolved: list[CatalogEntry] = []
            for group in groups:
                resolved.extend(self._listing(brand, group))
            return [entry for entry in resolved if entry.is_selectable]
        return [entry for entry in self._listing(brand, series) if entry.is_selectable]

    def find(self, identifier: str) -> CatalogEntry | None:
        """Look up the entry whose document or generated identifier matches."""
        wanted = identifier.strip().lower()
        if not wanted:
            return None
        listings: dict[tuple[str, str | None], None] = {}
        for entry in self.entries:
            listings.setdefault((entry.brand, entry.series), None)
        for brand, series in listings:
            for entry in self._listing(brand, series):
                if entry.identifier and entry.identifier.lower() == wanted:
                    return entry
        return None

    def _listing(self, brand: str, series: str | None) -> list[CatalogEntry]:
        exact = [e for e in self.entries if e.brand == brand and e.series == series]
        return assign_identifiers(exact)
