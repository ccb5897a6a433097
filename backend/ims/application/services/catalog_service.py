"""Application service for catalog lookups.

Each call loads and normalizes the catalog document afresh and answers from
a request-scoped ``CatalogSelection``. An unavailable catalog never raises;
it only yields empty option lists so that manual entry keeps working.
"""

import logging

from ims.application.interfaces import CatalogSource
from ims.application.schemas.inventory import CatalogModelOption, CatalogOptions
from ims.application.services.catalog_normalizer import normalize_catalog
from ims.application.services.catalog_resolver import CatalogSelection
from ims.domain.entities import SPECIFICATION_CHOICES, CatalogEntry, ComponentType

logger = logging.getLogger(__name__)


class CatalogService:
    """Loads catalogs through the source port and resolves selections."""

    def __init__(self, source: CatalogSource):
        self._source = source

    def selection(self, component_type: ComponentType) -> CatalogSelection:
        document = self._source.load(component_type)
        entries = normalize_catalog(component_type, document)
        logger.debug(
            "Loaded %d catalog entries for %s", len(entries), component_type.value
        )
        return CatalogSelection(component_type=component_type, entries=entries)

    def options(
        self,
        component_type: ComponentType,
        brand: str | None = None,
        series: str | None = None,
    ) -> CatalogOptions:
        """Brands always; series and models once a brand is chosen."""
        selection = self.selection(component_type)
        options = CatalogOptions(
            component_type=component_type,
            catalog_available=selection.available,
            brands=selection.brands(),
            custom_specification=SPECIFICATION_CHOICES.get(component_type),
        )
        brand = (brand or "").strip() or None
        if brand is None:
            return options

        series = (series or "").strip() or None
        options.brand = brand
        options.series = selection.series(brand)
        options.models = [
            CatalogModelOption.model_validate(entry)
            for entry in selection.models(brand, series)
        ]
        return options

    def find_entry(
        self, component_type: ComponentType, identifier: str | None
    ) -> CatalogEntry | None:
        """Catalog entry an inventory record's identifier points at, if any."""
        if not identifier:
            return None
        return self.selection(component_type).find(identifier)

    def is_available(self, component_type: ComponentType) -> bool:
        return self.selection(component_type).available
