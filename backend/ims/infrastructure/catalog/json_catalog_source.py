"""Catalog source adapter reading one JSON document per component type."""

import json
import logging
from pathlib import Path
from typing import Any

from ims.application.interfaces import CatalogSource
from ims.domain.entities import ComponentType

logger = logging.getLogger(__name__)


class JsonFileCatalogSource(CatalogSource):
    """Implements the CatalogSource port over a directory of JSON files.

    Documents are read on every call; nothing is cached between requests.
    """

    def __init__(self, catalog_dir: str | Path, file_map: dict[str, str]):
        self._catalog_dir = Path(catalog_dir)
        self._file_map = dict(file_map)

    def path_for(self, component_type: ComponentType) -> Path | None:
        filename = self._file_map.get(component_type.value)
        if not filename:
            return None
        return self._catalog_dir / filename

    def load(self, component_type: ComponentType) -> Any | None:
        path = self.path_for(component_type)
        if path is None:
            logger.debug("No catalog file configured for %s", component_type.value)
            return None
        try:
            if not path.is_file():
                logger.debug("Catalog file %s not found", path)
                return None
            with path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except OSError as exc:
            logger.warning("Could not read catalog file %s: %s", path, exc)
        except (ValueError, RecursionError) as exc:
            # Covers JSONDecodeError, UnicodeDecodeError and over-deep nesting.
            logger.warning("Catalog file %s is not valid JSON: %s", path, exc)
        return None
