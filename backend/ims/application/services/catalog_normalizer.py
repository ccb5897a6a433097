"""Catalog normalizer: flattens per-type catalog documents into CatalogEntry lists.

Three document shapes exist, one normalization function each:

    brand list   (cpu, motherboard, ram, storage)
        [{"brand": ..., "series": ..., "models": [{...}, ...]}, ...]
    named list   (caddy)
        {"caddies": [{"model": ..., "compatibility": {...}, ...}, ...]}
    grouped      (nic)
        {"<category>": [{"brand": ..., "series": [{"name": ..., "models": [...]}]}]}

Every variant declares which model fields become attributes. Anything that
does not match the expected shape is skipped; a document whose root has the
wrong shape normalizes to an empty list. Nested models that are not objects
still occupy their position as nameless entries so that document order
indexes stay stable.
"""

import logging
from collections.abc import Callable
from typing import Any

from ims.domain.entities import CatalogEntry, ComponentType

logger = logging.getLogger(__name__)

# (source path, attribute name); the first path found wins for a given name.
AttributeMap = tuple[tuple[str, str], ...]

_IDENTIFIER_PATHS = ("UUID", "uuid", "inventory.UUID")
_MODEL_NAME_KEYS = ("model", "name", "series")

CPU_ATTRIBUTES: AttributeMap = (
    ("cores", "cores"),
    ("threads", "threads"),
    ("base_frequency_GHz", "base_frequency_GHz"),
    ("base_frequency", "base_frequency_GHz"),
    ("max_frequency_GHz", "max_frequency_GHz"),
    ("boost_frequency", "max_frequency_GHz"),
    ("tdp_W", "tdp_W"),
    ("tdp", "tdp_W"),
    ("socket", "socket"),
    ("architecture", "architecture"),
    ("cache.l3", "l3_cache"),
)

MOTHERBOARD_ATTRIBUTES: AttributeMap = (
    ("socket.type", "socket"),
    ("socket", "socket"),
    ("chipset", "chipset"),
    ("form_factor", "form_factor"),
    ("memory_slots", "memory_slots"),
    ("memory.slots", "memory_slots"),
    ("memory.max_capacity", "max_memory"),
    ("max_memory", "max_memory"),
    ("memory.type", "memory_type"),
)

RAM_ATTRIBUTES: AttributeMap = (
    ("memory_type", "memory_type"),
    ("type", "memory_type"),
    ("module_type", "module_type"),
    ("capacity_GB", "capacity_GB"),
    ("capacity", "capacity_GB"),
    ("frequency_MHz", "frequency_MHz"),
    ("frequency", "frequency_MHz"),
    ("form_factor", "form_factor"),
    ("ecc", "ecc"),
    ("voltage", "voltage"),
)

STORAGE_ATTRIBUTES: AttributeMap = (
    ("storage_type", "storage_type"),
    ("type", "storage_type"),
    ("subtype", "subtype"),
    ("capacity_GB", "capacity_GB"),
    ("capacity", "capacity_GB"),
    ("interface", "interface"),
    ("form_factor", "form_factor"),
    ("specifications.rpm", "rpm"),
    ("specifications.read_speed_MBps", "read_speed_MBps"),
    ("specifications.write_speed_MBps", "write_speed_MBps"),
)

CADDY_ATTRIBUTES: AttributeMap = (
    ("type", "type"),
    ("compatibility.drive_type", "drive_type"),
    ("compatibility.size", "size"),
    ("compatibility.interface", "interface"),
    ("material", "material"),
    ("connector", "connector"),
    ("weight", "weight"),
)

NIC_ATTRIBUTES: AttributeMap = (
    ("ports", "ports"),
    ("port_type", "port_type"),
    ("speed", "speed"),
    ("interface", "interface"),
    ("controller", "controller"),
)


# ── Field access helpers ─────────────────────────────────────────────


def _lookup(node: Any, path: str) -> Any:
    """Follow a dotted path through nested dicts; None when any step is missing."""
    current = node
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _attribute_value(value: Any) -> Any:
    """Keep scalars and lists of scalars; anything else is not an attribute."""
    if _is_scalar(value):
        return value
    if isinstance(value, list) and all(_is_scalar(v) for v in value):
        return list(value)
    return None


def _extract_attributes(model: dict[str, Any], attribute_map: AttributeMap) -> dict[str, Any]:
    attributes: dict[str, Any] = {}
    for path, name in attribute_map:
        if name in attributes:
            continue
        value = _attribute_value(_lookup(model, path))
        if value is not None and value != "":
            attributes[name] = value
    return attributes


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _model_name(model: dict[str, Any]) -> str:
    for key in _MODEL_NAME_KEYS:
        name = _text(model.get(key))
        if name:
            return name
    return ""


def _identifier(model: dict[str, Any]) -> str | None:
    for path in _IDENTIFIER_PATHS:
        value = _text(_lookup(model, path))
        if value:
            return value
    return None


def _entries_for_models(
    component_type: ComponentType,
    brand: str,
    series: str | None,
    models: Any,
    attribute_map: AttributeMap,
    extra: dict[str, Any] | None = None,
) -> list[CatalogEntry]:
    """Expand one brand/series node's model array into tagged entries."""
    if not isinstance(models, list):
        return []
    entries: list[CatalogEntry] = []
    for model in models:
        if not isinstance(model, dict):
            entries.append(CatalogEntry(component_type, brand, series, ""))
            continue
        attributes = _extract_attributes(model, attribute_map)
        if extra:
            attributes.update(extra)
        entries.append(
            CatalogEntry(
                component_type=component_type,
                brand=brand,
                series=series,
                model=_model_name(model),
                attributes=attributes,
                identifier=_identifier(model),
            )
        )
    return entries


# ── Variant normalizers ──────────────────────────────────────────────


def _brand_list_normalizer(attribute_map: AttributeMap) -> Callable[[ComponentType, Any], list[CatalogEntry]]:
    def normalize(component_type: ComponentType, document: Any) -> list[CatalogEntry]:
        if not isinstance(document, list):
            return []
        entries: list[CatalogEntry] = []
        for node in document:
            if not isinstance(node, dict):
                continue
            brand = _text(node.get("brand")) or _text(node.get("manufacturer")) or ""
            series = _text(node.get("series"))
            entries.extend(
                _entries_for_models(component_type, brand, series, node.get("models"), attribute_map)
            )
        return entries

    return normalize


def normalize_named_list(component_type: ComponentType, document: Any) -> list[CatalogEntry]:
    """Caddy catalogs: a single object holding a ``caddies`` list."""
    if not isinstance(document, dict):
        return []
    items = document.get("caddies")
    if not isinstance(items, list):
        return []
    entries: list[CatalogEntry] = []
    for item in items:
        if not isinstance(item, dict):
            entries.append(CatalogEntry(component_type, "Generic", None, ""))
            continue
        brand = _text(item.get("brand")) or "Generic"
        series = _text(item.get("series")) or _text(_lookup(item, "compatibility.size"))
        entries.append(
            CatalogEntry(
                component_type=component_type,
                brand=brand,
                series=series,
                model=_model_name(item),
                attributes=_extract_attributes(item, CADDY_ATTRIBUTES),
                identifier=_identifier(item),
            )
        )
    return entries


def normalize_grouped(component_type: ComponentType, document: Any) -> list[CatalogEntry]:
    """NIC catalogs: brand nodes grouped under category keys."""
    if not isinstance(document, dict):
        return []
    entries: list[CatalogEntry] = []
    for category, brand_nodes in document.items():
        if not isinstance(brand_nodes, list):
            continue
        extra = {"category": str(category)}
        for node in brand_nodes:
            if not isinstance(node, dict):
                continue
            brand = _text(node.get("brand")) or ""
            series_nodes = node.get("series")
            if isinstance(series_nodes, list):
                for series_node in series_nodes:
                    if not isinstance(series_node, dict):
                        continue
                    entries.extend(
                        _entries_for_models(
                            component_type,
                            brand,
                            _text(series_node.get("name")),
                            series_node.get("models"),
                            NIC_ATTRIBUTES,
                            extra,
                        )
                    )
            else:
                entries.extend(
                    _entries_for_models(
                        component_type,
                        brand,
                        _text(series_nodes),
                        node.get("models"),
                        NIC_ATTRIBUTES,
                        extra,
                    )
                )
    return entries


_NORMALIZERS: dict[ComponentType, Callable[[ComponentType, Any], list[CatalogEntry]]] = {
    ComponentType.CPU: _brand_list_normalizer(CPU_ATTRIBUTES),
    ComponentType.MOTHERBOARD: _brand_list_normalizer(MOTHERBOARD_ATTRIBUTES),
    ComponentType.RAM: _brand_list_normalizer(RAM_ATTRIBUTES),
    ComponentType.STORAGE: _brand_list_normalizer(STORAGE_ATTRIBUTES),
    ComponentType.CADDY: normalize_named_list,
    ComponentType.NIC: normalize_grouped,
}


def normalize_catalog(component_type: ComponentType, document: Any) -> list[CatalogEntry]:
    """Normalize a parsed catalog document; ``None`` or a wrong shape gives ``[]``."""
    if document is None:
        return []
    entries = _NORMALIZERS[component_type](component_type, document)
    if not entries:
        logger.debug("Catalog for %s normalized to no entries", component_type.value)
    return entries
