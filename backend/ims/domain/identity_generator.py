"""Stable identifier generation for catalog entries and custom specifications.

Identifiers are UUID-shaped strings derived from a 32-bit rolling hash
(``h = h * 31 + code_unit`` wrapped to signed 32 bits) of a composite key.
The third group always starts with ``4``. The hash and layout must stay
byte-for-byte stable because generated identifiers are stored in inventory
records.
"""

import re

from ims.domain.entities.catalog_entry import CatalogEntry
from ims.domain.entities.custom_specification import CustomSpecification

IDENTIFIER_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}$"
)

_UINT32 = 0xFFFFFFFF


def rolling_hash(key: str) -> int:
    """Signed 32-bit ``h * 31 + c`` hash over UTF-16 code units."""
    h = 0
    encoded = key.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + code_unit) & _UINT32
    if h & 0x80000000:
        h -= 1 << 32
    return h


def identifier_from_key(key: str) -> str:
    """Render the hash of ``key`` as an ``8-4-4-4-12`` identifier."""
    digest = format(abs(rolling_hash(key)), "x").zfill(32)
    return (
        f"{digest[0:8]}-{digest[8:12]}-4{digest[13:16]}-"
        f"{digest[16:20]}-{digest[20:32]}"
    )


def catalog_key(brand: str, series: str | None, model: str, index: int) -> str:
    # A node without a series has always been keyed with the literal "undefined".
    series_part = "undefined" if series is None else series
    return f"{brand}-{series_part}-{model}-{index}"


def catalog_identifier(entry: CatalogEntry, index: int) -> str:
    """Identifier for the model at ``index`` of its brand/series listing."""
    return identifier_from_key(catalog_key(entry.brand, entry.series, entry.model, index))


def custom_identifier(specification: CustomSpecification) -> str:
    return identifier_from_key(specification.composite_key())


def matches_identifier_shape(value: str) -> bool:
    return bool(IDENTIFIER_PATTERN.match(value or ""))
