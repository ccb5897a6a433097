"""Unit tests for identifier generation."""

import pytest

from ims.domain.entities import CatalogEntry, ComponentType, CustomSpecification
from ims.domain.identity_generator import (
    catalog_identifier,
    catalog_key,
    custom_identifier,
    identifier_from_key,
    matches_identifier_shape,
    rolling_hash,
)


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("", 0),
        ("a", 97),
        ("ab", 3105),
        ("hello", 99162322),
        ("Hello World", -862545276),
        ("Generic-undefined--0", -2125639786),
    ],
)
def test_rolling_hash_matches_reference_values(key: str, expected: int):
    assert rolling_hash(key) == expected


def test_rolling_hash_counts_utf16_code_units():
    # U+1F600 is a surrogate pair: 0xD83D, 0xDE00
    assert rolling_hash("\U0001F600") == 0xD83D * 31 + 0xDE00
    assert rolling_hash("é") == 233


def test_identifier_from_key_layout():
    assert identifier_from_key("a") == "00000000-0000-4000-0000-000000000061"
    assert identifier_from_key("hello") == "00000000-0000-4000-0000-000005e918d2"


def test_negative_hash_uses_absolute_value():
    assert identifier_from_key("Hello World") == "00000000-0000-4000-0000-00003369657c"


def test_identifier_is_pure_and_well_shaped():
    keys = ["Intel-Xeon-Gold 6430-1", "", "x" * 500, "ram-DDR4-Yes-32GB-1700000000000"]
    for key in keys:
        first = identifier_from_key(key)
        assert first == identifier_from_key(key)
        assert matches_identifier_shape(first)


def test_catalog_key_uses_undefined_for_missing_series():
    assert catalog_key("Generic", None, "", 0) == "Generic-undefined--0"
    assert catalog_key("Intel", "Xeon", "Gold 6430", 1) == "Intel-Xeon-Gold 6430-1"


def test_catalog_identifier_for_entry():
    entry = CatalogEntry(ComponentType.CPU, "Intel", "Xeon", "Gold 6430")
    assert catalog_identifier(entry, 1) == "00000000-0000-4000-0000-0000123311b5"
    assert catalog_identifier(entry, 0) != catalog_identifier(entry, 1)


def test_custom_identifier_depends_on_timestamp():
    fields = {"type": "DDR4", "ecc": "Yes", "size": "32GB"}
    spec = CustomSpecification.build(ComponentType.RAM, fields, created_at_ms=1700000000000)
    later = CustomSpecification.build(ComponentType.RAM, fields, created_at_ms=1700000000001)

    assert custom_identifier(spec) == "00000000-0000-4000-0000-000061e4a5a7"
    assert custom_identifier(spec) == custom_identifier(spec)
    assert custom_identifier(spec) != custom_identifier(later)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not-an-identifier",
        "00000000-0000-5000-0000-000000000061",
        "0B9A6E2C-5D41-4F0E-9C7A-2E8D1B3F6A10",
    ],
)
def test_matches_identifier_shape_rejects(value: str):
    assert not matches_identifier_shape(value)
