"""Unit tests for the InventoryRecord entity and status parsing."""

import pytest

from ims.domain.entities import (
    ComponentStatus,
    ComponentType,
    InventoryRecord,
    check_transition,
    editable_fields_for,
)
from ims.domain.exceptions import (
    InvalidComponentTypeError,
    InvalidStatusTransitionError,
    InventoryValidationError,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("available", ComponentStatus.AVAILABLE),
        ("in_use", ComponentStatus.IN_USE),
        ("inUse", ComponentStatus.IN_USE),
        ("MAINTENANCE", ComponentStatus.MAINTENANCE),
        ("0", ComponentStatus.FAILED),
        (1, ComponentStatus.AVAILABLE),
        (2, ComponentStatus.IN_USE),
    ],
)
def test_status_parse_accepts_aliases(raw, expected):
    assert ComponentStatus.parse(raw) is expected


@pytest.mark.parametrize("raw", ["retired", "", None, 3, True])
def test_status_parse_rejects_unknown(raw):
    with pytest.raises(InventoryValidationError):
        ComponentStatus.parse(raw)


def test_component_type_parse():
    assert ComponentType.parse("Storage") is ComponentType.STORAGE
    with pytest.raises(InvalidComponentTypeError, match="Invalid component type: psu"):
        ComponentType.parse("psu")


def test_network_fields_are_editable_for_nic_only():
    assert "mac_address" in editable_fields_for(ComponentType.NIC)
    assert "mac_address" not in editable_fields_for(ComponentType.RAM)


def test_apply_changes_skips_equal_values():
    record = InventoryRecord(ComponentType.CPU, "CPU-1", location="DC1")
    stamp = record.updated_at

    assert record.apply_changes({"location": "DC1"}) == []
    assert record.updated_at == stamp

    assert record.apply_changes({"location": "DC2", "flag": "check"}) == ["location", "flag"]
    assert record.updated_at >= stamp


def test_apply_changes_rejects_immutable_fields():
    record = InventoryRecord(ComponentType.CPU, "CPU-1")
    with pytest.raises(InventoryValidationError):
        record.apply_changes({"serial_number": "CPU-2"})
    with pytest.raises(InventoryValidationError):
        record.apply_changes({"mac_address": "00:11:22:33:44:55"})


def test_in_use_requires_server():
    record = InventoryRecord(ComponentType.RAM, "RAM-1", status=ComponentStatus.IN_USE)
    with pytest.raises(InventoryValidationError):
        record.ensure_server_assignment()

    record.server_identifier = "  "
    with pytest.raises(InventoryValidationError):
        record.ensure_server_assignment()

    record.server_identifier = "SRV-1"
    record.ensure_server_assignment()


def test_transition_table():
    check_transition(ComponentStatus.AVAILABLE, ComponentStatus.IN_USE)
    check_transition(ComponentStatus.DECOMMISSIONED, ComponentStatus.DECOMMISSIONED)
    with pytest.raises(InvalidStatusTransitionError):
        check_transition(ComponentStatus.DECOMMISSIONED, ComponentStatus.AVAILABLE)
    with pytest.raises(InvalidStatusTransitionError):
        check_transition(ComponentStatus.FAILED, ComponentStatus.IN_USE)
