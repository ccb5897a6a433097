"""Pydantic DTOs (Data Transfer Objects) for inventory records and catalog options."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ims.domain.entities import ComponentStatus, ComponentType

_OPTIONAL_TEXT_FIELDS = (
    "identifier",
    "server_identifier",
    "location",
    "rack_position",
    "flag",
    "notes",
    "mac_address",
    "ip_address",
    "network_name",
)
_DATE_FIELDS = ("purchase_date", "installation_date", "warranty_end_date")
_IMMUTABLE_FIELDS = frozenset({"id", "serial_number", "identifier"})


def _blank_to_none(value: Any) -> Any:
    """Form submissions send empty strings for untouched inputs."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _parse_status(value: Any) -> Any:
    if value is None or isinstance(value, ComponentStatus):
        return value
    # ValueError here surfaces as a regular validation error.
    return ComponentStatus(value)


class InventoryRecordCreate(BaseModel):
    """Schema for adding a new inventory record.

    ``specification`` declares a catalog-less configuration for ram, storage
    and caddy records; ``identifier`` references a catalog entry. When both
    are absent a random identifier is assigned.
    """

    serial_number: str = Field(..., max_length=255, examples=["SN-CPU-0001"])
    status: ComponentStatus = ComponentStatus.AVAILABLE
    identifier: str | None = Field(None, max_length=64)
    specification: dict[str, Any] | None = Field(
        None, examples=[{"type": "DDR4", "ecc": "Yes", "size": "32GB"}],
    )
    server_identifier: str | None = Field(None, max_length=64)
    location: str | None = Field(None, max_length=100)
    rack_position: str | None = Field(None, max_length=20)
    purchase_date: date | None = None
    installation_date: date | None = None
    warranty_end_date: date | None = None
    flag: str | None = Field(None, max_length=50)
    notes: str | None = None
    mac_address: str | None = Field(None, max_length=17)
    ip_address: str | None = Field(None, max_length=45)
    network_name: str | None = Field(None, max_length=100)

    @field_validator("serial_number", mode="before")
    @classmethod
    def _strip_serial(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator(*_OPTIONAL_TEXT_FIELDS, *_DATE_FIELDS, mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Any:
        return ComponentStatus.AVAILABLE if value in (None, "") else _parse_status(value)


class InventoryRecordUpdate(BaseModel):
    """Schema for updating an existing record: all fields optional.

    Only fields present in the request are applied; an explicit ``null``
    clears the stored value.
    """

    status: ComponentStatus | None = None
    server_identifier: str | None = Field(None, max_length=64)
    location: str | None = Field(None, max_length=100)
    rack_position: str | None = Field(None, max_length=20)
    purchase_date: date | None = None
    installation_date: date | None = None
    warranty_end_date: date | None = None
    flag: str | None = Field(None, max_length=50)
    notes: str | None = None
    mac_address: str | None = Field(None, max_length=17)
    ip_address: str | None = Field(None, max_length=45)
    network_name: str | None = Field(None, max_length=100)

    model_config = {"extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def _reject_immutable(cls, data: Any) -> Any:
        if isinstance(data, dict):
            locked = sorted(_IMMUTABLE_FIELDS & set(data))
            if locked:
                raise ValueError(f"Fields cannot be changed after creation: {', '.join(locked)}")
        return data

    @field_validator(*_OPTIONAL_TEXT_FIELDS[1:], *_DATE_FIELDS, mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("Status cannot be empty")
        return _parse_status(value)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly provided by the caller."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class InventoryBulkUpdate(BaseModel):
    """Fields a bulk update may set on every selected record.

    Blank values are ignored rather than clearing the stored value.
    """

    status: ComponentStatus | None = None
    location: str | None = Field(None, max_length=100)
    rack_position: str | None = Field(None, max_length=20)
    flag: str | None = Field(None, max_length=50)

    model_config = {"extra": "forbid"}

    @field_validator("location", "rack_position", "flag", mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Any:
        return None if value == "" else _parse_status(value)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class InventoryRecordResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    component_type: ComponentType
    identifier: str | None
    serial_number: str
    status: ComponentStatus
    server_identifier: str | None
    location: str | None
    rack_position: str | None
    purchase_date: date | None
    installation_date: date | None
    warranty_end_date: date | None
    flag: str | None
    notes: str | None
    mac_address: str | None = None
    ip_address: str | None = None
    network_name: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CatalogModelOption(BaseModel):
    """One selectable catalog model."""

    identifier: str
    brand: str
    series: str | None
    model: str
    attributes: dict[str, Any] = {}

    model_config = {"from_attributes": True}


class CatalogOptions(BaseModel):
    """Progressive brand → series → model choices for one component type."""

    component_type: ComponentType
    catalog_available: bool
    brands: list[str]
    brand: str | None = None
    series: list[str] | None = None
    models: list[CatalogModelOption] | None = None
    custom_specification: dict[str, list[str]] | None = None


class InventoryPageResponse(BaseModel):
    """One page of records; network fields only appear for nic records."""

    records: list[dict[str, Any]]
    total: int
    limit: int
    offset: int
    page: int
    has_more: bool
    status_summary: dict[str, int]


class ComponentActionRequest(BaseModel):
    """Body of a mutating component request."""

    action: str = Field(..., examples=["add"])
    type: str = Field(..., examples=["cpu"])
    id: int | None = None
    ids: list[Any] | None = None
    force: bool = False
    data: dict[str, Any] | None = None


class ApiEnvelope(BaseModel):
    """Uniform response wrapper; ``status_code`` mirrors the HTTP status."""

    success: bool
    status_code: int
    message: str
    data: Any = None
