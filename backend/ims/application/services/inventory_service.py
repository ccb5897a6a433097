"""Application service (use case) for inventory record operations.

Every operation takes the raw component type selector and parses it first,
so an unknown type fails the same way everywhere. Validation, not-found and
conflict checks run before the store is written to.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Any

from ims.application.interfaces import InventoryRecordRepository
from ims.application.schemas.inventory import (
    InventoryBulkUpdate,
    InventoryRecordCreate,
    InventoryRecordUpdate,
)
from ims.application.services.catalog_service import CatalogService
from ims.domain.entities import (
    NETWORK_FIELDS,
    CatalogEntry,
    ComponentStatus,
    ComponentType,
    CustomSpecification,
    InventoryRecord,
    check_transition,
)
from ims.domain.exceptions import (
    ComponentInUseError,
    DuplicateEntityError,
    EntityNotFoundError,
    InventoryValidationError,
)
from ims.domain.identity_generator import custom_identifier

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = frozenset({
    "id",
    "serial_number",
    "status",
    "location",
    "purchase_date",
    "warranty_end_date",
    "created_at",
    "updated_at",
})

MAX_BULK_UPDATE = 100

_ENTITY = "Component"


@dataclass
class InventoryPage:
    """One page of records plus paging and per-status totals."""

    records: list[InventoryRecord]
    total: int
    limit: int
    offset: int
    status_summary: dict[str, int] = field(default_factory=dict)

    @property
    def page(self) -> int:
        return self.offset // self.limit + 1

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total


@dataclass
class UpdateOutcome:
    record: InventoryRecord
    updated_fields: list[str]

    @property
    def changed(self) -> bool:
        return bool(self.updated_fields)


@dataclass
class BulkUpdateOutcome:
    """Per-id results of a bulk update; failures carry a reason each."""

    updated: list[int] = field(default_factory=list)
    unchanged: list[int] = field(default_factory=list)
    failed: list[dict[str, Any]] = field(default_factory=list)


def _require_id(record_id: Any) -> int:
    if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id < 1:
        raise InventoryValidationError("Valid component ID required", field="id")
    return record_id


class InventoryService:
    """Orchestrates inventory CRUD logic. Depends on the repository port (DI)."""

    def __init__(
        self,
        repository: InventoryRecordRepository,
        catalog: CatalogService | None = None,
        *,
        default_page_size: int = 50,
        max_page_size: int = 1000,
        enforce_status_transitions: bool = False,
    ):
        self._repository = repository
        self._catalog = catalog
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._enforce_transitions = enforce_status_transitions

    # ── Reads ─────────────────────────────────────────────────────────

    async def list_records(
        self,
        component_type: ComponentType | str | None,
        *,
        status: ComponentStatus | str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> InventoryPage:
        ct = ComponentType.parse(component_type)
        status_filter = None
        if status not in (None, "") and str(status).strip().lower() != "all":
            status_filter = ComponentStatus.parse(status)
        search = (search or "").strip() or None

        sort_by = sort_by or "created_at"
        if sort_by not in SORTABLE_FIELDS:
            raise InventoryValidationError(f"Invalid sort field: {sort_by}", field="sort_by")
        sort_order = (sort_order or "").lower()
        if sort_order not in ("asc", "desc"):
            sort_order = "desc"

        limit = self._default_page_size if limit is None else limit
        limit = min(max(limit, 1), self._max_page_size)
        offset = max(offset or 0, 0)

        total = await self._repository.count(ct, status=status_filter, search=search)
        records = await self._repository.get_all(
            ct,
            status=status_filter,
            search=search,
            sort_by=sort_by,
            descending=sort_order == "desc",
            skip=offset,
            limit=limit,
        )
        counts = await self._repository.count_by_status(ct, search=search)
        summary = {s.value: counts.get(s, 0) for s in ComponentStatus}
        return InventoryPage(
            records=records,
            total=total,
            limit=limit,
            offset=offset,
            status_summary=summary,
        )

    async def get_record(
        self, component_type: ComponentType | str | None, record_id: Any
    ) -> InventoryRecord:
        ct = ComponentType.parse(component_type)
        record_id = _require_id(record_id)
        record = await self._repository.get_by_id(ct, record_id)
        if record is None:
            raise EntityNotFoundError(_ENTITY, record_id)
        return record

    async def get_record_details(
        self, component_type: ComponentType | str | None, record_id: Any
    ) -> tuple[InventoryRecord, CatalogEntry | None]:
        """The record plus the catalog entry its identifier resolves to."""
        record = await self.get_record(component_type, record_id)
        entry = None
        if self._catalog is not None:
            entry = self._catalog.find_entry(record.component_type, record.identifier)
        return record, entry

    # ── Writes ────────────────────────────────────────────────────────

    async def add_record(
        self, component_type: ComponentType | str | None, data: InventoryRecordCreate
    ) -> InventoryRecord:
        ct = ComponentType.parse(component_type)
        if not data.serial_number:
            raise InventoryValidationError("Serial number is required", field="serial_number")
        if not ct.supports_network_fields:
            self._reject_network_fields(data.model_fields_set, data)

        identifier, notes = self._resolve_identity(ct, data)
        record = InventoryRecord(
            component_type=ct,
            serial_number=data.serial_number,
            status=data.status,
            identifier=identifier,
            server_identifier=data.server_identifier,
            location=data.location,
            rack_position=data.rack_position,
            purchase_date=data.purchase_date,
            installation_date=data.installation_date,
            warranty_end_date=data.warranty_end_date,
            flag=data.flag,
            notes=notes,
            mac_address=data.mac_address,
            ip_address=data.ip_address,
            network_name=data.network_name,
        )
        record.ensure_server_assignment()

        existing = await self._repository.get_by_serial(ct, record.serial_number)
        if existing is not None:
            raise DuplicateEntityError(_ENTITY, "serial_number", record.serial_number)

        created = await self._repository.create(record)
        logger.info(
            "Added %s component id=%s serial=%s identifier=%s",
            ct.value,
            created.id,
            created.serial_number,
            created.identifier,
        )
        return created

    async def update_record(
        self,
        component_type: ComponentType | str | None,
        record_id: Any,
        data: InventoryRecordUpdate,
    ) -> UpdateOutcome:
        ct = ComponentType.parse(component_type)
        record_id = _require_id(record_id)
        changes = data.changes()
        if not changes:
            raise InventoryValidationError("At least one field must be provided", field="data")
        if not ct.supports_network_fields:
            self._reject_network_fields(set(changes), data)

        current = await self._repository.get_by_id(ct, record_id)
        if current is None:
            raise EntityNotFoundError(_ENTITY, record_id)

        if self._enforce_transitions and "status" in changes:
            check_transition(current.status, changes["status"])

        candidate = replace(current)
        updated_fields = candidate.apply_changes(changes)
        candidate.ensure_server_assignment()
        if not updated_fields:
            return UpdateOutcome(record=current, updated_fields=[])

        saved = await self._repository.update(candidate)
        logger.info(
            "Updated %s component id=%s fields=%s",
            ct.value,
            record_id,
            ",".join(updated_fields),
        )
        return UpdateOutcome(record=saved, updated_fields=updated_fields)

    async def bulk_update(
        self,
        component_type: ComponentType | str | None,
        record_ids: Any,
        data: InventoryBulkUpdate,
    ) -> BulkUpdateOutcome:
        """Apply the same status/location/rack/flag change to many records.

        Each id is checked on its own: unknown ids and records that would
        break the in-use rule are reported as failures and the remaining
        records are still written.
        """
        ct = ComponentType.parse(component_type)
        if not record_ids or not isinstance(record_ids, list):
            raise InventoryValidationError("Component IDs array required", field="ids")
        if len(record_ids) > MAX_BULK_UPDATE:
            raise InventoryValidationError(
                f"Maximum {MAX_BULK_UPDATE} components can be updated at once", field="ids"
            )
        changes = data.changes()
        if not changes:
            raise InventoryValidationError("At least one field must be provided", field="data")

        outcome = BulkUpdateOutcome()
        for raw_id in record_ids:
            try:
                record_id = _require_id(raw_id)
                current = await self._repository.get_by_id(ct, record_id)
                if current is None:
                    raise EntityNotFoundError(_ENTITY, record_id)
                if self._enforce_transitions and "status" in changes:
                    check_transition(current.status, changes["status"])
                candidate = replace(current)
                updated_fields = candidate.apply_changes(changes)
                candidate.ensure_server_assignment()
            except InventoryValidationError as exc:
                outcome.failed.append({"id": raw_id, "reason": exc.message})
                continue
            except EntityNotFoundError:
                outcome.failed.append({"id": raw_id, "reason": f"{_ENTITY} not found"})
                continue

            if updated_fields:
                await self._repository.update(candidate)
                outcome.updated.append(record_id)
            else:
                outcome.unchanged.append(record_id)

        logger.info(
            "Bulk updated %s components: updated=%d unchanged=%d failed=%d",
            ct.value,
            len(outcome.updated),
            len(outcome.unchanged),
            len(outcome.failed),
        )
        return outcome

    async def delete_record(
        self,
        component_type: ComponentType | str | None,
        record_id: Any,
        *,
        force: bool = False,
    ) -> InventoryRecord:
        """Hard-delete a record and return what was removed.

        In-use records are only removed when ``force`` is set.
        """
        record = await self.get_record(component_type, record_id)
        if record.needs_server and not force:
            raise ComponentInUseError(_ENTITY, record.id)
        deleted = await self._repository.delete(record.component_type, record.id)
        if not deleted:
            raise EntityNotFoundError(_ENTITY, record.id)
        logger.info(
            "Deleted %s component id=%s serial=%s%s",
            record.component_type.value,
            record.id,
            record.serial_number,
            " (forced)" if force and record.needs_server else "",
        )
        return record

    # ── Helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _reject_network_fields(provided: set[str], data: Any) -> None:
        for name in NETWORK_FIELDS:
            if name in provided and getattr(data, name) is not None:
                raise InventoryValidationError(
                    f"Field '{name}' is only available for nic components", field=name
                )

    @staticmethod
    def _resolve_identity(
        ct: ComponentType, data: InventoryRecordCreate
    ) -> tuple[str, str | None]:
        """Pick the stored identifier and the notes to persist with it."""
        if data.identifier and data.specification:
            raise InventoryValidationError(
                "Provide either an identifier or a specification, not both",
                field="specification",
            )
        if data.identifier:
            return data.identifier, data.notes
        if data.specification:
            if not ct.supports_custom_specification:
                raise InventoryValidationError(
                    f"Custom specifications are not supported for {ct.value}",
                    field="specification",
                )
            spec = CustomSpecification.build(ct, data.specification)
            notes = spec.describe()
            if data.notes:
                notes = f"{notes}\n\nAdditional Notes: {data.notes}"
            return custom_identifier(spec), notes
        return str(uuid.uuid4()), data.notes
