"""Component inventory endpoints: action-dispatched reads and writes."""

from typing import Any

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from ims.application.schemas.inventory import (
    ComponentActionRequest,
    InventoryBulkUpdate,
    InventoryPageResponse,
    InventoryRecordCreate,
    InventoryRecordResponse,
    InventoryRecordUpdate,
)
from ims.application.services import CatalogService, InventoryService
from ims.domain.entities import NETWORK_FIELDS, CatalogEntry, ComponentType, InventoryRecord
from ims.infrastructure.dependencies import get_catalog_service, get_inventory_service
from ims.presentation.api.exception_handlers import envelope_response

router = APIRouter(prefix="/components", tags=["Components"])

READ_ACTIONS = frozenset({"list", "options", "get"})
WRITE_ACTIONS = frozenset({"add", "update", "delete", "bulk_update"})


def _parse_int(raw: str | None) -> int | None:
    """Query values arrive as text; anything non-numeric is left for the service to reject."""
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return -1


def _record_payload(record: InventoryRecord) -> dict[str, Any]:
    payload = InventoryRecordResponse.model_validate(record).model_dump(mode="json")
    if not record.component_type.supports_network_fields:
        for name in NETWORK_FIELDS:
            payload.pop(name, None)
    return payload


def _catalog_details(entry: CatalogEntry | None) -> dict[str, Any] | None:
    if entry is None:
        return None
    return {
        "identifier": entry.identifier,
        "brand": entry.brand,
        "series": entry.series,
        "model": entry.model,
        "attributes": entry.attributes,
    }


def _unsupported(action: str | None) -> JSONResponse:
    if action in READ_ACTIONS or action in WRITE_ACTIONS:
        return envelope_response(status.HTTP_400_BAD_REQUEST, "Invalid request method")
    return envelope_response(status.HTTP_400_BAD_REQUEST, "Invalid operation")


@router.get("")
async def read_components(
    action: str | None = Query(None, description="list, options or get"),
    component_type: str | None = Query(None, alias="type", description="Component type"),
    record_id: str | None = Query(None, alias="id", description="Record ID (get)"),
    status_filter: str | None = Query(None, alias="status", description="Filter by status (list)"),
    search: str | None = Query(None, description="Substring search (list)"),
    sort_by: str | None = Query(None),
    sort_order: str | None = Query(None),
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    brand: str | None = Query(None, description="Narrow options to a brand"),
    series: str | None = Query(None, description="Narrow options to a series"),
    service: InventoryService = Depends(get_inventory_service),
    catalog: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """List records, fetch one record, or get catalog options for a component type."""
    if action == "list":
        page = await service.list_records(
            component_type,
            status=status_filter,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=_parse_int(limit),
            offset=_parse_int(offset),
        )
        body = InventoryPageResponse(
            records=[_record_payload(r) for r in page.records],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            page=page.page,
            has_more=page.has_more,
            status_summary=page.status_summary,
        ).model_dump(mode="json")
        return envelope_response(status.HTTP_200_OK, "Components retrieved successfully", body)

    if action == "options":
        options = catalog.options(ComponentType.parse(component_type), brand, series)
        return envelope_response(
            status.HTTP_200_OK,
            "Catalog options retrieved successfully",
            options.model_dump(mode="json"),
        )

    if action == "get":
        record, entry = await service.get_record_details(component_type, _parse_int(record_id))
        body = _record_payload(record)
        body["catalog_details"] = _catalog_details(entry)
        return envelope_response(status.HTTP_200_OK, "Component retrieved successfully", body)

    return _unsupported(action)


@router.post("")
async def write_components(
    request: ComponentActionRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> JSONResponse:
    """Add, update, bulk-update or delete component records."""
    if request.action == "add":
        ComponentType.parse(request.type)
        data = InventoryRecordCreate.model_validate(request.data or {})
        record = await service.add_record(request.type, data)
        return envelope_response(
            status.HTTP_201_CREATED,
            "Component added successfully",
            {"id": record.id, "identifier": record.identifier},
        )

    if request.action == "update":
        ComponentType.parse(request.type)
        data = InventoryRecordUpdate.model_validate(request.data or {})
        outcome = await service.update_record(request.type, request.id, data)
        message = "Component updated successfully" if outcome.changed else "No changes detected"
        return envelope_response(
            status.HTTP_200_OK,
            message,
            {"id": outcome.record.id, "updated_fields": outcome.updated_fields},
        )

    if request.action == "bulk_update":
        ComponentType.parse(request.type)
        data = InventoryBulkUpdate.model_validate(request.data or {})
        outcome = await service.bulk_update(request.type, request.ids, data)
        return envelope_response(
            status.HTTP_200_OK,
            f"{len(outcome.updated)} components updated successfully",
            {
                "updated": len(outcome.updated),
                "unchanged": len(outcome.unchanged),
                "failed": len(outcome.failed),
                "failures": outcome.failed,
            },
        )

    if request.action == "delete":
        record = await service.delete_record(request.type, request.id, force=request.force)
        return envelope_response(
            status.HTTP_200_OK,
            "Component deleted successfully",
            {"id": record.id, "serial_number": record.serial_number},
        )

    return _unsupported(request.action)
