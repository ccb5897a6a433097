"""Concrete repository implementation for InventoryRecord backed by SQLAlchemy."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ims.application.interfaces import InventoryRecordRepository
from ims.domain.entities import (
    ComponentStatus,
    ComponentType,
    InventoryRecord,
    editable_fields_for,
)
from ims.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InventoryPersistenceError,
)
from ims.infrastructure.database.models import MODEL_BY_TYPE, InventoryColumnsMixin

logger = logging.getLogger(__name__)

_SEARCH_COLUMNS = ("serial_number", "notes", "location", "identifier")
_NETWORK_COLUMNS = ("mac_address", "ip_address", "network_name")


class SQLAlchemyInventoryRecordRepository(InventoryRecordRepository):
    """Implements the InventoryRecordRepository port using SQLAlchemy async sessions.

    One instance serves every component type; the type picks the table.
    Store failures are logged here and surface as InventoryPersistenceError.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(
        self, component_type: ComponentType, model: InventoryColumnsMixin
    ) -> InventoryRecord:
        """Map ORM model → domain entity."""
        return InventoryRecord(
            id=model.id,
            component_type=component_type,
            identifier=model.identifier,
            serial_number=model.serial_number,
            status=model.status,
            server_identifier=model.server_identifier,
            location=model.location,
            rack_position=model.rack_position,
            purchase_date=model.purchase_date,
            installation_date=model.installation_date,
            warranty_end_date=model.warranty_end_date,
            flag=model.flag,
            notes=model.notes,
            mac_address=getattr(model, "mac_address", None),
            ip_address=getattr(model, "ip_address", None),
            network_name=getattr(model, "network_name", None),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: InventoryRecord) -> InventoryColumnsMixin:
        """Map domain entity → ORM model (for creation)."""
        model_cls = MODEL_BY_TYPE[entity.component_type]
        model = model_cls(
            identifier=entity.identifier,
            serial_number=entity.serial_number,
            status=entity.status,
            server_identifier=entity.server_identifier,
            location=entity.location,
            rack_position=entity.rack_position,
            purchase_date=entity.purchase_date,
            installation_date=entity.installation_date,
            warranty_end_date=entity.warranty_end_date,
            flag=entity.flag,
            notes=entity.notes,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
        if entity.component_type.supports_network_fields:
            for name in _NETWORK_COLUMNS:
                setattr(model, name, getattr(entity, name))
        return model

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Inventory %s failed", operation)
            raise InventoryPersistenceError(operation) from exc

    def _filtered(self, model_cls, status: ComponentStatus | None, search: str | None):
        conditions = []
        if status is not None:
            conditions.append(model_cls.status == status)
        if search:
            conditions.append(
                or_(*(
                    getattr(model_cls, column).icontains(search, autoescape=True)
                    for column in _SEARCH_COLUMNS
                ))
            )
        return conditions

    async def get_by_id(
        self, component_type: ComponentType, record_id: int
    ) -> InventoryRecord | None:
        async with self._guard("get"):
            result = await self._session.get(MODEL_BY_TYPE[component_type], record_id)
        return self._to_entity(component_type, result) if result else None

    async def get_by_serial(
        self, component_type: ComponentType, serial_number: str
    ) -> InventoryRecord | None:
        model_cls = MODEL_BY_TYPE[component_type]
        stmt = select(model_cls).where(model_cls.serial_number == serial_number)
        async with self._guard("lookup"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._to_entity(component_type, model) if model else None

    async def get_all(
        self,
        component_type: ComponentType,
        *,
        status: ComponentStatus | None = None,
        search: str | None = None,
        sort_by: str = "created_at",
        descending: bool = True,
        skip: int = 0,
        limit: int = 50,
    ) -> list[InventoryRecord]:
        model_cls = MODEL_BY_TYPE[component_type]
        stmt = select(model_cls).where(*self._filtered(model_cls, status, search))

        sort_column = getattr(model_cls, sort_by)
        if descending:
            stmt = stmt.order_by(sort_column.desc(), model_cls.id.desc())
        else:
            stmt = stmt.order_by(sort_column.asc(), model_cls.id.asc())

        stmt = stmt.offset(skip).limit(limit)
        async with self._guard("list"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._to_entity(component_type, row) for row in models]

    async def count(
        self,
        component_type: ComponentType,
        *,
        status: ComponentStatus | None = None,
        search: str | None = None,
    ) -> int:
        model_cls = MODEL_BY_TYPE[component_type]
        stmt = (
            select(func.count())
            .select_from(model_cls)
            .where(*self._filtered(model_cls, status, search))
        )
        async with self._guard("count"):
            result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_by_status(
        self, component_type: ComponentType, *, search: str | None = None
    ) -> dict[ComponentStatus, int]:
        model_cls = MODEL_BY_TYPE[component_type]
        stmt = (
            select(model_cls.status, func.count())
            .where(*self._filtered(model_cls, None, search))
            .group_by(model_cls.status)
        )
        async with self._guard("count"):
            result = await self._session.execute(stmt)
            rows = result.all()
        return {status: total for status, total in rows}

    async def create(self, record: InventoryRecord) -> InventoryRecord:
        model = self._to_model(record)
        async with self._guard("add"):
            self._session.add(model)
            try:
                await self._session.flush()
            except IntegrityError:
                # Lost a race with a concurrent insert of the same serial.
                await self._session.rollback()
                raise DuplicateEntityError(
                    "Component", "serial_number", record.serial_number
                ) from None
        return self._to_entity(record.component_type, model)

    async def update(self, record: InventoryRecord) -> InventoryRecord:
        model_cls = MODEL_BY_TYPE[record.component_type]
        async with self._guard("update"):
            model = await self._session.get(model_cls, record.id)
            if model is None:
                raise EntityNotFoundError("Component", record.id)
            for name in editable_fields_for(record.component_type):
                setattr(model, name, getattr(record, name))
            model.updated_at = record.updated_at
            await self._session.flush()
        return self._to_entity(record.component_type, model)

    async def delete(self, component_type: ComponentType, record_id: int) -> bool:
        async with self._guard("delete"):
            model = await self._session.get(MODEL_BY_TYPE[component_type], record_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True
