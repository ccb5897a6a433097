"""SQLAlchemy ORM models for the per-type inventory tables.

All six tables share one column set; ``nic_inventory`` adds the network
columns.
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Enum as SAEnum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ims.domain.entities import ComponentStatus, ComponentType
from ims.infrastructure.database.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryColumnsMixin:
    """Columns common to every component inventory table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identifier: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    serial_number: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    status: Mapped[ComponentStatus] = mapped_column(
        SAEnum(
            ComponentStatus,
            name="component_status",
            native_enum=False,
            create_constraint=True,
            length=20,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=ComponentStatus.AVAILABLE,
        index=True,
    )
    server_identifier: Mapped[str | None] = mapped_column(String(64), nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    rack_position: Mapped[str | None] = mapped_column(String(20), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    installation_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    flag: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}(id={self.id}, "
            f"serial='{self.serial_number}', status='{self.status}')>"
        )


class CpuInventoryModel(InventoryColumnsMixin, Base):
    __tablename__ = "cpu_inventory"


class RamInventoryModel(InventoryColumnsMixin, Base):
    __tablename__ = "ram_inventory"


class MotherboardInventoryModel(InventoryColumnsMixin, Base):
    __tablename__ = "motherboard_inventory"


class StorageInventoryModel(InventoryColumnsMixin, Base):
    __tablename__ = "storage_inventory"


class CaddyInventoryModel(InventoryColumnsMixin, Base):
    __tablename__ = "caddy_inventory"


class NicInventoryModel(InventoryColumnsMixin, Base):
    """ORM model: maps to the 'nic_inventory' table, with network columns."""

    __tablename__ = "nic_inventory"

    mac_address: Mapped[str | None] = mapped_column(String(17), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    network_name: Mapped[str | None] = mapped_column(String(100), nullable=True)


MODEL_BY_TYPE: dict[ComponentType, type[InventoryColumnsMixin]] = {
    ComponentType.CPU: CpuInventoryModel,
    ComponentType.RAM: RamInventoryModel,
    ComponentType.MOTHERBOARD: MotherboardInventoryModel,
    ComponentType.STORAGE: StorageInventoryModel,
    ComponentType.CADDY: CaddyInventoryModel,
    ComponentType.NIC: NicInventoryModel,
}
