from .inventory_record_repository import SQLAlchemyInventoryRecordRepository

__all__ = [
    "SQLAlchemyInventoryRecordRepository",
]
