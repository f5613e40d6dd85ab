"""Services package."""

from bill_reminders.services.storage import (
    AuditStorageInterface,
    BillStorageInterface,
    InMemoryAuditStorage,
    InMemoryBillStorage,
    NotFoundError,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "BillStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryBillStorage",
    "NotFoundError",
    "StorageError",
]
