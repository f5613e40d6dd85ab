"""
Storage Services Package

Provides abstract interfaces for the application's bill and audit stores,
plus in-memory implementations.
"""

from bill_reminders.services.storage.interface import (
    AuditStorageInterface,
    BillStorageInterface,
    NotFoundError,
    StorageError,
)
from bill_reminders.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryBillStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "BillStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryBillStorage",
]
