"""
Abstract Storage Interface

DESIGN DECISION: The bill store belongs to the surrounding application.
We define only the operations the notification flow needs, so that:
1. Any backend (device storage, a database, a remote API) can plug in
2. In-memory storage can be used for testing
3. The deriver stays free of storage concerns

Snooze state is deliberately absent: where a snooze is kept and how it
suppresses reminders is the application's decision.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from bill_reminders.models.bill import Bill
from bill_reminders.models.audit import AuditEvent


class BillStorageInterface(ABC):
    """
    Abstract interface for bill storage operations.
    """

    @abstractmethod
    async def list_bills(self) -> list[Bill]:
        """
        Return a snapshot of all bills, in the store's natural order.
        """
        pass

    @abstractmethod
    async def get_bill_by_id(self, bill_id: str) -> Optional[Bill]:
        """
        Retrieve a bill by its ID.

        Returns:
            The bill if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_bill(self, bill: Bill) -> bool:
        """
        Replace an existing bill with an updated copy.

        Returns:
            True if updated successfully

        Raises:
            StorageError: If update fails
            NotFoundError: If bill doesn't exist
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID, in chronological order.
        """
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity, in chronological order.
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass
