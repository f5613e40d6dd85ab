"""
In-Memory Storage

Dictionary-backed implementations of the storage interfaces.
Used in tests and as the default wiring when the application
has not supplied its own store.
"""

from typing import Iterable, Optional
from uuid import UUID

import structlog

from bill_reminders.models.audit import AuditEvent
from bill_reminders.models.bill import Bill
from bill_reminders.services.storage.interface import (
    AuditStorageInterface,
    BillStorageInterface,
    NotFoundError,
)


logger = structlog.get_logger(__name__)


class InMemoryBillStorage(BillStorageInterface):
    """Bills keyed by id, kept in insertion order."""

    def __init__(self, bills: Optional[Iterable[Bill]] = None):
        self._bills: dict[str, Bill] = {}
        for bill in bills or []:
            self._bills[bill.id] = bill

    async def list_bills(self) -> list[Bill]:
        return list(self._bills.values())

    async def get_bill_by_id(self, bill_id: str) -> Optional[Bill]:
        return self._bills.get(bill_id)

    async def update_bill(self, bill: Bill) -> bool:
        if bill.id not in self._bills:
            raise NotFoundError(f"Bill {bill.id} not found")
        self._bills[bill.id] = bill
        logger.debug("bill_updated", bill_id=bill.id)
        return True


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
