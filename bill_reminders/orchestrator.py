"""
Notification Flow Orchestrator

This module ties the pure deriver to the application's collaborators:
1. Bill store  -> snapshot of bills in, paid bills out
2. Clock       -> the current instant, read once per action
3. Audit log   -> a record of every derivation and user action

DESIGN DECISION: The clock is read HERE and passed into the deriver.
The deriver itself never looks at the time, so it stays deterministic.

Confirmation dialogs remain the caller's job: call `pay` only after
the user has agreed to it.
"""

from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

from bill_reminders.audit import AuditLogger, configure_logging, create_correlation_id
from bill_reminders.config import get_settings
from bill_reminders.models.bill import Bill, NotificationEntry, SnoozeRequest
from bill_reminders.notifications import (
    MalformedBillError,
    build_snooze_request,
    derive_notifications,
    mark_paid,
)
from bill_reminders.services.storage import (
    AuditStorageInterface,
    BillStorageInterface,
    InMemoryAuditStorage,
    InMemoryBillStorage,
    NotFoundError,
    StorageError,
)


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotificationFlow:
    """
    Orchestrates the notifications screen.

    Flow:
    1. Load   -> Snapshot bills from the store
    2. Derive -> Classify and order with the clock's current instant
    3. Act    -> Pay (persisted) or snooze (returned to caller)
    4. Audit  -> Every step above
    """

    def __init__(
        self,
        bill_storage: BillStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
        snooze_options: Optional[list[int]] = None,
    ):
        self._bill_storage = bill_storage
        self._audit_logger = audit_logger
        self._clock = clock or utc_now
        self._snooze_options = (
            snooze_options or get_settings().notifications.snooze_options
        )

    @property
    def snooze_options(self) -> list[int]:
        """Snooze presets to offer next to each notification, in hours."""
        return list(self._snooze_options)

    async def get_notifications(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> list[NotificationEntry]:
        """
        Derive the current notification list.

        Raises:
            MalformedBillError: If a stored unpaid bill has a bad due date.
                                It is audited first, never skipped.
        """
        correlation_id = correlation_id or create_correlation_id()

        bills = await self._bill_storage.list_bills()
        now = self._clock()

        try:
            entries = derive_notifications(bills, now)
        except MalformedBillError as e:
            if self._audit_logger:
                await self._audit_logger.log_malformed_bill(
                    bill_id=e.bill_id,
                    due_date=e.due_date,
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_notifications_derived(
                bill_count=len(bills),
                notification_ids=[entry.bill.id for entry in entries],
                correlation_id=correlation_id,
            )

        return entries

    async def pay(
        self,
        bill_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> Bill:
        """
        Mark a bill as paid and persist it.

        Returns:
            The updated bill

        Raises:
            NotFoundError: If the bill doesn't exist
            StorageError: If the store rejects the update
        """
        correlation_id = correlation_id or create_correlation_id()

        bill = await self._get_bill(bill_id)
        paid = mark_paid(bill, paid_at=self._clock())

        try:
            await self._bill_storage.update_bill(paid)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="update_bill",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_bill_marked_paid(
                bill_id=paid.id,
                bill_name=paid.name,
                amount=str(paid.amount),
                correlation_id=correlation_id,
            )

        return paid

    async def snooze(
        self,
        bill_id: str,
        hours: int,
        correlation_id: Optional[UUID] = None,
    ) -> SnoozeRequest:
        """
        Build a snooze request for a bill.

        Nothing is persisted; the caller decides where the request lives.

        Raises:
            NotFoundError: If the bill doesn't exist
            InvalidDurationError: If hours is not positive
        """
        correlation_id = correlation_id or create_correlation_id()

        bill = await self._get_bill(bill_id)
        request = build_snooze_request(bill, hours, self._clock())

        if self._audit_logger:
            await self._audit_logger.log_bill_snoozed(
                bill_id=request.bill_id,
                hours=request.hours,
                remind_after=request.remind_after,
                correlation_id=correlation_id,
            )

        return request

    async def _get_bill(self, bill_id: str) -> Bill:
        bill = await self._bill_storage.get_bill_by_id(bill_id)
        if bill is None:
            raise NotFoundError(f"Bill {bill_id} not found")
        return bill


def create_notification_flow(
    bill_storage: Optional[BillStorageInterface] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
    clock: Optional[Clock] = None,
) -> NotificationFlow:
    """
    Factory function to wire a NotificationFlow.

    Args:
        bill_storage: The application's bill store.
                      Defaults to an empty in-memory store.
        audit_storage: Where audit events are persisted.
                       Defaults to an in-memory log.
        clock: Source of the current instant. Defaults to UTC now.
    """
    configure_logging()

    return NotificationFlow(
        bill_storage=bill_storage or InMemoryBillStorage(),
        audit_logger=AuditLogger(audit_storage or InMemoryAuditStorage()),
        clock=clock,
    )
