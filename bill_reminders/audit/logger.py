"""
Audit Logger

DESIGN DECISION: Every user action on a notification is logged.
This provides:
1. Complete traceability of pay and snooze actions
2. Debugging capability when a bill record is malformed
3. A history the user can inspect

The audit logger:
- Is async so storage writes fit the application's event loop
- Gracefully handles storage failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from bill_reminders.config import get_settings
from bill_reminders.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from bill_reminders.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: Optional[str] = None) -> None:
    """
    Route structlog output through the stdlib root logger at the configured level.

    Without an explicit level, DEBUG_MODE forces DEBUG; otherwise
    NOTIFICATIONS_LOG_LEVEL applies.
    """
    settings = get_settings()
    if log_level:
        level = log_level
    elif settings.app.debug_mode:
        level = "DEBUG"
    else:
        level = settings.notifications.log_level
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger().setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("bill_reminders.audit").bind(
            environment=get_settings().app.app_environment,
        )

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_notifications_derived(
        self,
        bill_count: int,
        notification_ids: list[str],
        correlation_id: UUID,
    ) -> None:
        """Log a derivation of the notification list."""
        event = AuditEventBuilder.notifications_derived(
            bill_count=bill_count,
            notification_ids=notification_ids,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_malformed_bill(
        self,
        bill_id: str,
        due_date: Any,
        correlation_id: UUID,
    ) -> None:
        """Log a bill rejected for an unparseable due date."""
        event = AuditEventBuilder.malformed_bill_rejected(
            bill_id=bill_id,
            due_date=due_date,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_bill_marked_paid(
        self,
        bill_id: str,
        bill_name: str,
        amount: str,
        correlation_id: UUID,
    ) -> None:
        """Log a bill marked as paid."""
        event = AuditEventBuilder.bill_marked_paid(
            bill_id=bill_id,
            bill_name=bill_name,
            amount=amount,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_bill_snoozed(
        self,
        bill_id: str,
        hours: int,
        remind_after: datetime,
        correlation_id: UUID,
    ) -> None:
        """Log a snoozed reminder."""
        event = AuditEventBuilder.bill_snoozed(
            bill_id=bill_id,
            hours=hours,
            remind_after=remind_after,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a bill storage failure."""
        event = AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., opening the
    notifications list). Pass it through all subsequent operations.
    """
    return uuid4()
