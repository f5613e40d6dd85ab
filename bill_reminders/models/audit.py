"""
Audit Models for Bill Reminders

Every action the notification flow takes on behalf of the user is recorded:
1. Which bills were surfaced, and when
2. Which bills were marked paid
3. Which reminders were snoozed, and until when
4. Which bill records were rejected as malformed

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Derivation
    NOTIFICATIONS_DERIVED = "notifications_derived"
    MALFORMED_BILL_REJECTED = "malformed_bill_rejected"

    # User actions
    BILL_MARKED_PAID = "bill_marked_paid"
    BILL_SNOOZED = "bill_snoozed"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - bill ids are application-owned strings, not UUIDs
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'bill', 'notification_list')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one screen refresh)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_row(self) -> list:
        """
        Convert to a flat row for tabular audit storage.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, entity_type, entity_id,
         correlation_id, description, details_json, error_message, is_user_action]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            self.entity_id or "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.bill_marked_paid(bill_id, bill_name, amount, correlation_id)
        event = AuditEventBuilder.bill_snoozed(bill_id, hours, remind_after, correlation_id)
    """

    @staticmethod
    def notifications_derived(
        bill_count: int,
        notification_ids: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATIONS_DERIVED,
            entity_type="notification_list",
            correlation_id=correlation_id,
            description=(
                f"Derived {len(notification_ids)} notifications "
                f"from {bill_count} bills"
            ),
            details={
                "bill_count": bill_count,
                "notification_count": len(notification_ids),
                "bill_ids": notification_ids,
            },
        )

    @staticmethod
    def malformed_bill_rejected(
        bill_id: str,
        due_date: Any,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MALFORMED_BILL_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description=f"Bill {bill_id} rejected: unparseable due date",
            details={
                "due_date": repr(due_date),
            },
        )

    @staticmethod
    def bill_marked_paid(
        bill_id: str,
        bill_name: str,
        amount: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_MARKED_PAID,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description=f"Bill marked as paid: {bill_name}",
            details={
                "name": bill_name,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def bill_snoozed(
        bill_id: str,
        hours: int,
        remind_after: datetime,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_SNOOZED,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description=f"Reminder snoozed for {hours}h",
            details={
                "hours": hours,
                "remind_after": remind_after.isoformat(),
            },
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={
                "operation": operation,
            },
            correlation_id=correlation_id,
        )
