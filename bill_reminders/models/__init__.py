"""
Data Models Package

This package contains all Pydantic models used by Bill Reminders.
Bills, derived notifications and action requests all conform to these schemas.
"""

from bill_reminders.models.bill import (
    Bill,
    NotificationEntry,
    RecurringFrequency,
    SnoozeRequest,
    StatusTone,
    UrgencyBucket,
    UrgencyKind,
)
from bill_reminders.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Bill and notification models
    "Bill",
    "NotificationEntry",
    "RecurringFrequency",
    "SnoozeRequest",
    "StatusTone",
    "UrgencyBucket",
    "UrgencyKind",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
