"""Notification derivation package."""

from bill_reminders.notifications.deriver import (
    OVERDUE_WINDOW_DAYS,
    UPCOMING_WINDOW_DAYS,
    InvalidDurationError,
    MalformedBillError,
    NotificationError,
    build_snooze_request,
    derive_notifications,
    mark_paid,
)

__all__ = [
    "OVERDUE_WINDOW_DAYS",
    "UPCOMING_WINDOW_DAYS",
    "InvalidDurationError",
    "MalformedBillError",
    "NotificationError",
    "build_snooze_request",
    "derive_notifications",
    "mark_paid",
]
