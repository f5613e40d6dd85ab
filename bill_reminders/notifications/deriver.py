"""
Notification Deriver

DESIGN DECISION: Derivation is a PURE function of (bills, now).
The caller supplies the current instant; nothing here reads a clock,
touches storage, or prompts the user. Confirmation dialogs and
persistence belong to the application that consumes the result.

Window:
- Up to 7 days overdue
- Up to 3 days upcoming
Anything outside the window is not surfaced at all.

IMPORTANT: A bill whose due date cannot be parsed is rejected with
MalformedBillError. It is never skipped or coerced.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional

import structlog

from bill_reminders.models.bill import (
    Bill,
    NotificationEntry,
    SnoozeRequest,
    UrgencyBucket,
)


OVERDUE_WINDOW_DAYS = 7
UPCOMING_WINDOW_DAYS = 3

_ONE_DAY = timedelta(days=1)

logger = structlog.get_logger(__name__)


class NotificationError(Exception):
    """Base error for notification derivation and actions."""
    pass


class MalformedBillError(NotificationError):
    """A bill's due date cannot be parsed as a calendar date."""

    def __init__(self, bill_id: str, due_date: object):
        self.bill_id = bill_id
        self.due_date = due_date
        super().__init__(
            f"Bill {bill_id!r} has an unparseable due date: {due_date!r}"
        )


class InvalidDurationError(NotificationError):
    """A snooze duration is not a positive number of hours."""

    def __init__(self, hours: object):
        self.hours = hours
        super().__init__(
            f"Snooze duration must be a positive whole number of hours, got {hours!r}"
        )


def _reference_zone(now: datetime) -> tzinfo:
    """Zone for values without an offset: `now`'s own, or UTC when `now` is naive."""
    return now.tzinfo or timezone.utc


def to_utc(value: datetime, zone: tzinfo) -> datetime:
    """
    Convert to an absolute UTC instant.

    A naive value is wall time in `zone`. The conversion goes through the
    zone's real offset for that date, so DST is accounted for.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=zone)
    return value.astimezone(timezone.utc)


def parse_due_date(bill: Bill, now: datetime) -> datetime:
    """
    Parse a bill's due date into an instant comparable with `now`.

    A date-only value means midnight of that day. A value without an
    offset is read in `now`'s timezone.
    """
    raw = bill.due_date
    if not isinstance(raw, str):
        raise MalformedBillError(bill.id, raw)
    try:
        due = datetime.fromisoformat(raw.strip())
    except ValueError as e:
        raise MalformedBillError(bill.id, raw) from e

    if due.tzinfo is None and now.tzinfo is not None:
        due = due.replace(tzinfo=now.tzinfo)
    return due


def days_until(due: datetime, now: datetime) -> int:
    """
    Whole days from `now` until `due`, rounded up.

    A due instant equal to `now` gives 0, and so does anything less than
    a full day in the past. One second in the future already counts as 1.

    Both sides are compared as UTC instants, so a DST change between them
    counts as the real elapsed hour it is.
    """
    zone = _reference_zone(now)
    # ceil(a / b) == -((-a) // b) for timedelta floor division
    return -((to_utc(now, zone) - to_utc(due, zone)) // _ONE_DAY)


def classify(diff_days: int) -> Optional[UrgencyBucket]:
    """Map a day offset to its bucket, or None when outside the window."""
    if diff_days < -OVERDUE_WINDOW_DAYS or diff_days > UPCOMING_WINDOW_DAYS:
        return None
    if diff_days < 0:
        return UrgencyBucket.overdue(-diff_days)
    if diff_days == 0:
        return UrgencyBucket.due_today()
    return UrgencyBucket.due_soon(diff_days)


def derive_notifications(
    bills: Iterable[Bill],
    now: datetime,
) -> list[NotificationEntry]:
    """
    Compute the ordered notification list for a snapshot of bills.

    Steps:
    1. Drop paid bills
    2. Classify each remaining bill by whole days until due
    3. Keep only bills inside the overdue/upcoming window
    4. Sort by due instant, earliest first (stable for ties)

    Raises:
        MalformedBillError: If an unpaid bill's due date cannot be parsed
    """
    entries = []
    for bill in bills:
        if bill.is_paid:
            continue

        due = parse_due_date(bill, now)
        bucket = classify(days_until(due, now))
        if bucket is None:
            continue

        entries.append(NotificationEntry(bill=bill, bucket=bucket, sort_key=due))

    zone = _reference_zone(now)
    entries.sort(key=lambda entry: to_utc(entry.sort_key, zone))

    logger.debug(
        "notifications_derived",
        notification_count=len(entries),
    )
    return entries


def build_snooze_request(bill: Bill, hours: int, now: datetime) -> SnoozeRequest:
    """
    Build a snooze request for `bill`, reminding again `hours` from `now`.

    The addition is elapsed time: for an aware `now` it is performed in UTC
    and converted back, so DST changes do not shift the result.

    Raises:
        InvalidDurationError: If hours is not a positive integer
    """
    if isinstance(hours, bool) or not isinstance(hours, int) or hours <= 0:
        raise InvalidDurationError(hours)

    delta = timedelta(hours=hours)
    if now.tzinfo is None:
        remind_after = now + delta
    else:
        remind_after = (now.astimezone(timezone.utc) + delta).astimezone(now.tzinfo)

    return SnoozeRequest(
        bill_id=bill.id,
        bill_name=bill.name,
        hours=hours,
        requested_at=now,
        remind_after=remind_after,
    )


def mark_paid(bill: Bill, paid_at: Optional[datetime] = None) -> Bill:
    """
    Return a copy of `bill` marked as paid.

    The input bill is left untouched; persisting the copy is the caller's job.
    """
    update = {"is_paid": True}
    if paid_at is not None:
        update["paid_date"] = paid_at.isoformat()
    return bill.model_copy(update=update)
