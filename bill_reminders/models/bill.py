"""
Core Data Models for Bill Reminders

These models define the schemas for everything the notification layer reads
and produces:
1. Bill - the record owned by the application's bill store
2. UrgencyBucket - how close a bill is to (or past) its due date
3. NotificationEntry - one row of the derived notification list
4. SnoozeRequest - a reminder deferral the application applies itself

DESIGN DECISION: Every model here is frozen. The deriver only reads bills
and returns fresh values; it never mutates what it was given.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class RecurringFrequency(str, Enum):
    """How often a recurring bill comes due."""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class UrgencyKind(str, Enum):
    """
    Due-date proximity classes.

    A bill outside the notification window has no urgency at all;
    it simply does not appear in the list.
    """
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"


class StatusTone(str, Enum):
    """
    Theme color token for a notification's status line.

    The application maps these onto its own palette.
    """
    ERROR = "error"
    WARNING = "warning"
    PRIMARY = "primary"


# =============================================================================
# BILL MODEL
# =============================================================================

class Bill(BaseModel):
    """
    A payment obligation as stored by the application.

    CRITICAL: due_date is kept as the raw ISO-8601 string.
    It is parsed by the deriver, which rejects malformed values loudly
    instead of letting the model coerce or drop them.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique, stable bill identifier"
    )
    name: str = Field(
        ...,
        max_length=200,
        description="Display name"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount due (currency-agnostic)"
    )
    due_date: str = Field(
        ...,
        description="Due date as an ISO-8601 date or datetime string"
    )
    is_paid: bool = Field(
        default=False,
        description="Has this bill been paid?"
    )

    # Optional bookkeeping fields
    category: str = Field(
        default="other",
        max_length=50,
    )
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
    )
    paid_date: Optional[str] = Field(
        default=None,
        description="When the bill was paid (ISO-8601)"
    )


# =============================================================================
# NOTIFICATION MODELS
# =============================================================================

class UrgencyBucket(BaseModel):
    """
    Classification of a bill's due-date proximity.

    `days` is days late for OVERDUE, days remaining for DUE_SOON,
    and always 0 for DUE_TODAY.
    """
    model_config = ConfigDict(frozen=True)

    kind: UrgencyKind
    days: int = Field(default=0, ge=0)

    @model_validator(mode='after')
    def validate_days(self) -> 'UrgencyBucket':
        """Keep `days` consistent with the kind."""
        if self.kind == UrgencyKind.DUE_TODAY:
            if self.days != 0:
                raise ValueError("A bill due today has no day offset")
        elif self.days <= 0:
            raise ValueError(f"{self.kind.value} requires a positive day count")
        return self

    @classmethod
    def overdue(cls, days_late: int) -> 'UrgencyBucket':
        return cls(kind=UrgencyKind.OVERDUE, days=days_late)

    @classmethod
    def due_today(cls) -> 'UrgencyBucket':
        return cls(kind=UrgencyKind.DUE_TODAY)

    @classmethod
    def due_soon(cls, days_remaining: int) -> 'UrgencyBucket':
        return cls(kind=UrgencyKind.DUE_SOON, days=days_remaining)

    @property
    def status_text(self) -> str:
        """Short human-readable status line."""
        unit = "day" if self.days == 1 else "days"
        if self.kind == UrgencyKind.OVERDUE:
            return f"Overdue by {self.days} {unit}"
        if self.kind == UrgencyKind.DUE_TODAY:
            return "Due today"
        return f"Due in {self.days} {unit}"

    @property
    def tone(self) -> StatusTone:
        """Overdue is an error; today and tomorrow are warnings."""
        if self.kind == UrgencyKind.OVERDUE:
            return StatusTone.ERROR
        if self.days <= 1:
            return StatusTone.WARNING
        return StatusTone.PRIMARY


class NotificationEntry(BaseModel):
    """
    One derived notification.

    Recomputed on every derivation and never persisted.
    """
    model_config = ConfigDict(frozen=True)

    bill: Bill
    bucket: UrgencyBucket
    sort_key: datetime = Field(
        ...,
        description="Parsed due instant used for ordering"
    )


class SnoozeRequest(BaseModel):
    """
    A request to defer the reminder for a bill.

    The application decides where to keep it and how it suppresses
    the reminder until `remind_after`.
    """
    model_config = ConfigDict(frozen=True)

    bill_id: str
    bill_name: str
    hours: int = Field(..., gt=0)
    requested_at: datetime
    remind_after: datetime

    @property
    def confirmation_message(self) -> str:
        unit = "hour" if self.hours == 1 else "hours"
        return f'You\'ll be reminded about "{self.bill_name}" in {self.hours} {unit}.'
