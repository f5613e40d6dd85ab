"""Configuration package."""

from bill_reminders.config.settings import (
    AppSettings,
    NotificationSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "NotificationSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
