"""
Configuration Management for Bill Reminders

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The notification window (7 days overdue, 3 days upcoming) is NOT configurable;
it lives as constants in the deriver. Only presentation-side choices such as
the snooze presets and logging live here.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NotificationSettings(BaseSettings):
    """Notification list and snooze configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NOTIFICATIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    snooze_options_hours: str = Field(
        default="3,12,24",
        description="Comma-separated snooze presets offered to the user, in hours"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the local structured log"
    )

    @field_validator('snooze_options_hours')
    @classmethod
    def validate_snooze_options(cls, v: str) -> str:
        """Every preset must be a positive whole number of hours."""
        for part in v.split(","):
            part = part.strip()
            if not part.isdigit() or int(part) <= 0:
                raise ValueError(f"Invalid snooze preset: {part!r}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()

    @property
    def snooze_options(self) -> list[int]:
        """Get snooze presets as a sorted list of hours."""
        return sorted({int(part) for part in self.snooze_options_hours.split(",")})


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment, bound into every audit log line"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG logging)"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def notifications(self) -> NotificationSettings:
        return NotificationSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool | str]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    `<name>_error` entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("notifications", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
