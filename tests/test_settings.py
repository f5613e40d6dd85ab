"""Tests for configuration loading."""

import asyncio
import logging

import pytest
import structlog
from pydantic import ValidationError

from bill_reminders.audit import AuditLogger, configure_logging
from bill_reminders.config import NotificationSettings, get_settings, validate_all_settings
from bill_reminders.models.audit import AuditEvent, AuditEventType


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestNotificationSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("NOTIFICATIONS_SNOOZE_OPTIONS_HOURS", raising=False)
        monkeypatch.delenv("NOTIFICATIONS_LOG_LEVEL", raising=False)
        settings = NotificationSettings()
        assert settings.snooze_options == [3, 12, 24]
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("NOTIFICATIONS_SNOOZE_OPTIONS_HOURS", "24, 1,6")
        monkeypatch.setenv("NOTIFICATIONS_LOG_LEVEL", "debug")
        settings = NotificationSettings()
        assert settings.snooze_options == [1, 6, 24]
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["0", "3,-1", "3,abc", ""])
    def test_rejects_bad_snooze_options(self, monkeypatch, value):
        monkeypatch.setenv("NOTIFICATIONS_SNOOZE_OPTIONS_HOURS", value)
        with pytest.raises(ValidationError):
            NotificationSettings()

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("NOTIFICATIONS_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            NotificationSettings()


class TestValidateAllSettings:

    def test_all_valid(self, monkeypatch):
        monkeypatch.delenv("NOTIFICATIONS_SNOOZE_OPTIONS_HOURS", raising=False)
        monkeypatch.delenv("NOTIFICATIONS_LOG_LEVEL", raising=False)
        results = validate_all_settings()
        assert results["notifications"] is True
        assert results["app"] is True

    def test_reports_failure(self, monkeypatch):
        monkeypatch.setenv("NOTIFICATIONS_LOG_LEVEL", "LOUD")
        results = validate_all_settings()
        assert results["notifications"] is False
        assert "notifications_error" in results
        assert isinstance(results["notifications_error"], str)


class TestSettingsWiring:

    @pytest.fixture
    def root_level(self):
        root = logging.getLogger()
        original = root.level
        yield root
        root.setLevel(original)

    def test_debug_mode_forces_debug_logging(self, monkeypatch, root_level):
        monkeypatch.setenv("DEBUG_MODE", "true")
        monkeypatch.setenv("NOTIFICATIONS_LOG_LEVEL", "WARNING")
        configure_logging()
        assert root_level.level == logging.DEBUG

    def test_log_level_used_without_debug_mode(self, monkeypatch, root_level):
        monkeypatch.delenv("DEBUG_MODE", raising=False)
        monkeypatch.setenv("NOTIFICATIONS_LOG_LEVEL", "WARNING")
        configure_logging()
        assert root_level.level == logging.WARNING

    def test_audit_log_lines_carry_environment(self, monkeypatch):
        monkeypatch.setenv("APP_ENVIRONMENT", "staging")
        event = AuditEvent(event_type=AuditEventType.BILL_SNOOZED, description="x")

        with structlog.testing.capture_logs() as captured:
            asyncio.run(AuditLogger().log(event))

        assert captured[0]["environment"] == "staging"
        assert captured[0]["event_type"] == "bill_snoozed"
