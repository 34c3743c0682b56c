"""Unit tests for Django settings configuration."""

from django.conf import settings
from django.test import SimpleTestCase

from alerts.models import Alert


class TestTestSettingsConfiguration(SimpleTestCase):
    """Tests that test settings override the main settings."""

    def test_test_mode_flag_is_set(self):
        """Test that TEST_MODE flag is set in test settings."""
        self.assertTrue(settings.TEST_MODE)

    def test_debug_is_disabled_in_tests(self):
        """Test that DEBUG is False in test environment."""
        self.assertFalse(settings.DEBUG)

    def test_in_memory_database(self):
        """Test that tests use an in-memory SQLite database."""
        self.assertEqual(settings.DATABASES["default"]["NAME"], ":memory:")

    def test_scheduler_autostart_disabled(self):
        """Test that the reminder scheduler never starts with the test app."""
        self.assertFalse(settings.REMINDER_SCHEDULER_AUTOSTART)

    def test_only_in_app_channel_enabled(self):
        """Test that tests never reach SMTP or SMS providers by default."""
        self.assertEqual(settings.ALERT_CHANNELS_ENABLED, ["in_app"])

    def test_unmanaged_models_are_managed_in_tests(self):
        """Test that the test runner creates tables for external models."""
        self.assertTrue(Alert._meta.managed)


class TestAlertingSettings(SimpleTestCase):
    """Tests for alerting-specific settings."""

    def test_reminder_and_snooze_defaults(self):
        """Test reminder interval and snooze bounds."""
        self.assertEqual(settings.REMINDER_INTERVAL_MINUTES, 120)
        self.assertEqual(settings.DEFAULT_SNOOZE_HOURS, 24)
        self.assertEqual(settings.MAX_SNOOZE_HOURS, 168)

    def test_exception_handler_configured(self):
        """Test DRF uses the alerting exception handler."""
        self.assertEqual(
            settings.REST_FRAMEWORK["EXCEPTION_HANDLER"],
            "alerts.exceptions.handlers.custom_exception_handler",
        )

    def test_request_id_middleware_first(self):
        """Test the request id is bound before other middleware runs."""
        self.assertEqual(settings.MIDDLEWARE[0], "alerts.middleware.RequestIDMiddleware")
