"""Tests for notification channels and the channel registry."""

from datetime import UTC, datetime
from unittest.mock import patch

from django.test import SimpleTestCase, override_settings

from alerts.channels import (
    ChannelRegistry,
    EmailChannel,
    InAppChannel,
    NotificationChannel,
    SmsChannel,
    build_default_registry,
)
from alerts.models import User
from alerts.schemas import DeliveryResult, Notification


def make_notification(**overrides) -> Notification:
    fields = {
        "alert_id": "alert-1",
        "title": "Database failover",
        "message": "Primary is down, replica promoted",
        "severity": "critical",
        "created_at": datetime(2025, 3, 1, 12, 0, tzinfo=UTC),
    }
    fields.update(overrides)
    return Notification(**fields)


def make_user(**overrides) -> User:
    fields = {
        "id": "user-1",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone_number": "+15550000001",
    }
    fields.update(overrides)
    return User(**fields)


class ExplodingChannel(NotificationChannel):
    """Channel whose transport always raises."""

    name = "exploding"

    def _send(self, notification, recipient):
        raise RuntimeError("transport down")


class TestNotificationChannel(SimpleTestCase):
    """Test suite for the channel base class."""

    def test_deliver_converts_exceptions_to_failed_result(self):
        """Test deliver never raises and reports the error."""
        result = ExplodingChannel(enabled=True).deliver(make_notification(), make_user())

        self.assertFalse(result.success)
        self.assertEqual(result.error, "transport down")
        self.assertEqual(result.metadata["channel"], "exploding")

    def test_channel_without_name_is_rejected(self):
        """Test a subclass must define a name."""

        class Nameless(NotificationChannel):
            def _send(self, notification, recipient):
                return DeliveryResult.ok()

        with self.assertRaises(ValueError):
            Nameless()

    @override_settings(ALERT_CHANNELS_ENABLED=["in_app", "sms"])
    def test_enablement_follows_settings(self):
        """Test channels without an explicit flag read ALERT_CHANNELS_ENABLED."""
        self.assertTrue(InAppChannel().is_enabled())
        self.assertTrue(SmsChannel().is_enabled())
        self.assertFalse(EmailChannel().is_enabled())

    @override_settings(ALERT_CHANNELS_ENABLED=[])
    def test_explicit_flag_overrides_settings(self):
        """Test an explicit enabled flag wins over settings."""
        self.assertTrue(EmailChannel(enabled=True).is_enabled())
        self.assertFalse(InAppChannel(enabled=False).is_enabled())


class TestInAppChannel(SimpleTestCase):
    """Test suite for InAppChannel."""

    def test_deliver_succeeds_with_metadata(self):
        """Test in-app delivery succeeds and records who and when."""
        notification = make_notification()
        result = InAppChannel().deliver(notification, make_user())

        self.assertTrue(result.success)
        self.assertIsNone(result.error)
        self.assertEqual(result.metadata["channel"], "in_app")
        self.assertEqual(result.metadata["user_id"], "user-1")
        self.assertEqual(
            result.metadata["delivered_at"], notification.created_at.isoformat()
        )


class TestEmailChannel(SimpleTestCase):
    """Test suite for EmailChannel."""

    @patch("alerts.channels.email.AlertMailer")
    def test_deliver_records_mailer_metadata(self, mock_mailer_class):
        """Test the mailer's Message-ID lands in the delivery metadata."""
        mock_mailer = mock_mailer_class.return_value
        mock_mailer.send_alert_email.return_value = {
            "message_id": "<123@smtp.test.local>",
            "email_address": "ada@example.com",
            "smtp_host": "smtp.test.local",
        }
        notification = make_notification()
        recipient = make_user()

        result = EmailChannel().deliver(notification, recipient)

        self.assertTrue(result.success)
        mock_mailer.send_alert_email.assert_called_once_with(recipient, notification)
        self.assertEqual(result.metadata["message_id"], "<123@smtp.test.local>")
        self.assertEqual(result.metadata["email_address"], "ada@example.com")
        self.assertEqual(result.metadata["channel"], "email")
        self.assertEqual(result.metadata["notification_id"], str(notification.id))

    @patch("alerts.channels.email.AlertMailer")
    def test_missing_email_fails_without_sending(self, mock_mailer_class):
        """Test a recipient without an email address fails cleanly."""
        result = EmailChannel().deliver(make_notification(), make_user(email=""))

        self.assertFalse(result.success)
        self.assertEqual(result.error, "No recipient email address")
        mock_mailer_class.return_value.send_alert_email.assert_not_called()

    @patch("alerts.channels.email.AlertMailer")
    def test_smtp_failure_becomes_failed_result(self, mock_mailer_class):
        """Test transport errors are reported, not raised."""
        mock_mailer_class.return_value.send_alert_email.side_effect = OSError(
            "Connection refused"
        )

        result = EmailChannel().deliver(make_notification(), make_user())

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Connection refused")


class TestSmsChannel(SimpleTestCase):
    """Test suite for SmsChannel."""

    def test_deliver_returns_message_id(self):
        """Test SMS delivery returns a generated message id."""
        result = SmsChannel().deliver(make_notification(), make_user())

        self.assertTrue(result.success)
        self.assertTrue(result.metadata["message_id"].startswith("sms-"))
        self.assertEqual(result.metadata["phone_number"], "+15550000001")

    def test_missing_phone_number_fails(self):
        """Test a recipient without a phone number fails cleanly."""
        result = SmsChannel().deliver(make_notification(), make_user(phone_number=None))

        self.assertFalse(result.success)
        self.assertEqual(result.error, "No recipient phone number")


class TestChannelRegistry(SimpleTestCase):
    """Test suite for ChannelRegistry."""

    def test_default_registry_order(self):
        """Test the built-in channels are registered in fan-out order."""
        self.assertEqual(build_default_registry().names(), ["in_app", "email", "sms"])

    def test_enabled_channels_keep_registration_order(self):
        """Test enabled_channels filters without reordering."""
        registry = ChannelRegistry(
            [
                SmsChannel(enabled=True),
                InAppChannel(enabled=False),
                EmailChannel(enabled=True),
            ]
        )

        names = [channel.get_name() for channel in registry.enabled_channels()]

        self.assertEqual(names, ["sms", "email"])

    def test_enabled_channels_is_stable(self):
        """Test repeated calls return the same channels."""
        registry = ChannelRegistry([InAppChannel(enabled=True), SmsChannel(enabled=True)])
        self.assertEqual(registry.enabled_channels(), registry.enabled_channels())
        self.assertEqual(len(registry), 2)

    def test_duplicate_name_is_rejected(self):
        """Test a second channel with the same name raises."""
        registry = ChannelRegistry([InAppChannel()])
        with self.assertRaises(ValueError):
            registry.register(InAppChannel())

    def test_get_by_name(self):
        """Test lookup by name."""
        email = EmailChannel()
        registry = ChannelRegistry([InAppChannel(), email])

        self.assertIs(registry.get("email"), email)
        self.assertIsNone(registry.get("pager"))
