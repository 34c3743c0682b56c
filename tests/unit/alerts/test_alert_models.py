"""Tests for alert models."""

from datetime import UTC, datetime, timedelta

from django.test import TestCase

from alerts.enums import AlertSeverity, VisibilityType
from alerts.exceptions import InvalidVisibilityError
from alerts.models import Alert, NotificationDelivery, UserAlertPreference, parse_visibility
from tests.factories import AlertFactory, UserFactory

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class TestParseVisibility(TestCase):
    """Test suite for parse_visibility."""

    def test_organization(self):
        """Test organization takes no target."""
        self.assertEqual(
            parse_visibility("organization"), (VisibilityType.ORGANIZATION, None)
        )

    def test_team_and_user(self):
        """Test team and user carry their target id."""
        self.assertEqual(parse_visibility("team:t-1"), (VisibilityType.TEAM, "t-1"))
        self.assertEqual(parse_visibility(" USER : u-9 "), (VisibilityType.USER, "u-9"))

    def test_invalid_values(self):
        """Test unknown types and bad targets are rejected."""
        for value in ("region:emea", "team", "team:", "organization:acme", ""):
            with self.subTest(value=value):
                with self.assertRaises(InvalidVisibilityError):
                    parse_visibility(value)


class TestAlertModel(TestCase):
    """Test suite for the Alert model."""

    def test_visibility_property(self):
        """Test the combined visibility string."""
        self.assertEqual(Alert(visibility_type="organization").visibility, "organization")
        self.assertEqual(
            Alert(visibility_type="team", visibility_target="t-1").visibility, "team:t-1"
        )

    def test_severity_level(self):
        """Test severity is exposed as an enum member."""
        self.assertIs(Alert(severity="critical").severity_level, AlertSeverity.CRITICAL)

    def test_window_is_half_open(self):
        """Test start is inclusive and expiry exclusive."""
        alert = Alert(start_time=NOW, expiry_time=NOW + timedelta(hours=1))

        self.assertFalse(alert.is_within_window(NOW - timedelta(seconds=1)))
        self.assertTrue(alert.is_within_window(NOW))
        self.assertFalse(alert.is_within_window(NOW + timedelta(hours=1)))

    def test_str_and_repr(self):
        """Test string representations."""
        alert = AlertFactory(title="Disk full", severity="critical")

        self.assertEqual(str(alert), "[critical] Disk full")
        self.assertIn("archived=False", repr(alert))

    def test_created_alert_gets_id(self):
        """Test ids are generated on create."""
        alert = AlertFactory()

        self.assertTrue(alert.id)
        self.assertIsNotNone(alert.created_at)


class TestPreferenceAndDeliveryModels(TestCase):
    """Test suite for UserAlertPreference and NotificationDelivery."""

    def setUp(self):
        """Set up test fixtures."""
        self.user = UserFactory()
        self.alert = AlertFactory()

    def test_preference_is_snoozed(self):
        """Test snooze is active strictly before snoozed_until."""
        preference = UserAlertPreference(snoozed_until=NOW)

        self.assertTrue(preference.is_snoozed(NOW - timedelta(seconds=1)))
        self.assertFalse(preference.is_snoozed(NOW))
        self.assertFalse(UserAlertPreference().is_snoozed(NOW))

    def test_delivery_defaults_to_delivered(self):
        """Test the default delivery status."""
        delivery = NotificationDelivery.objects.create(
            alert=self.alert, user=self.user, channel="in_app", delivered_at=NOW
        )

        self.assertEqual(delivery.status, "delivered")
        self.assertEqual(str(delivery), "in_app - delivered")

    def test_delivery_cannot_be_updated(self):
        """Test stored deliveries are append-only."""
        delivery = NotificationDelivery.objects.create(
            alert=self.alert, user=self.user, channel="sms", delivered_at=NOW
        )
        delivery.error_message = "changed"

        with self.assertRaisesRegex(ValueError, "append-only"):
            delivery.save()
