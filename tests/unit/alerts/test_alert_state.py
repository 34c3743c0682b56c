"""Tests for effective alert state and reminder timing."""

from datetime import UTC, datetime, timedelta
from unittest import TestCase

from django.test import override_settings

from alerts.enums import AlertState
from alerts.models import Alert, UserAlertPreference
from alerts.services.alert_state import (
    can_deliver,
    effective_state,
    next_reminder_time,
    reminder_interval,
    should_remind,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def make_alert(**overrides) -> Alert:
    fields = {
        "id": "alert-1",
        "title": "Disk almost full",
        "message": "Clean up /var",
        "severity": "warning",
        "visibility_type": "organization",
        "reminder_enabled": True,
    }
    fields.update(overrides)
    return Alert(**fields)


def make_preference(**overrides) -> UserAlertPreference:
    fields = {"user_id": "user-1", "alert_id": "alert-1", "is_read": False}
    fields.update(overrides)
    return UserAlertPreference(**fields)


class TestEffectiveState(TestCase):
    """Test suite for effective_state."""

    def test_open_alert_without_preference_is_active(self):
        """Test an alert with no bounds and no preference is ACTIVE."""
        self.assertIs(effective_state(make_alert(), None, NOW), AlertState.ACTIVE)

    def test_past_expiry_is_expired(self):
        """Test an alert past its expiry is EXPIRED."""
        alert = make_alert(expiry_time=NOW - timedelta(minutes=1))
        self.assertIs(effective_state(alert, None, NOW), AlertState.EXPIRED)

    def test_expiry_wins_over_snooze(self):
        """Test expiry takes precedence over an active snooze."""
        alert = make_alert(expiry_time=NOW - timedelta(minutes=1))
        preference = make_preference(snoozed_until=NOW + timedelta(hours=1))
        self.assertIs(effective_state(alert, preference, NOW), AlertState.EXPIRED)

    def test_future_snooze_is_snoozed(self):
        """Test a snooze ending after now yields SNOOZED."""
        preference = make_preference(snoozed_until=NOW + timedelta(hours=1))
        self.assertIs(effective_state(make_alert(), preference, NOW), AlertState.SNOOZED)

    def test_elapsed_snooze_is_active(self):
        """Test a snooze that ended is ignored."""
        preference = make_preference(snoozed_until=NOW - timedelta(seconds=1))
        self.assertIs(effective_state(make_alert(), preference, NOW), AlertState.ACTIVE)

    def test_snooze_ending_exactly_now_is_active(self):
        """Test snoozed_until == now no longer snoozes."""
        preference = make_preference(snoozed_until=NOW)
        self.assertIs(effective_state(make_alert(), preference, NOW), AlertState.ACTIVE)

    def test_before_start_is_active(self):
        """Test an alert that has not started yet is still ACTIVE."""
        alert = make_alert(start_time=NOW + timedelta(hours=1))
        self.assertIs(effective_state(alert, None, NOW), AlertState.ACTIVE)


class TestCanDeliver(TestCase):
    """Test suite for can_deliver."""

    def test_open_alert_is_deliverable(self):
        """Test an unbounded active alert can be delivered."""
        self.assertTrue(can_deliver(make_alert(), None, NOW))

    def test_not_started_is_not_deliverable(self):
        """Test delivery waits for start_time."""
        alert = make_alert(start_time=NOW + timedelta(minutes=5))
        self.assertFalse(can_deliver(alert, None, NOW))

    def test_start_time_is_inclusive(self):
        """Test delivery is allowed exactly at start_time."""
        self.assertTrue(can_deliver(make_alert(start_time=NOW), None, NOW))

    def test_expiry_time_is_exclusive(self):
        """Test delivery is refused exactly at expiry_time."""
        self.assertFalse(can_deliver(make_alert(expiry_time=NOW), None, NOW))

    def test_expired_is_not_deliverable(self):
        """Test an expired alert can never be delivered."""
        alert = make_alert(expiry_time=NOW - timedelta(hours=1))
        self.assertFalse(can_deliver(alert, None, NOW))

    def test_snoozed_is_not_deliverable(self):
        """Test a snoozed recipient gets nothing."""
        preference = make_preference(snoozed_until=NOW + timedelta(hours=2))
        self.assertFalse(can_deliver(make_alert(), preference, NOW))

    def test_read_recipient_is_still_deliverable(self):
        """Test the read flag does not block explicit delivery."""
        self.assertTrue(can_deliver(make_alert(), make_preference(is_read=True), NOW))


class TestNextReminderTime(TestCase):
    """Test suite for next_reminder_time."""

    def test_due_one_interval_after_last_delivery(self):
        """Test the reminder is due one interval after the last delivery."""
        last = NOW - timedelta(minutes=30)
        due = next_reminder_time(make_alert(), None, last, NOW, interval_minutes=120)
        self.assertEqual(due, last + timedelta(minutes=120))

    def test_without_history_counts_from_now(self):
        """Test a missing last delivery counts from now."""
        due = next_reminder_time(make_alert(), None, None, NOW, interval_minutes=60)
        self.assertEqual(due, NOW + timedelta(minutes=60))

    def test_reminders_disabled_returns_none(self):
        """Test no reminder when reminders are disabled."""
        alert = make_alert(reminder_enabled=False)
        self.assertIsNone(next_reminder_time(alert, None, NOW, NOW))

    def test_due_at_or_after_expiry_returns_none(self):
        """Test a reminder that would land on expiry is dropped."""
        alert = make_alert(expiry_time=NOW + timedelta(minutes=120))
        self.assertIsNone(
            next_reminder_time(alert, None, NOW, NOW, interval_minutes=120)
        )

    def test_due_before_expiry_is_kept(self):
        """Test a reminder landing before expiry is returned."""
        alert = make_alert(expiry_time=NOW + timedelta(minutes=121))
        due = next_reminder_time(alert, None, NOW, NOW, interval_minutes=120)
        self.assertEqual(due, NOW + timedelta(minutes=120))

    def test_snoozed_returns_none(self):
        """Test a snoozed recipient has no reminder time."""
        preference = make_preference(snoozed_until=NOW + timedelta(hours=1))
        self.assertIsNone(next_reminder_time(make_alert(), preference, None, NOW))

    def test_expired_returns_none(self):
        """Test an expired alert has no reminder time."""
        alert = make_alert(expiry_time=NOW - timedelta(hours=1))
        self.assertIsNone(next_reminder_time(alert, None, None, NOW))

    @override_settings(REMINDER_INTERVAL_MINUTES=15)
    def test_interval_read_from_settings(self):
        """Test the configured interval is used when none is passed."""
        self.assertEqual(reminder_interval(), timedelta(minutes=15))
        due = next_reminder_time(make_alert(), None, NOW, NOW)
        self.assertEqual(due, NOW + timedelta(minutes=15))


class TestShouldRemind(TestCase):
    """Test suite for should_remind."""

    def test_no_preference_should_remind(self):
        """Test an absent preference counts as unread and not snoozed."""
        self.assertTrue(should_remind(make_alert(), None, NOW))

    def test_unread_should_remind(self):
        """Test an unread recipient is reminded."""
        self.assertTrue(should_remind(make_alert(), make_preference(), NOW))

    def test_read_should_not_remind(self):
        """Test a read recipient is never reminded."""
        self.assertFalse(should_remind(make_alert(), make_preference(is_read=True), NOW))

    def test_reminders_disabled_should_not_remind(self):
        """Test reminders disabled on the alert."""
        alert = make_alert(reminder_enabled=False)
        self.assertFalse(should_remind(alert, make_preference(), NOW))

    def test_snoozed_should_not_remind(self):
        """Test an active snooze suppresses reminders."""
        preference = make_preference(snoozed_until=NOW + timedelta(minutes=1))
        self.assertFalse(should_remind(make_alert(), preference, NOW))

    def test_elapsed_snooze_should_remind(self):
        """Test reminders resume once the snooze ends."""
        preference = make_preference(snoozed_until=NOW - timedelta(minutes=1))
        self.assertTrue(should_remind(make_alert(), preference, NOW))

    def test_expired_should_not_remind(self):
        """Test an expired alert is never reminded."""
        alert = make_alert(expiry_time=NOW - timedelta(minutes=1))
        self.assertFalse(should_remind(alert, make_preference(), NOW))
