"""Effective alert state for one recipient and the capabilities it grants.

All functions are pure: they read the alert, the optional preference and
``now`` and never touch the store. A missing preference is treated as never
read and never snoozed.
"""

from datetime import datetime, timedelta

from django.conf import settings
from django.utils import timezone

from alerts.enums import AlertState
from alerts.models import Alert, UserAlertPreference

DEFAULT_REMINDER_INTERVAL_MINUTES = 120


def reminder_interval(interval_minutes: int | None = None) -> timedelta:
    """Return the reminder interval, reading settings when not given."""
    if interval_minutes is None:
        interval_minutes = getattr(
            settings, "REMINDER_INTERVAL_MINUTES", DEFAULT_REMINDER_INTERVAL_MINUTES
        )
    return timedelta(minutes=interval_minutes)


def effective_state(
    alert: Alert,
    preference: UserAlertPreference | None = None,
    now: datetime | None = None,
) -> AlertState:
    """Derive the alert state for a recipient.

    Expiry wins over snooze. An alert whose start time is still in the
    future is ACTIVE but not yet deliverable.

    Args:
        alert: The alert being evaluated.
        preference: Recipient preference, if one exists.
        now: Evaluation instant; defaults to the current time.

    Returns:
        The recipient's effective AlertState.
    """
    now = now or timezone.now()
    if alert.expiry_time is not None and now > alert.expiry_time:
        return AlertState.EXPIRED
    if (
        preference is not None
        and preference.snoozed_until is not None
        and now < preference.snoozed_until
    ):
        return AlertState.SNOOZED
    return AlertState.ACTIVE


def can_deliver(
    alert: Alert,
    preference: UserAlertPreference | None = None,
    now: datetime | None = None,
) -> bool:
    """Check whether the alert may be delivered to the recipient now."""
    now = now or timezone.now()
    state = effective_state(alert, preference, now)
    if state is AlertState.ACTIVE:
        return alert.is_within_window(now)
    return False


def next_reminder_time(
    alert: Alert,
    preference: UserAlertPreference | None = None,
    last_delivery: datetime | None = None,
    now: datetime | None = None,
    interval_minutes: int | None = None,
) -> datetime | None:
    """Compute when the next reminder is due.

    Args:
        alert: The alert being evaluated.
        preference: Recipient preference, if one exists.
        last_delivery: Latest delivery time across all channels, if any.
        now: Evaluation instant; defaults to the current time.
        interval_minutes: Override for the configured reminder interval.

    Returns:
        The due instant, or None when no reminder should ever follow
        (reminders disabled, not active, or the due instant is at or past
        expiry).
    """
    now = now or timezone.now()
    state = effective_state(alert, preference, now)
    if state is not AlertState.ACTIVE or not alert.reminder_enabled:
        return None

    due = (last_delivery or now) + reminder_interval(interval_minutes)
    if alert.expiry_time is not None and due >= alert.expiry_time:
        return None
    return due


def should_remind(
    alert: Alert,
    preference: UserAlertPreference | None = None,
    now: datetime | None = None,
) -> bool:
    """Check whether the recipient is still owed reminders."""
    now = now or timezone.now()
    state = effective_state(alert, preference, now)
    if state is not AlertState.ACTIVE or not alert.reminder_enabled:
        return False
    if preference is None:
        return True
    if preference.is_read:
        return False
    return preference.snoozed_until is None or preference.snoozed_until <= now
