"""Delivery orchestration: recipient fan-out, channel fan-out and reminders."""

from collections.abc import Callable
from datetime import datetime, timedelta

from django.conf import settings
from django.utils import timezone

import structlog

from alerts.channels import ChannelRegistry
from alerts.enums import DeliveryStatus
from alerts.exceptions import (
    AlertNotFoundError,
    InvalidSnoozeDurationError,
    RecipientNotFoundError,
)
from alerts.models import Alert, NotificationDelivery, User
from alerts.repositories import AlertStore
from alerts.schemas import Notification
from alerts.schemas.alert import ReminderRunSummary
from alerts.services import alert_state

logger = structlog.get_logger(__name__)

DEFAULT_SNOOZE_HOURS = 24
MAX_SNOOZE_HOURS = 168


class DeliveryOrchestrator:
    """Deliver alerts to eligible recipients through every enabled channel.

    The orchestrator keeps no state of its own. Every decision is made from
    a fresh read of the store, evaluated by the state engine at the instant
    returned by ``clock``.
    """

    def __init__(
        self,
        store: AlertStore,
        registry: ChannelRegistry,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            store: Record store for alerts, users, preferences and deliveries.
            registry: Channels to fan out to, in order.
            clock: Returns the current time.
        """
        self.store = store
        self.registry = registry
        self.clock = clock

    def deliver_alert(self, alert_id: str) -> int:
        """Deliver an alert to every eligible recipient.

        A failure for one recipient is logged and does not stop delivery to
        the others.

        Args:
            alert_id: ID of the alert to deliver.

        Returns:
            Number of recipients that were notified.

        Raises:
            AlertNotFoundError: If the alert is missing or archived.
        """
        alert = self._get_live_alert(alert_id)
        recipients = self.store.query_eligible_recipients(alert)

        delivered = 0
        for recipient in recipients:
            try:
                if self.deliver_to_user(alert, recipient):
                    delivered += 1
            except Exception as e:
                logger.error(
                    "recipient_delivery_failed",
                    alert_id=alert.id,
                    user_id=recipient.id,
                    error=str(e),
                )

        logger.info(
            "alert_delivered",
            alert_id=alert.id,
            severity=alert.severity,
            visibility=alert.visibility,
            eligible_recipients=len(recipients),
            delivered_recipients=delivered,
        )
        return delivered

    def deliver_to_user(self, alert: Alert, recipient: User) -> bool:
        """Deliver an alert to one recipient through all enabled channels.

        Every channel attempt is recorded, whether it succeeded or not, and
        the recipient's preference is created if it did not exist. The alert
        is re-read from the store first, so a stale copy never delivers an
        alert archived after it was loaded.

        Args:
            alert: Alert to deliver.
            recipient: User to notify.

        Returns:
            False if the alert is gone or archived, the recipient already
            read it, or it is not deliverable to them now. True once the
            channels have been attempted.
        """
        now = self.clock()
        current = self.store.get_alert(alert.id)
        if current is None or current.is_archived:
            logger.info(
                "alert_no_longer_deliverable", alert_id=alert.id, user_id=recipient.id
            )
            return False
        alert = current
        preference = self.store.get_preference(recipient.id, alert.id)
        if preference is not None and preference.is_read:
            logger.debug("alert_already_read", alert_id=alert.id, user_id=recipient.id)
            return False
        if not alert_state.can_deliver(alert, preference, now):
            logger.debug(
                "alert_not_deliverable",
                alert_id=alert.id,
                user_id=recipient.id,
                state=alert_state.effective_state(alert, preference, now).value,
            )
            return False

        notification = Notification(
            alert_id=alert.id,
            title=alert.title,
            message=alert.message,
            severity=alert.severity,
            created_at=now,
        )

        for channel in self.registry.enabled_channels():
            result = channel.deliver(notification, recipient)
            if not result.success:
                logger.warning(
                    "channel_delivery_failed",
                    alert_id=alert.id,
                    user_id=recipient.id,
                    channel=channel.get_name(),
                    error=result.error,
                )
            self.store.record_delivery(
                NotificationDelivery(
                    alert_id=alert.id,
                    user_id=recipient.id,
                    channel=channel.get_name(),
                    delivered_at=now,
                    status=(
                        DeliveryStatus.DELIVERED.value
                        if result.success
                        else DeliveryStatus.FAILED.value
                    ),
                    metadata=result.metadata,
                    error_message=result.error,
                )
            )

        self.store.upsert_preference_if_absent(recipient.id, alert.id)
        return True

    def process_reminders(self) -> ReminderRunSummary:
        """Re-deliver active alerts to recipients whose reminder is due.

        Errors are contained per alert and per recipient; the pass always
        runs to the end.

        Returns:
            Counters for the pass.
        """
        now = self.clock()
        summary = ReminderRunSummary()
        alerts = self.store.query_active_alerts_with_reminders(now)

        for alert in alerts:
            summary.alerts_scanned += 1
            try:
                candidates = self.store.query_reminder_candidates(alert, now)
            except Exception as e:
                summary.failures += 1
                logger.error("reminder_alert_failed", alert_id=alert.id, error=str(e))
                continue

            for recipient in candidates:
                try:
                    if self._remind(alert, recipient, now):
                        summary.reminders_sent += 1
                except Exception as e:
                    summary.failures += 1
                    logger.error(
                        "reminder_recipient_failed",
                        alert_id=alert.id,
                        user_id=recipient.id,
                        error=str(e),
                    )

        logger.info(
            "reminders_processed",
            alerts_scanned=summary.alerts_scanned,
            reminders_sent=summary.reminders_sent,
            failures=summary.failures,
        )
        return summary

    def mark_as_read(self, user_id: str, alert_id: str) -> None:
        """Mark an alert read for a user; reminders stop for good.

        Raises:
            AlertNotFoundError: If the alert is missing or archived.
            RecipientNotFoundError: If the user does not exist.
        """
        self._get_live_alert(alert_id)
        self._get_recipient(user_id)
        self.store.mark_preference_read(user_id, alert_id)
        logger.info("alert_marked_read", alert_id=alert_id, user_id=user_id)

    def snooze(
        self, user_id: str, alert_id: str, hours: int | None = None
    ) -> datetime:
        """Suppress delivery of an alert to a user for ``hours``.

        A new snooze replaces any earlier one. The read flag is untouched.

        Args:
            user_id: ID of the user snoozing.
            alert_id: ID of the alert to snooze.
            hours: Snooze length; defaults to DEFAULT_SNOOZE_HOURS.

        Returns:
            The instant the snooze ends.

        Raises:
            InvalidSnoozeDurationError: If hours is outside 1..MAX_SNOOZE_HOURS.
            AlertNotFoundError: If the alert is missing or archived.
            RecipientNotFoundError: If the user does not exist.
        """
        max_hours = getattr(settings, "MAX_SNOOZE_HOURS", MAX_SNOOZE_HOURS)
        if hours is None:
            hours = getattr(settings, "DEFAULT_SNOOZE_HOURS", DEFAULT_SNOOZE_HOURS)
        if (
            isinstance(hours, bool)
            or not isinstance(hours, int | float)
            or not 1 <= hours <= max_hours
        ):
            raise InvalidSnoozeDurationError(hours, max_hours)

        self._get_live_alert(alert_id)
        self._get_recipient(user_id)

        snoozed_until = self.clock() + timedelta(hours=hours)
        self.store.set_preference_snooze(user_id, alert_id, snoozed_until)
        logger.info(
            "alert_snoozed",
            alert_id=alert_id,
            user_id=user_id,
            hours=hours,
            snoozed_until=snoozed_until.isoformat(),
        )
        return snoozed_until

    def _remind(self, alert: Alert, recipient: User, now: datetime) -> bool:
        """Re-deliver to one candidate if a reminder is due."""
        preference = self.store.get_preference(recipient.id, alert.id)
        if not alert_state.should_remind(alert, preference, now):
            return False

        last_delivery = self.store.get_last_delivery_time(alert.id, recipient.id)
        due = alert_state.next_reminder_time(alert, preference, last_delivery, now)
        if due is None or due > now:
            return False

        logger.info(
            "reminder_due",
            alert_id=alert.id,
            user_id=recipient.id,
            last_delivery=last_delivery.isoformat() if last_delivery else None,
        )
        return self.deliver_to_user(alert, recipient)

    def _get_live_alert(self, alert_id: str) -> Alert:
        alert = self.store.get_alert(alert_id)
        if alert is None or alert.is_archived:
            raise AlertNotFoundError(alert_id)
        return alert

    def _get_recipient(self, user_id: str) -> User:
        user = self.store.get_user(user_id)
        if user is None:
            raise RecipientNotFoundError(user_id)
        return user
