"""Alert administration, per-user alert views and analytics.

Delivery itself is queued to RQ workers; this module never calls channels
directly.
"""

from datetime import datetime

from django.db import transaction
from django.db.models import Count, Max, Q
from django.utils import timezone

import django_rq
import structlog

from alerts.enums import AlertSeverity, AlertStatusFilter, DeliveryStatus, VisibilityType
from alerts.exceptions import (
    AlertNotFoundError,
    InvalidAlertWindowError,
    InvalidVisibilityError,
    RecipientNotFoundError,
)
from alerts.jobs.alert_jobs import DELIVER_ALERT_JOB, PROCESS_REMINDERS_JOB
from alerts.models import Alert, NotificationDelivery, User, UserAlertPreference
from alerts.schemas.alert import (
    AlertAnalytics,
    AlertCreateRequest,
    AlertDetail,
    AlertUpdateRequest,
    DeliveryStats,
    TopAlert,
    UserAlert,
    UserAlertStats,
)
from alerts.services import alert_state

logger = structlog.get_logger(__name__)

TOP_ALERTS_LIMIT = 10


def scheduled_delivery_job_id(alert_id: str) -> str:
    """Return the RQ job id of an alert's scheduled first delivery."""
    return f"deliver-alert-{alert_id}"


def _percent(part: int, whole: int) -> int:
    return round(part * 100 / whole) if whole else 0


class AlertService:
    """Service for creating, updating and reporting on alerts."""

    def __init__(self) -> None:
        """Initialize alert service."""
        self.queue = django_rq.get_queue("default")

    def create_alert(self, request: AlertCreateRequest) -> Alert:
        """Create an alert and queue its first delivery.

        Alerts without a start time, or whose start time has passed, are
        queued for delivery immediately. Alerts starting in the future are
        scheduled for their start time.

        Args:
            request: Validated creation request.

        Returns:
            The created Alert.
        """
        alert = Alert.objects.create(
            title=request.title,
            message=request.message,
            severity=request.severity,
            visibility_type=request.visibility_type,
            visibility_target=request.visibility_target,
            start_time=request.start_time,
            expiry_time=request.expiry_time,
            reminder_enabled=request.reminder_enabled,
            created_by=request.created_by,
        )
        logger.info(
            "alert_created",
            alert_id=alert.id,
            severity=alert.severity,
            visibility=alert.visibility,
            created_by=alert.created_by,
        )

        now = timezone.now()
        if alert.start_time is None or alert.start_time <= now:
            transaction.on_commit(lambda: self.queue_delivery(alert.id))
        else:
            transaction.on_commit(
                lambda: self.schedule_delivery(alert.id, alert.start_time)
            )
        return alert

    def update_alert(self, alert_id: str, request: AlertUpdateRequest) -> Alert:
        """Apply the fields present in ``request`` to an alert.

        Moving the start time into the future reschedules the first
        delivery for the new start. Moving a not yet started alert's start
        time to now or the past queues its delivery immediately.

        Raises:
            AlertNotFoundError: If the alert is missing or archived.
            InvalidVisibilityError: If the resulting visibility lacks a target.
            InvalidAlertWindowError: If the resulting expiry is not after the
                resulting start time.
        """
        alert = self.get_alert(alert_id)
        changes = request.changes()
        if not changes:
            return alert

        previous_start = alert.start_time
        for field, value in changes.items():
            setattr(alert, field, value)

        if (
            alert.start_time is not None
            and alert.expiry_time is not None
            and alert.expiry_time <= alert.start_time
        ):
            raise InvalidAlertWindowError(alert.start_time, alert.expiry_time)

        visibility_type = VisibilityType(alert.visibility_type)
        if not visibility_type.requires_target:
            alert.visibility_target = None
        elif not alert.visibility_target:
            raise InvalidVisibilityError(
                visibility_type.value,
                f"Visibility '{visibility_type.value}' requires a target id",
            )

        alert.save()
        logger.info("alert_updated", alert_id=alert.id, fields=sorted(changes))

        if "start_time" in changes and alert.start_time != previous_start:
            self._reschedule_delivery(alert, previous_start)
        return alert

    def _reschedule_delivery(self, alert: Alert, previous_start: datetime | None) -> None:
        now = timezone.now()
        start_time = alert.start_time
        if start_time is not None and start_time > now:
            transaction.on_commit(lambda: self.schedule_delivery(alert.id, start_time))
        elif previous_start is not None and previous_start > now:
            transaction.on_commit(lambda: self.cancel_scheduled_delivery(alert.id))
            transaction.on_commit(lambda: self.queue_delivery(alert.id))

    def archive_alert(self, alert_id: str) -> bool:
        """Archive an alert so it is never delivered again.

        Returns:
            False if the alert does not exist or is already archived.
        """
        updated = Alert.objects.filter(id=alert_id, archived_at__isnull=True).update(
            archived_at=timezone.now(), updated_at=timezone.now()
        )
        if not updated:
            return False
        logger.info("alert_archived", alert_id=alert_id)
        return True

    def get_alert(self, alert_id: str) -> Alert:
        """Return a non-archived alert.

        Raises:
            AlertNotFoundError: If the alert is missing or archived.
        """
        alert = Alert.objects.filter(id=alert_id, archived_at__isnull=True).first()
        if alert is None:
            raise AlertNotFoundError(alert_id)
        return alert

    def list_alerts(
        self,
        severity: AlertSeverity | str | None = None,
        status: AlertStatusFilter | str | None = None,
        visibility_type: VisibilityType | str | None = None,
    ) -> list[Alert]:
        """List non-archived alerts, newest first.

        Args:
            severity: Only alerts with this severity.
            status: ``active`` (not expired) or ``expired``.
            visibility_type: Only alerts with this visibility type.

        Returns:
            Matching alerts.

        Raises:
            ValueError: If a filter value is not recognized.
        """
        alerts = Alert.objects.filter(archived_at__isnull=True)

        if severity:
            alerts = alerts.filter(severity=AlertSeverity(severity).value)

        if status:
            now = timezone.now()
            if AlertStatusFilter(status) is AlertStatusFilter.ACTIVE:
                alerts = alerts.filter(
                    Q(expiry_time__isnull=True) | Q(expiry_time__gt=now)
                )
            else:
                alerts = alerts.filter(expiry_time__isnull=False, expiry_time__lte=now)

        if visibility_type:
            alerts = alerts.filter(
                visibility_type=VisibilityType(visibility_type).value
            )

        return list(alerts.order_by("-created_at"))

    def queue_delivery(self, alert_id: str) -> None:
        """Queue delivery of an alert on the default RQ queue."""
        self.queue.enqueue(DELIVER_ALERT_JOB, alert_id)
        logger.info("alert_delivery_queued", alert_id=alert_id)

    def schedule_delivery(self, alert_id: str, start_time: datetime) -> None:
        """Schedule delivery of an alert for its start time.

        An alert has at most one scheduled delivery; scheduling again
        replaces the earlier one.
        """
        scheduler = django_rq.get_scheduler("default")
        job_id = scheduled_delivery_job_id(alert_id)
        scheduler.cancel(job_id)
        scheduler.enqueue_at(start_time, DELIVER_ALERT_JOB, alert_id, job_id=job_id)
        logger.info(
            "alert_delivery_scheduled",
            alert_id=alert_id,
            start_time=start_time.isoformat(),
        )

    def cancel_scheduled_delivery(self, alert_id: str) -> None:
        """Drop the scheduled delivery of an alert, if any."""
        scheduler = django_rq.get_scheduler("default")
        scheduler.cancel(scheduled_delivery_job_id(alert_id))
        logger.info("alert_delivery_unscheduled", alert_id=alert_id)

    def queue_reminder_pass(self) -> None:
        """Queue a reminder pass on the default RQ queue."""
        self.queue.enqueue(PROCESS_REMINDERS_JOB)
        logger.info("reminder_pass_queued")

    def get_user_alerts(self, user_id: str) -> list[UserAlert]:
        """Return the alerts currently visible to a user with their state.

        Only non-archived alerts whose window contains now are included,
        newest first.

        Raises:
            RecipientNotFoundError: If the user does not exist.
        """
        user = User.objects.filter(id=user_id).first()
        if user is None:
            raise RecipientNotFoundError(user_id)

        now = timezone.now()
        visible = Q(visibility_type=VisibilityType.ORGANIZATION.value) | Q(
            visibility_type=VisibilityType.USER.value, visibility_target=user.id
        )
        if user.team_id:
            visible |= Q(
                visibility_type=VisibilityType.TEAM.value,
                visibility_target=user.team_id,
            )

        alerts = (
            Alert.objects.filter(archived_at__isnull=True)
            .filter(visible)
            .filter(Q(start_time__isnull=True) | Q(start_time__lte=now))
            .filter(Q(expiry_time__isnull=True) | Q(expiry_time__gt=now))
            .annotate(
                delivery_count=Count("deliveries", filter=Q(deliveries__user_id=user.id)),
                last_delivered=Max(
                    "deliveries__delivered_at", filter=Q(deliveries__user_id=user.id)
                ),
            )
            .order_by("-created_at")
        )
        preferences = {
            preference.alert_id: preference
            for preference in UserAlertPreference.objects.filter(user_id=user.id)
        }

        user_alerts = []
        for alert in alerts:
            preference = preferences.get(alert.id)
            user_alerts.append(
                UserAlert(
                    **AlertDetail.model_validate(alert).model_dump(),
                    is_read=bool(preference and preference.is_read),
                    snoozed_until=preference.snoozed_until if preference else None,
                    state=alert_state.effective_state(alert, preference, now),
                    delivery_count=alert.delivery_count,
                    last_delivered=alert.last_delivered,
                )
            )
        return user_alerts

    def get_user_alert_stats(self, user_id: str) -> UserAlertStats:
        """Summarize a user's visible alerts.

        Raises:
            RecipientNotFoundError: If the user does not exist.
        """
        user_alerts = self.get_user_alerts(user_id)
        now = timezone.now()
        total = len(user_alerts)
        read = sum(1 for user_alert in user_alerts if user_alert.is_read)
        snoozed = sum(
            1
            for user_alert in user_alerts
            if user_alert.snoozed_until is not None and user_alert.snoozed_until > now
        )
        return UserAlertStats(
            user_id=user_id,
            total_alerts=total,
            read_alerts=read,
            unread_alerts=total - read,
            snoozed_alerts=snoozed,
            read_rate=_percent(read, total),
        )

    def get_analytics(self) -> AlertAnalytics:
        """Aggregate alert, delivery and preference statistics."""
        now = timezone.now()
        alerts = Alert.objects.filter(archived_at__isnull=True)
        deliveries = NotificationDelivery.objects.all()
        preferences = UserAlertPreference.objects.all()

        total_deliveries = deliveries.count()
        read_user_alerts = set(
            preferences.filter(is_read=True).values_list("user_id", "alert_id")
        )
        read_deliveries = sum(
            1
            for key in deliveries.values_list("user_id", "alert_id")
            if key in read_user_alerts
        )

        total_preferences = preferences.count()
        snoozed_preferences = preferences.filter(snoozed_until__gt=now).count()

        severity_breakdown = {
            row["severity"]: row["count"]
            for row in alerts.values("severity").annotate(count=Count("id"))
        }

        delivery_counts = {
            row["status"]: row["count"]
            for row in deliveries.values("status").annotate(count=Count("id"))
        }
        delivery_stats = DeliveryStats(
            delivered=delivery_counts.get(DeliveryStatus.DELIVERED.value, 0),
            failed=delivery_counts.get(DeliveryStatus.FAILED.value, 0),
            pending=delivery_counts.get(DeliveryStatus.PENDING.value, 0),
        )

        top = (
            alerts.annotate(delivery_count=Count("deliveries", distinct=True))
            .filter(delivery_count__gt=0)
            .annotate(
                read_count=Count(
                    "preferences",
                    filter=Q(preferences__is_read=True),
                    distinct=True,
                )
            )
            .order_by("-delivery_count", "-created_at")[:TOP_ALERTS_LIMIT]
        )
        top_alerts = [
            TopAlert(
                alert_id=alert.id,
                title=alert.title,
                delivery_count=alert.delivery_count,
                read_count=alert.read_count,
            )
            for alert in top
        ]

        return AlertAnalytics(
            total_alerts=alerts.count(),
            total_deliveries=total_deliveries,
            read_rate=_percent(read_deliveries, total_deliveries),
            snooze_rate=_percent(snoozed_preferences, total_preferences),
            severity_breakdown=severity_breakdown,
            delivery_stats=delivery_stats,
            top_alerts=top_alerts,
        )
