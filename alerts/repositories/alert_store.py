"""Data access for alerts, recipients, preferences and delivery history.

``AlertStore`` is the contract the delivery engine depends on;
``DjangoAlertStore`` implements it with the Django ORM. The engine holds no
copies of stored state and calls back into the store on every evaluation.
"""

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar

from django.db import DatabaseError
from django.db.models import Max, Q

import structlog

from alerts.enums import VisibilityType
from alerts.exceptions import AlertStoreError
from alerts.models import Alert, NotificationDelivery, User, UserAlertPreference

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class AlertStore(ABC):
    """Record store used by the delivery orchestrator.

    Implementations raise AlertStoreError for transient I/O failures.
    """

    @abstractmethod
    def get_alert(self, alert_id: str) -> Alert | None:
        """Return the alert, archived or not, or None if it does not exist."""

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        """Return the user or None if it does not exist."""

    @abstractmethod
    def query_active_alerts_with_reminders(self, now: datetime) -> Sequence[Alert]:
        """Return non-archived, reminder-enabled alerts whose window holds now."""

    @abstractmethod
    def query_eligible_recipients(self, alert: Alert) -> Sequence[User]:
        """Return the users targeted by the alert's visibility."""

    @abstractmethod
    def query_reminder_candidates(self, alert: Alert, now: datetime) -> Sequence[User]:
        """Return eligible users who have not read the alert and are not snoozed."""

    @abstractmethod
    def get_preference(
        self, user_id: str, alert_id: str
    ) -> UserAlertPreference | None:
        """Return the (user, alert) preference or None."""

    @abstractmethod
    def upsert_preference_if_absent(
        self, user_id: str, alert_id: str
    ) -> UserAlertPreference:
        """Create an unread preference unless one exists; return the stored row."""

    @abstractmethod
    def mark_preference_read(
        self, user_id: str, alert_id: str
    ) -> UserAlertPreference:
        """Set is_read, creating the preference if needed."""

    @abstractmethod
    def set_preference_snooze(
        self, user_id: str, alert_id: str, snoozed_until: datetime
    ) -> UserAlertPreference:
        """Replace snoozed_until, creating the preference if needed."""

    @abstractmethod
    def get_last_delivery_time(self, alert_id: str, user_id: str) -> datetime | None:
        """Return the latest delivered_at across all channels, or None."""

    @abstractmethod
    def record_delivery(self, delivery: NotificationDelivery) -> NotificationDelivery:
        """Append a delivery record."""


def _store_operation(func: F) -> F:
    """Translate database errors raised by ``func`` into AlertStoreError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as e:
            logger.error("alert_store_operation_failed", operation=func.__name__, error=str(e))
            raise AlertStoreError(func.__name__, str(e)) from e

    return wrapper  # type: ignore[return-value]


class DjangoAlertStore(AlertStore):
    """AlertStore backed by the Django ORM.

    Preference writes rely on the (user, alert) unique constraint through
    get_or_create/update_or_create, so concurrent writers never create
    duplicate rows.
    """

    @_store_operation
    def get_alert(self, alert_id: str) -> Alert | None:
        return Alert.objects.filter(id=alert_id).first()

    @_store_operation
    def get_user(self, user_id: str) -> User | None:
        return User.objects.filter(id=user_id).first()

    @_store_operation
    def query_active_alerts_with_reminders(self, now: datetime) -> list[Alert]:
        return list(
            Alert.objects.filter(reminder_enabled=True, archived_at__isnull=True)
            .filter(Q(start_time__isnull=True) | Q(start_time__lte=now))
            .filter(Q(expiry_time__isnull=True) | Q(expiry_time__gt=now))
            .order_by("created_at", "id")
        )

    @_store_operation
    def query_eligible_recipients(self, alert: Alert) -> list[User]:
        return list(self._eligible_recipients(alert))

    @_store_operation
    def query_reminder_candidates(self, alert: Alert, now: datetime) -> list[User]:
        blocked_user_ids = UserAlertPreference.objects.filter(alert_id=alert.id).filter(
            Q(is_read=True) | Q(snoozed_until__gte=now)
        ).values("user_id")
        return list(self._eligible_recipients(alert).exclude(id__in=blocked_user_ids))

    @_store_operation
    def get_preference(
        self, user_id: str, alert_id: str
    ) -> UserAlertPreference | None:
        return UserAlertPreference.objects.filter(
            user_id=user_id, alert_id=alert_id
        ).first()

    @_store_operation
    def upsert_preference_if_absent(
        self, user_id: str, alert_id: str
    ) -> UserAlertPreference:
        preference, created = UserAlertPreference.objects.get_or_create(
            user_id=user_id,
            alert_id=alert_id,
            defaults={"is_read": False},
        )
        if created:
            logger.debug("preference_created", user_id=user_id, alert_id=alert_id)
        return preference

    @_store_operation
    def mark_preference_read(
        self, user_id: str, alert_id: str
    ) -> UserAlertPreference:
        preference, _ = UserAlertPreference.objects.update_or_create(
            user_id=user_id,
            alert_id=alert_id,
            defaults={"is_read": True},
        )
        return preference

    @_store_operation
    def set_preference_snooze(
        self, user_id: str, alert_id: str, snoozed_until: datetime
    ) -> UserAlertPreference:
        preference, _ = UserAlertPreference.objects.update_or_create(
            user_id=user_id,
            alert_id=alert_id,
            defaults={"snoozed_until": snoozed_until},
        )
        return preference

    @_store_operation
    def get_last_delivery_time(self, alert_id: str, user_id: str) -> datetime | None:
        return NotificationDelivery.objects.filter(
            alert_id=alert_id, user_id=user_id
        ).aggregate(last=Max("delivered_at"))["last"]

    @_store_operation
    def record_delivery(self, delivery: NotificationDelivery) -> NotificationDelivery:
        delivery.save(force_insert=True)
        return delivery

    def _eligible_recipients(self, alert: Alert):
        """Build the recipient queryset for the alert's visibility."""
        users = User.objects.all()
        if alert.visibility_type == VisibilityType.ORGANIZATION.value:
            return users
        if alert.visibility_type == VisibilityType.TEAM.value:
            return users.filter(team_id=alert.visibility_target)
        if alert.visibility_type == VisibilityType.USER.value:
            return users.filter(id=alert.visibility_target)
        return users.none()
