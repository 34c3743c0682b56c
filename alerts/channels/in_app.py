"""In-app notification channel."""

import structlog

from alerts.channels.base import NotificationChannel
from alerts.enums import ChannelName
from alerts.models import User
from alerts.schemas import DeliveryResult, Notification

logger = structlog.get_logger(__name__)


class InAppChannel(NotificationChannel):
    """Deliver alerts to the user's in-app inbox.

    The delivery row written by the orchestrator is the inbox entry, so
    sending succeeds as soon as it is attempted.
    """

    name = ChannelName.IN_APP.value

    def _send(self, notification: Notification, recipient: User) -> DeliveryResult:
        logger.info(
            "in_app_notification_delivered",
            alert_id=notification.alert_id,
            notification_id=str(notification.id),
            user_id=recipient.id,
        )
        return DeliveryResult.ok(
            channel=self.name,
            user_id=recipient.id,
            notification_id=str(notification.id),
            delivered_at=notification.created_at.isoformat(),
        )
