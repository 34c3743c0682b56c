"""SMS notification channel.

The carrier transport is not wired up; messages are logged and given a
locally generated message id.
"""

import uuid

import structlog

from alerts.channels.base import NotificationChannel
from alerts.enums import ChannelName
from alerts.models import User
from alerts.schemas import DeliveryResult, Notification

logger = structlog.get_logger(__name__)

SMS_MAX_LENGTH = 160


class SmsChannel(NotificationChannel):
    """Send a short text message with the alert title and severity."""

    name = ChannelName.SMS.value

    def _send(self, notification: Notification, recipient: User) -> DeliveryResult:
        if not recipient.phone_number:
            return DeliveryResult.failed("No recipient phone number")

        body = f"[{str(notification.severity).upper()}] {notification.title}"
        body = body[:SMS_MAX_LENGTH]
        message_id = f"sms-{uuid.uuid4().hex[:12]}"

        logger.info(
            "sms_notification_sent",
            alert_id=notification.alert_id,
            user_id=recipient.id,
            message_id=message_id,
            length=len(body),
        )
        return DeliveryResult.ok(
            channel=self.name,
            user_id=recipient.id,
            phone_number=recipient.phone_number,
            message_id=message_id,
        )
