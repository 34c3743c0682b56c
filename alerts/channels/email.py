"""Email notification channel backed by the SMTP AlertMailer."""

import structlog

from alerts.channels.base import NotificationChannel
from alerts.enums import ChannelName
from alerts.models import User
from alerts.schemas import DeliveryResult, Notification
from alerts.services.alert_mailer import AlertMailer

logger = structlog.get_logger(__name__)


class EmailChannel(NotificationChannel):
    """Send alerts by email.

    The subject is prefixed with the upper-cased severity. The SMTP
    Message-ID is kept in the delivery metadata.
    """

    name = ChannelName.EMAIL.value

    def _send(self, notification: Notification, recipient: User) -> DeliveryResult:
        if not recipient.email:
            logger.warning(
                "recipient_email_missing",
                alert_id=notification.alert_id,
                user_id=recipient.id,
            )
            return DeliveryResult.failed("No recipient email address")

        sent = AlertMailer().send_alert_email(recipient, notification)

        return DeliveryResult.ok(
            channel=self.name,
            user_id=recipient.id,
            notification_id=str(notification.id),
            **sent,
        )
