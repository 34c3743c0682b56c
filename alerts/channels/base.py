"""Base class for notification delivery channels."""

from abc import ABC, abstractmethod

from django.conf import settings

import structlog

from alerts.models import User
from alerts.schemas import DeliveryResult, Notification

logger = structlog.get_logger(__name__)


class NotificationChannel(ABC):
    """A named, independently enabled delivery mechanism.

    Subclasses implement ``_send``. ``deliver`` never raises: any exception
    from ``_send`` is logged and turned into a failed DeliveryResult so that
    the remaining channels and recipients are still processed.

    Unless an explicit ``enabled`` flag is given, a channel is enabled when
    its name appears in the ``ALERT_CHANNELS_ENABLED`` setting. The setting
    is read on every call.
    """

    name: str = ""

    def __init__(self, enabled: bool | None = None) -> None:
        """Initialize the channel.

        Args:
            enabled: Force the channel on or off; None defers to settings.
        """
        if not self.name:
            raise ValueError(f"{type(self).__name__} must define a channel name")
        self._enabled = enabled

    def __repr__(self) -> str:
        """Return detailed representation of channel."""
        return (
            f"<{type(self).__name__}(name={self.name}, "
            f"enabled={self.is_enabled()})>"
        )

    def get_name(self) -> str:
        """Return the channel name recorded on delivery rows."""
        return self.name

    def is_enabled(self) -> bool:
        """Check whether the channel currently takes part in fan-out."""
        if self._enabled is not None:
            return self._enabled
        return self.name in getattr(settings, "ALERT_CHANNELS_ENABLED", ())

    def deliver(self, notification: Notification, recipient: User) -> DeliveryResult:
        """Attempt delivery of ``notification`` to ``recipient``.

        Args:
            notification: Notification built from the alert.
            recipient: User receiving the notification.

        Returns:
            DeliveryResult describing success or the failure reason.
        """
        try:
            return self._send(notification, recipient)
        except Exception as e:
            logger.error(
                "channel_delivery_error",
                channel=self.name,
                alert_id=notification.alert_id,
                user_id=recipient.id,
                error=str(e),
            )
            return DeliveryResult.failed(str(e) or type(e).__name__, channel=self.name)

    @abstractmethod
    def _send(self, notification: Notification, recipient: User) -> DeliveryResult:
        """Deliver through the concrete transport."""
