"""Ordered registry of notification channels."""

from collections.abc import Iterable

from alerts.channels.base import NotificationChannel
from alerts.channels.email import EmailChannel
from alerts.channels.in_app import InAppChannel
from alerts.channels.sms import SmsChannel


class ChannelRegistry:
    """Holds constructed channels in registration order.

    The registry is built once at process start and passed to the
    orchestrator by reference. Fan-out order is registration order.
    """

    def __init__(self, channels: Iterable[NotificationChannel] = ()) -> None:
        """Initialize the registry.

        Args:
            channels: Channels to register, in fan-out order.

        Raises:
            ValueError: If two channels share a name.
        """
        self._channels: list[NotificationChannel] = []
        for channel in channels:
            self.register(channel)

    def __len__(self) -> int:
        """Return the number of registered channels."""
        return len(self._channels)

    def __iter__(self):
        """Iterate over all registered channels in order."""
        return iter(tuple(self._channels))

    def register(self, channel: NotificationChannel) -> None:
        """Append a channel to the fan-out order.

        Raises:
            ValueError: If a channel with the same name is registered.
        """
        if self.get(channel.get_name()) is not None:
            raise ValueError(f"Channel '{channel.get_name()}' is already registered")
        self._channels.append(channel)

    def get(self, name: str) -> NotificationChannel | None:
        """Return the channel registered under ``name``, if any."""
        for channel in self._channels:
            if channel.get_name() == name:
                return channel
        return None

    def names(self) -> list[str]:
        """Return registered channel names in order."""
        return [channel.get_name() for channel in self._channels]

    def enabled_channels(self) -> list[NotificationChannel]:
        """Return the currently enabled channels in registration order."""
        return [channel for channel in self._channels if channel.is_enabled()]


def build_default_registry() -> ChannelRegistry:
    """Build the registry with the built-in channels: in-app, email, SMS."""
    return ChannelRegistry([InAppChannel(), EmailChannel(), SmsChannel()])
