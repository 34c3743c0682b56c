"""Notification channels and the channel registry."""

from alerts.channels.base import NotificationChannel
from alerts.channels.email import EmailChannel
from alerts.channels.in_app import InAppChannel
from alerts.channels.registry import ChannelRegistry, build_default_registry
from alerts.channels.sms import SmsChannel

__all__ = [
    "ChannelRegistry",
    "EmailChannel",
    "InAppChannel",
    "NotificationChannel",
    "SmsChannel",
    "build_default_registry",
]
