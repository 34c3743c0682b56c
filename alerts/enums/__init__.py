"""Enumerations for the alerts app."""

from alerts.enums.alert import (
    AlertSeverity,
    AlertState,
    AlertStatusFilter,
    ChannelName,
    DeliveryStatus,
    VisibilityType,
)
from alerts.enums.health_status import HealthStatus
from alerts.enums.user_role import UserRole

__all__ = [
    "AlertSeverity",
    "AlertState",
    "AlertStatusFilter",
    "ChannelName",
    "DeliveryStatus",
    "HealthStatus",
    "UserRole",
    "VisibilityType",
]
