"""Database models for the alerts app."""

from alerts.models.alert import Alert, parse_visibility
from alerts.models.notification_delivery import NotificationDelivery
from alerts.models.team import Team
from alerts.models.user import User
from alerts.models.user_alert_preference import UserAlertPreference

__all__ = [
    "Alert",
    "NotificationDelivery",
    "Team",
    "User",
    "UserAlertPreference",
    "parse_visibility",
]
