"""Alert request and response schemas."""

from alerts.schemas.alert.alert_analytics import (
    AlertAnalytics,
    DeliveryStats,
    TopAlert,
)
from alerts.schemas.alert.alert_create_request import AlertCreateRequest
from alerts.schemas.alert.alert_detail import AlertDetail
from alerts.schemas.alert.alert_update_request import AlertUpdateRequest
from alerts.schemas.alert.reminder_run_summary import ReminderRunSummary
from alerts.schemas.alert.scheduler_status import SchedulerStatus
from alerts.schemas.alert.snooze_request import SnoozeRequest
from alerts.schemas.alert.user_alert import UserAlert, UserAlertStats

__all__ = [
    "AlertAnalytics",
    "AlertCreateRequest",
    "AlertDetail",
    "AlertUpdateRequest",
    "DeliveryStats",
    "ReminderRunSummary",
    "SchedulerStatus",
    "SnoozeRequest",
    "TopAlert",
    "UserAlert",
    "UserAlertStats",
]
