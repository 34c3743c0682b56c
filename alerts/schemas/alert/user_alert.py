"""Schemas for the per-user alert view."""

from datetime import datetime

from pydantic import Field

from alerts.enums import AlertState
from alerts.schemas.alert.alert_detail import AlertDetail
from alerts.schemas.base_schema_model import BaseSchemaModel


class UserAlert(AlertDetail):
    """Alert enriched with one user's read/snooze state and history."""

    is_read: bool = Field(False, description="Whether the user read the alert")
    snoozed_until: datetime | None = Field(None, description="Active snooze end")
    state: AlertState = Field(..., description="Effective state for the user")
    delivery_count: int = Field(0, ge=0, description="Delivery rows for the user")
    last_delivered: datetime | None = Field(None, description="Latest delivery")


class UserAlertStats(BaseSchemaModel):
    """Read/unread/snoozed counters for one user."""

    user_id: str
    total_alerts: int = Field(..., ge=0)
    read_alerts: int = Field(..., ge=0)
    unread_alerts: int = Field(..., ge=0)
    snoozed_alerts: int = Field(..., ge=0)
    read_rate: int = Field(..., ge=0, le=100, description="Percentage read")
