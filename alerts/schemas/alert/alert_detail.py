"""Schema for alert responses."""

from datetime import datetime

from pydantic import Field

from alerts.enums import AlertSeverity, VisibilityType
from alerts.schemas.base_schema_model import BaseSchemaModel


class AlertDetail(BaseSchemaModel):
    """Alert as returned by the admin endpoints."""

    id: str = Field(..., description="Alert id")
    title: str
    message: str
    severity: AlertSeverity
    visibility_type: VisibilityType
    visibility_target: str | None = None
    visibility: str = Field(..., description="Combined visibility string")
    start_time: datetime | None = None
    expiry_time: datetime | None = None
    reminder_enabled: bool
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime
