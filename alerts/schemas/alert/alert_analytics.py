"""Schemas for platform-wide alert analytics."""

from pydantic import Field

from alerts.schemas.base_schema_model import BaseSchemaModel


class DeliveryStats(BaseSchemaModel):
    """Delivery row counts per status."""

    delivered: int = 0
    failed: int = 0
    pending: int = 0


class TopAlert(BaseSchemaModel):
    """An alert ranked by delivery volume."""

    alert_id: str
    title: str
    delivery_count: int = Field(..., ge=0)
    read_count: int = Field(..., ge=0)


class AlertAnalytics(BaseSchemaModel):
    """Aggregate statistics over alerts, deliveries and preferences."""

    total_alerts: int = Field(..., ge=0, description="Non-archived alerts")
    total_deliveries: int = Field(..., ge=0, description="Delivery rows")
    read_rate: int = Field(
        ..., ge=0, le=100, description="Percent of delivered rows whose user read"
    )
    snooze_rate: int = Field(
        ..., ge=0, le=100, description="Percent of preferences currently snoozed"
    )
    severity_breakdown: dict[str, int] = Field(..., description="Alerts per severity")
    delivery_stats: DeliveryStats
    top_alerts: list[TopAlert] = Field(default_factory=list)
