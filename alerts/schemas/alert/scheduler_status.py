"""Schema for reminder scheduler status."""

from pydantic import Field

from alerts.schemas.base_schema_model import BaseSchemaModel


class SchedulerStatus(BaseSchemaModel):
    """Whether the reminder scheduler runs and how often it ticks."""

    running: bool = Field(..., description="Scheduler is running")
    interval_minutes: int = Field(..., gt=0, description="Minutes between passes")
