"""Schema for snooze requests."""

from pydantic import Field

from alerts.schemas.base_schema_model import BaseSchemaModel


class SnoozeRequest(BaseSchemaModel):
    """Request body for snoozing an alert; hours default from settings."""

    hours: int | None = Field(None, description="Snooze length in hours")
