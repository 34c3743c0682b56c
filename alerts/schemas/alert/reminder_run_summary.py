"""Schema summarizing one reminder pass."""

from pydantic import Field

from alerts.schemas.base_schema_model import BaseSchemaModel


class ReminderRunSummary(BaseSchemaModel):
    """Counters for a single process_reminders pass."""

    alerts_scanned: int = Field(0, ge=0)
    reminders_sent: int = Field(0, ge=0)
    failures: int = Field(0, ge=0)
