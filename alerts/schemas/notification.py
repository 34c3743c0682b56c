"""Value objects passed between the orchestrator and channels."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import Field

from alerts.enums import AlertSeverity
from alerts.schemas.base_schema_model import BaseSchemaModel


class Notification(BaseSchemaModel):
    """A single rendering of an alert handed to every enabled channel."""

    id: UUID = Field(default_factory=uuid4, description="Notification identity")
    alert_id: str = Field(..., description="Alert being delivered")
    title: str = Field(..., description="Alert title")
    message: str = Field(..., description="Alert message")
    severity: AlertSeverity = Field(..., description="Alert severity")
    created_at: datetime = Field(..., description="When the notification was built")


class DeliveryResult(BaseSchemaModel):
    """Outcome of one channel delivery attempt."""

    success: bool = Field(..., description="Whether the channel delivered")
    error: str | None = Field(None, description="Failure reason, if any")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Channel-specific delivery metadata"
    )

    @classmethod
    def ok(cls, **metadata: Any) -> "DeliveryResult":
        """Build a successful result carrying ``metadata``."""
        return cls(success=True, metadata=metadata)

    @classmethod
    def failed(cls, error: str, **metadata: Any) -> "DeliveryResult":
        """Build a failed result with a reason."""
        return cls(success=False, error=error, metadata=metadata)
