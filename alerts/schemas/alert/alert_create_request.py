"""Schema for alert creation requests."""

from datetime import datetime

from pydantic import Field, model_validator

from alerts.enums import AlertSeverity, VisibilityType
from alerts.exceptions import InvalidVisibilityError
from alerts.models.alert import parse_visibility
from alerts.schemas.base_schema_model import BaseSchemaModel


class AlertCreateRequest(BaseSchemaModel):
    """Request body for creating an alert.

    Visibility may be given either as ``visibility_type`` plus
    ``visibility_target`` or as the combined ``visibility`` string
    (``organization``, ``team:<id>``, ``user:<id>``).
    """

    title: str = Field(..., min_length=1, max_length=255, description="Alert title")
    message: str = Field(..., min_length=1, description="Alert message")
    severity: AlertSeverity = Field(AlertSeverity.INFO, description="Alert severity")
    visibility: str | None = Field(None, description="Combined visibility string")
    visibility_type: VisibilityType | None = Field(
        None, description="organization, team or user"
    )
    visibility_target: str | None = Field(
        None, description="Team or user id for team/user visibility"
    )
    start_time: datetime | None = Field(None, description="Inclusive window start")
    expiry_time: datetime | None = Field(None, description="Exclusive window end")
    reminder_enabled: bool = Field(True, description="Send reminders until read")
    created_by: str | None = Field(None, description="Creating user id")

    @model_validator(mode="after")
    def _resolve_visibility(self) -> "AlertCreateRequest":
        if self.visibility is not None:
            try:
                visibility_type, target = parse_visibility(self.visibility)
            except InvalidVisibilityError as err:
                raise ValueError(str(err)) from err
            self.visibility_type = visibility_type.value
            self.visibility_target = target

        if self.visibility_type is None:
            raise ValueError("visibility_type or visibility is required")

        requires_target = VisibilityType(self.visibility_type).requires_target
        if requires_target and not self.visibility_target:
            raise ValueError(
                "visibility_target is required for team and user visibility types"
            )
        if not requires_target:
            self.visibility_target = None

        if (
            self.start_time is not None
            and self.expiry_time is not None
            and self.expiry_time <= self.start_time
        ):
            raise ValueError("expiry_time must be after start_time")
        return self
