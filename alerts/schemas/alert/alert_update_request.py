"""Schema for partial alert updates."""

from datetime import datetime

from pydantic import Field, model_validator

from alerts.enums import AlertSeverity, VisibilityType
from alerts.exceptions import InvalidVisibilityError
from alerts.models.alert import parse_visibility
from alerts.schemas.base_schema_model import BaseSchemaModel


class AlertUpdateRequest(BaseSchemaModel):
    """Request body for updating an alert.

    Only fields present in the request are applied; an explicit null clears
    the optional time bounds.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    message: str | None = Field(None, min_length=1)
    severity: AlertSeverity | None = None
    visibility: str | None = None
    visibility_type: VisibilityType | None = None
    visibility_target: str | None = None
    start_time: datetime | None = None
    expiry_time: datetime | None = None
    reminder_enabled: bool | None = None

    @model_validator(mode="after")
    def _resolve_visibility(self) -> "AlertUpdateRequest":
        if self.visibility is not None:
            try:
                visibility_type, target = parse_visibility(self.visibility)
            except InvalidVisibilityError as err:
                raise ValueError(str(err)) from err
            self.visibility_type = visibility_type.value
            self.visibility_target = target
        return self

    def changes(self) -> dict:
        """Return the model fields explicitly set by the caller."""
        data = self.model_dump(exclude_unset=True, exclude={"visibility"})
        if self.visibility is not None:
            data["visibility_type"] = self.visibility_type
            data["visibility_target"] = self.visibility_target
        return data
