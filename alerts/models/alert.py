"""Alert model storing the alert definition and its delivery window.

Per-user read/snooze state lives in UserAlertPreference and delivery
history in NotificationDelivery.
"""

from datetime import datetime
from typing import ClassVar

from django.db import models

from alerts.enums import AlertSeverity, VisibilityType
from alerts.exceptions.alert_exceptions import InvalidVisibilityError
from alerts.models.ids import new_id

VISIBILITY_SEPARATOR = ":"


def parse_visibility(value: str) -> tuple[VisibilityType, str | None]:
    """Split a combined visibility string into type and target.

    Accepts ``organization``, ``team:<id>`` and ``user:<id>``.

    Args:
        value: Combined visibility string.

    Returns:
        Tuple of (visibility type, target id or None).

    Raises:
        InvalidVisibilityError: If the type is unknown or the target is
            missing/unexpected for the type.
    """
    raw_type, _, target = value.partition(VISIBILITY_SEPARATOR)
    try:
        visibility_type = VisibilityType(raw_type.strip().lower())
    except ValueError as err:
        raise InvalidVisibilityError(value) from err

    target = target.strip() or None
    if visibility_type.requires_target and target is None:
        raise InvalidVisibilityError(
            value, f"Visibility '{visibility_type.value}' requires a target id"
        )
    if not visibility_type.requires_target and target is not None:
        raise InvalidVisibilityError(
            value, f"Visibility '{visibility_type.value}' does not take a target"
        )
    return visibility_type, target


class Alert(models.Model):
    """Organization, team or user targeted alert.

    Attributes:
        id: Unique identifier for the alert.
        title: Short headline shown in every channel.
        message: Alert body.
        severity: info, warning or critical.
        visibility_type: organization, team or user.
        visibility_target: Team or user id; required iff the type needs one.
        start_time: Optional inclusive start of the delivery window.
        expiry_time: Optional exclusive end of the delivery window.
        reminder_enabled: Whether unread recipients are re-notified.
        created_by: Id of the user who created the alert.
        created_at: When the alert was created.
        updated_at: When the alert was last updated.
        archived_at: Soft delete timestamp; archived alerts are never sent.
    """

    id = models.CharField(primary_key=True, max_length=64, default=new_id)
    title = models.CharField(max_length=255)
    message = models.TextField()
    severity = models.CharField(
        max_length=10,
        choices=[(severity.value, severity.value) for severity in AlertSeverity],
        default=AlertSeverity.INFO.value,
    )
    visibility_type = models.CharField(
        max_length=20,
        choices=[(vis.value, vis.value) for vis in VisibilityType],
    )
    visibility_target = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        help_text="Team id or user id depending on visibility_type",
    )
    start_time = models.DateTimeField(null=True, blank=True)
    expiry_time = models.DateTimeField(null=True, blank=True)
    reminder_enabled = models.BooleanField(default=True)
    created_by = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    archived_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "alerts"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["severity"]),
            models.Index(fields=["visibility_type", "visibility_target"]),
            models.Index(fields=["expiry_time"]),
        ]

    def __str__(self) -> str:
        """Return string representation of alert."""
        return f"[{self.severity}] {self.title}"

    def __repr__(self) -> str:
        """Return detailed representation of alert."""
        return (
            f"<Alert(id={self.id}, severity={self.severity}, "
            f"visibility={self.visibility}, archived={self.is_archived})>"
        )

    @property
    def visibility(self) -> str:
        """Combined visibility string, e.g. ``team:<id>``."""
        if self.visibility_target:
            return (
                f"{self.visibility_type}{VISIBILITY_SEPARATOR}{self.visibility_target}"
            )
        return self.visibility_type

    @property
    def severity_level(self) -> AlertSeverity:
        """Severity as an enum member."""
        return AlertSeverity(self.severity)

    @property
    def is_archived(self) -> bool:
        """Whether the alert has been archived."""
        return self.archived_at is not None

    def is_within_window(self, now: datetime) -> bool:
        """Check whether ``now`` lies in the half-open [start, expiry) window."""
        if self.start_time is not None and now < self.start_time:
            return False
        if self.expiry_time is not None and now >= self.expiry_time:
            return False
        return True
