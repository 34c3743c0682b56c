"""UserAlertPreference model for per-user read and snooze state."""

from datetime import datetime
from typing import ClassVar

from django.db import models

from alerts.models.ids import new_id


class UserAlertPreference(models.Model):
    """Read/snooze state of one alert for one user.

    Created lazily on first delivery or on the first explicit read/snooze
    action. ``is_read`` only ever moves from False to True; ``snoozed_until``
    can be replaced by a later snooze.

    Attributes:
        user: The recipient.
        alert: The alert this state belongs to.
        is_read: Whether the user has acknowledged the alert.
        snoozed_until: Reminders are suppressed until this instant.
        updated_at: When the preference was last changed.
    """

    id = models.CharField(primary_key=True, max_length=64, default=new_id)
    user = models.ForeignKey(
        "alerts.User",
        on_delete=models.CASCADE,
        related_name="alert_preferences",
        db_column="user_id",
    )
    alert = models.ForeignKey(
        "alerts.Alert",
        on_delete=models.CASCADE,
        related_name="preferences",
        db_column="alert_id",
    )
    is_read = models.BooleanField(default=False)
    snoozed_until = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "user_alert_preferences"
        managed = False  # Schema is managed externally
        unique_together: ClassVar[list[list[str]]] = [["user", "alert"]]
        indexes: ClassVar[list] = [
            models.Index(fields=["snoozed_until"]),
        ]

    def __str__(self) -> str:
        """Return string representation of preference."""
        return f"{self.user_id} / {self.alert_id}"

    def __repr__(self) -> str:
        """Return detailed representation of preference."""
        return (
            f"<UserAlertPreference(user={self.user_id}, alert={self.alert_id}, "
            f"is_read={self.is_read}, snoozed_until={self.snoozed_until})>"
        )

    def is_snoozed(self, now: datetime) -> bool:
        """Whether a snooze is in effect at ``now``."""
        return self.snoozed_until is not None and now < self.snoozed_until
