"""NotificationDelivery model: append-only per-channel delivery log."""

from typing import ClassVar

from django.db import models

from alerts.enums import DeliveryStatus
from alerts.models.ids import new_id


class NotificationDelivery(models.Model):
    """One delivery attempt of an alert to a user through one channel.

    Rows are immutable once inserted. They serve as the audit trail and as
    the source of the last delivery time used to space reminders.
    """

    id = models.CharField(primary_key=True, max_length=64, default=new_id)
    alert = models.ForeignKey(
        "alerts.Alert",
        on_delete=models.CASCADE,
        related_name="deliveries",
        db_column="alert_id",
    )
    user = models.ForeignKey(
        "alerts.User",
        on_delete=models.CASCADE,
        related_name="deliveries",
        db_column="user_id",
    )
    channel = models.CharField(max_length=20)
    delivered_at = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=[(status.value, status.value) for status in DeliveryStatus],
        default=DeliveryStatus.DELIVERED.value,
    )
    metadata = models.JSONField(null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_deliveries"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-delivered_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["alert", "user", "-delivered_at"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self) -> str:
        """Return string representation of delivery."""
        return f"{self.channel} - {self.status}"

    def __repr__(self) -> str:
        """Return detailed representation of delivery."""
        return (
            f"<NotificationDelivery(alert={self.alert_id}, user={self.user_id}, "
            f"channel={self.channel}, status={self.status})>"
        )

    def save(self, *args, **kwargs) -> None:
        """Insert the row; existing deliveries can't be modified."""
        if not self._state.adding:
            raise ValueError("NotificationDelivery records are append-only")
        super().save(*args, **kwargs)
