"""User model matching the users table."""

from typing import ClassVar

from django.db import models

from alerts.enums import UserRole
from alerts.models.ids import new_id


class User(models.Model):
    """Alert recipient.

    Only identity, team membership and contact details are used here:
    the team drives team-scoped eligibility, and email/phone number
    address the email and SMS channels.

    This model is unmanaged as the database schema is owned externally.
    """

    id = models.CharField(primary_key=True, max_length=64, default=new_id)
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    phone_number = models.CharField(max_length=32, null=True, blank=True)
    team = models.ForeignKey(
        "alerts.Team",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="members",
        db_column="team_id",
    )
    role = models.CharField(
        max_length=10,
        choices=[(role.value, role.value) for role in UserRole],
        default=UserRole.USER.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["created_at", "id"]
        indexes: ClassVar[list] = [
            models.Index(fields=["team"]),
            models.Index(fields=["role"]),
        ]

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"{self.name} ({self.email})"

    def __repr__(self) -> str:
        """Return detailed representation of user."""
        return f"<User(id={self.id}, email='{self.email}', team={self.team_id})>"
