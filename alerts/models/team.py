"""Team model matching the teams table."""

from typing import ClassVar

from django.db import models

from alerts.models.ids import new_id


class Team(models.Model):
    """Organizational team used for team-scoped alert visibility.

    This model is unmanaged as the database schema is owned externally.
    """

    id = models.CharField(primary_key=True, max_length=64, default=new_id)
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "teams"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["name"]

    def __str__(self) -> str:
        """Return string representation of team."""
        return self.name

    def __repr__(self) -> str:
        """Return detailed representation of team."""
        return f"<Team(id={self.id}, name='{self.name}')>"
