"""Development server for a database whose schema is owned elsewhere."""

from django.conf import settings
from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """runserver without migration checks.

    Alert tables are created by the external schema, so there are no
    migrations to check and the server can start before the database is up.
    """

    help = "Start development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Report the scheduler mode instead of checking migrations."""
        mode = (
            "in-process"
            if getattr(settings, "REMINDER_SCHEDULER_AUTOSTART", False)
            else "external (run_reminder_scheduler)"
        )
        self.stdout.write(
            self.style.WARNING(
                f"Skipping migration checks; reminder scheduler: {mode}"
            )
        )
