"""Django application configuration for alerts."""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Management commands that must never start the in-process scheduler.
SCHEDULER_EXCLUDED_COMMANDS = frozenset(
    {"migrate", "makemigrations", "test", "shell", "run_reminder_scheduler"}
)

# Development servers that fork an autoreloader parent process.
AUTORELOAD_COMMANDS = frozenset({"runserver", "runlocal"})


def _is_autoreload_parent(argv: list[str]) -> bool:
    """Whether this process is the autoreloader watching the real server."""
    if len(argv) < 2 or argv[1] not in AUTORELOAD_COMMANDS:
        return False
    if "--noreload" in argv:
        return False
    return os.environ.get("RUN_MAIN") != "true"


class AlertsConfig(AppConfig):
    """Configuration class for the alerts application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "alerts"

    def ready(self) -> None:
        """Start the reminder scheduler when autostart is enabled.

        The first pass runs on the scheduler thread so app loading never
        waits on the database.
        """
        if not getattr(settings, "REMINDER_SCHEDULER_AUTOSTART", False):
            return
        if len(sys.argv) > 1 and sys.argv[1] in SCHEDULER_EXCLUDED_COMMANDS:
            return
        if _is_autoreload_parent(sys.argv):
            return

        from alerts.services.runtime import get_reminder_scheduler  # noqa: PLC0415

        get_reminder_scheduler().start(blocking_first_pass=False)
        logger.info("Reminder scheduler started with the application")
