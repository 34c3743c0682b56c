"""Run the reminder scheduler as a foreground process."""

import signal
import threading

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

from alerts.services.reminder_scheduler import ReminderScheduler
from alerts.services.runtime import get_delivery_orchestrator


class Command(BaseCommand):
    """Run reminder passes until interrupted.

    Use this when the web process runs with REMINDER_SCHEDULER_AUTOSTART
    disabled, so exactly one scheduler runs per deployment.
    """

    help = "Run reminder passes on a fixed interval until stopped"

    def add_arguments(self, parser):
        """Register command options."""
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Minutes between passes (default: REMINDER_INTERVAL_MINUTES)",
        )
        parser.add_argument(
            "--once",
            action="store_true",
            help="Run a single pass and exit",
        )

    def handle(self, *args, **options):
        """Start the scheduler and block until SIGINT or SIGTERM."""
        orchestrator = get_delivery_orchestrator()

        if options["once"]:
            summary = orchestrator.process_reminders()
            self.stdout.write(
                self.style.SUCCESS(
                    f"Scanned {summary.alerts_scanned} alerts, sent "
                    f"{summary.reminders_sent} reminders, {summary.failures} failures"
                )
            )
            return

        try:
            scheduler = ReminderScheduler(orchestrator, options["interval"])
        except ImproperlyConfigured as e:
            raise CommandError(str(e)) from e

        stopped = threading.Event()

        def _request_stop(_signum, _frame):
            stopped.set()

        signal.signal(signal.SIGINT, _request_stop)
        signal.signal(signal.SIGTERM, _request_stop)

        scheduler.start()
        self.stdout.write(
            self.style.SUCCESS(
                f"Reminder scheduler running every {scheduler.interval_minutes} minutes"
            )
        )
        stopped.wait()
        scheduler.stop()
        self.stdout.write("Reminder scheduler stopped")
