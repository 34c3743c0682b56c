"""Recurring reminder passes on a background thread."""

import threading

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

import structlog

from alerts.schemas.alert import SchedulerStatus
from alerts.services.alert_state import DEFAULT_REMINDER_INTERVAL_MINUTES
from alerts.services.delivery_orchestrator import DeliveryOrchestrator

logger = structlog.get_logger(__name__)


class ReminderScheduler:
    """Run ``process_reminders`` every ``interval_minutes``.

    ``start`` runs one pass immediately and then one pass per interval on a
    daemon thread. ``stop`` prevents further passes; a pass already in
    progress runs to completion. A failing pass is logged and the schedule
    continues.

    Each ``start`` gets its own stop event, so a loop whose ``stop`` timed
    out still exits once its current pass ends, even if the scheduler has
    been started again meanwhile.
    """

    def __init__(
        self,
        orchestrator: DeliveryOrchestrator,
        interval_minutes: int | None = None,
        join_timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the scheduler.

        Args:
            orchestrator: Orchestrator whose reminder pass is run.
            interval_minutes: Minutes between passes; defaults to the
                REMINDER_INTERVAL_MINUTES setting.
            join_timeout_seconds: How long ``stop`` waits for the thread.

        Raises:
            ImproperlyConfigured: If the interval is not a positive integer.
        """
        if interval_minutes is None:
            interval_minutes = getattr(
                settings,
                "REMINDER_INTERVAL_MINUTES",
                DEFAULT_REMINDER_INTERVAL_MINUTES,
            )
        if (
            isinstance(interval_minutes, bool)
            or not isinstance(interval_minutes, int)
            or interval_minutes <= 0
        ):
            raise ImproperlyConfigured(
                "REMINDER_INTERVAL_MINUTES must be a positive integer, "
                f"got {interval_minutes!r}"
            )

        self.orchestrator = orchestrator
        self.interval_minutes = interval_minutes
        self.join_timeout_seconds = join_timeout_seconds
        self._is_running = False
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Whether the scheduler is running."""
        return self._is_running

    def start(self, blocking_first_pass: bool = True) -> None:
        """Run an immediate pass and start the recurring schedule.

        Args:
            blocking_first_pass: Run the first pass on the caller's thread
                before returning. When False the first pass runs on the
                scheduler thread instead.
        """
        with self._lock:
            if self._is_running:
                logger.warning("reminder_scheduler_already_running")
                return
            self._is_running = True
            stop_event = threading.Event()
            self._stop_event = stop_event

        logger.info(
            "reminder_scheduler_started", interval_minutes=self.interval_minutes
        )
        if blocking_first_pass:
            self.run_once()

        thread = threading.Thread(
            target=self._run_loop,
            args=(stop_event, not blocking_first_pass),
            name="ReminderScheduler",
            daemon=True,
        )
        with self._lock:
            if stop_event.is_set():
                return
            self._thread = thread
        thread.start()

    def stop(self) -> None:
        """Cancel future passes and wait for the thread to finish."""
        with self._lock:
            if not self._is_running:
                return
            self._is_running = False
            self._stop_event.set()
            thread = self._thread
            self._thread = None

        if thread is not None:
            thread.join(timeout=self.join_timeout_seconds)
            if thread.is_alive():
                logger.warning(
                    "reminder_scheduler_stop_timed_out",
                    timeout_seconds=self.join_timeout_seconds,
                )

        logger.info("reminder_scheduler_stopped")

    def run_once(self) -> None:
        """Run a single reminder pass, logging any failure."""
        try:
            self.orchestrator.process_reminders()
        except Exception as e:
            logger.exception("reminder_pass_failed", error=str(e))

    def status(self) -> SchedulerStatus:
        """Return whether the scheduler runs and its interval."""
        return SchedulerStatus(
            running=self._is_running, interval_minutes=self.interval_minutes
        )

    def _run_loop(self, stop_event: threading.Event, run_first: bool = False) -> None:
        if run_first and not stop_event.is_set():
            self.run_once()
        interval_seconds = self.interval_minutes * 60
        while not stop_event.wait(timeout=interval_seconds):
            self.run_once()
