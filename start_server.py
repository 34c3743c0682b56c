"""Production entry point: serve the alerting API with Gunicorn."""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start Gunicorn for ``alert_platform.wsgi``.

    Worker and thread counts come from GUNICORN_WORKERS (default 1) and
    GUNICORN_THREADS (default 4). With REMINDER_SCHEDULER_AUTOSTART enabled
    every worker runs its own scheduler, so keep a single worker or run
    ``manage.py run_reminder_scheduler`` separately.
    """
    sys.argv = [
        "gunicorn",
        "alert_platform.wsgi:application",
        "--bind",
        os.getenv("GUNICORN_BIND", "0.0.0.0:8000"),
        "--workers",
        os.getenv("GUNICORN_WORKERS", "1"),
        "--threads",
        os.getenv("GUNICORN_THREADS", "4"),
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
