"""Background jobs for alert delivery and reminder passes.

Jobs are enqueued by dotted path and run on RQ workers. They resolve the
shared orchestrator from ``alerts.services.runtime`` inside the worker.
"""

import structlog

from alerts.exceptions import AlertNotFoundError
from alerts.services.runtime import get_delivery_orchestrator

logger = structlog.get_logger(__name__)

DELIVER_ALERT_JOB = "alerts.jobs.alert_jobs.deliver_alert_job"
PROCESS_REMINDERS_JOB = "alerts.jobs.alert_jobs.process_reminders_job"


def deliver_alert_job(alert_id: str) -> int:
    """Deliver an alert to all eligible recipients.

    An alert archived or deleted after the job was queued is skipped.

    Args:
        alert_id: ID of the alert to deliver.

    Returns:
        Number of recipients notified.
    """
    logger.info("deliver_alert_job_started", alert_id=alert_id)
    try:
        delivered = get_delivery_orchestrator().deliver_alert(alert_id)
    except AlertNotFoundError:
        logger.warning("deliver_alert_job_alert_missing", alert_id=alert_id)
        return 0

    logger.info("deliver_alert_job_completed", alert_id=alert_id, delivered=delivered)
    return delivered


def process_reminders_job() -> dict:
    """Run one reminder pass.

    Returns:
        Pass counters as a dict.
    """
    summary = get_delivery_orchestrator().process_reminders()
    return summary.model_dump()
