"""Logging filters."""

import logging

from alerts.logging.context import get_request_id

NO_REQUEST_ID = "N/A"


class RequestIDFilter(logging.Filter):
    """Set ``record.request_id`` from the current thread's request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Annotate the record; never drops it."""
        record.request_id = get_request_id() or NO_REQUEST_ID
        return True
