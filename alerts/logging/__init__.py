"""Logging utilities for the alerting service."""

from alerts.logging.config import configure_logging, setup_logging
from alerts.logging.context import clear_request_id, get_request_id, set_request_id
from alerts.logging.filters import RequestIDFilter

__all__ = [
    "RequestIDFilter",
    "clear_request_id",
    "configure_logging",
    "get_request_id",
    "set_request_id",
    "setup_logging",
]
