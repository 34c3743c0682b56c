"""Structlog setup: JSON lines to a rotating file and colored console output."""

import logging
import logging.handlers
from pathlib import Path

import structlog

from alerts.logging.filters import RequestIDFilter
from alerts.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

DEFAULT_LOG_FILE_PATH = "./logs/alerting-service.log"
MAX_LOG_FILE_BYTES = 50 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 20


def _pre_chain(*, with_metadata: bool) -> list:
    """Processors applied to stdlib records that did not come from structlog."""
    chain = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
    ]
    if with_metadata:
        chain += [add_service_context, add_process_info]
    return chain


def _file_handler(log_file_path: str, level: int) -> logging.Handler:
    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=MAX_LOG_FILE_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_pre_chain(with_metadata=True),
        )
    )
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_pre_chain(with_metadata=False),
        )
    )
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file_path: str | None = DEFAULT_LOG_FILE_PATH,
) -> None:
    """Configure structlog and the root logger.

    Every record, from structlog or plain ``logging``, goes to the console
    renderer and, when ``log_file_path`` is set, to a rotating JSON file.

    Args:
        log_level: Name of the minimum level, e.g. ``INFO``.
        log_file_path: JSON log file; None disables file output.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_request_context,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = [_console_handler(level)]
    if log_file_path:
        handlers.append(_file_handler(log_file_path, level))

    request_id_filter = RequestIDFilter()
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.addFilter(request_id_filter)
        root_logger.addHandler(handler)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_level=logging.getLevelName(level),
        log_file=log_file_path,
    )


def configure_logging(logging_settings: dict | None) -> None:
    """Django ``LOGGING_CONFIG`` hook.

    Django calls this with ``settings.LOGGING``, whose keys are passed to
    :func:`setup_logging`.
    """
    setup_logging(**(logging_settings or {}))
