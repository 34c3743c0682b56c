"""DRF exception handler for the alerting API."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.http import Http404

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from alerts.constants import REQUEST_ID_HEADER
from alerts.exceptions.alert_exceptions import AlertingError
from alerts.logging.context import get_request_id

logger = logging.getLogger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Turn exceptions into ``{status, message, request_id, timestamp}`` bodies.

    DRF's own exceptions keep DRF's body. Alerting errors use their mapped
    status code (404 missing alert or user, 400 invalid input, 503 store
    unavailable). Anything else becomes a 500.

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        The error response.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, AlertingError):
            status_code = exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
            message = str(exc)
        elif isinstance(exc, Http404):
            status_code = status.HTTP_404_NOT_FOUND
            message = "The requested resource was not found."
        else:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            message = "An internal server error occurred."

        response = Response(
            _create_error_response(status_code, message, request_id),
            status=status_code,
        )

    if request_id:
        response[REQUEST_ID_HEADER] = request_id

    _log_exception(exc, request, response)
    return response


def _create_error_response(
    status_code: int, message: str, request_id: str | None
) -> dict[str, Any]:
    return {
        "status": status_code,
        "message": message,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _log_exception(exc: Exception, request: Any, response: Response) -> None:
    """Log client errors as warnings and server errors with a stack trace."""
    request_line = f"{request.method} {request.path}" if request else "unknown"
    log_message = (
        f"{type(exc).__name__}: {exc} | Path: {request_line} | "
        f"Status: {response.status_code}"
    )

    if response.status_code < 500:
        logger.warning(log_message)
        return

    if settings.DEBUG:
        log_message += "\n" + "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    logger.error(log_message)
