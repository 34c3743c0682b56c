"""Request id propagation for log correlation."""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from alerts.constants import REQUEST_ID_HEADER
from alerts.logging.context import clear_request_id, set_request_id


class RequestIDMiddleware:
    """Bind a request id to the handling thread and echo it in the response.

    An incoming ``X-Request-ID`` header is reused; otherwise a UUID4 is
    generated. The id is also available as ``request.request_id``.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Handle one request with its id bound."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
