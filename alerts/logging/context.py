"""Per-thread request id storage shared by middleware and log processors."""

import threading

_local = threading.local()


def set_request_id(request_id: str) -> None:
    """Bind ``request_id`` to the current thread."""
    _local.request_id = request_id


def get_request_id() -> str | None:
    """Return the request id bound to the current thread, if any."""
    return getattr(_local, "request_id", None)


def clear_request_id() -> None:
    """Unbind the request id so it cannot leak into the next request."""
    _local.__dict__.pop("request_id", None)
