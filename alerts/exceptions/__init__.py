"""Exception types for the alerting service.

The DRF exception handler lives in ``alerts.exceptions.handlers`` and is
not re-exported here so that models can import these types while the app
registry is still loading.
"""

from alerts.exceptions.alert_exceptions import (
    AlertingError,
    AlertNotFoundError,
    AlertStoreError,
    InvalidAlertWindowError,
    InvalidSnoozeDurationError,
    InvalidVisibilityError,
    RecipientNotFoundError,
)

__all__ = [
    "AlertNotFoundError",
    "AlertStoreError",
    "AlertingError",
    "InvalidAlertWindowError",
    "InvalidSnoozeDurationError",
    "InvalidVisibilityError",
    "RecipientNotFoundError",
]
