"""Custom exceptions for alert delivery and preference operations."""


class AlertingError(Exception):
    """Base exception for alerting service errors."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize alerting error.

        Args:
            message: Error message
            status_code: HTTP status code the error maps to, if any
        """
        self.status_code = status_code
        super().__init__(message)


class AlertNotFoundError(AlertingError):
    """Alert does not exist or has been archived (404)."""

    def __init__(self, alert_id: str):
        """Initialize alert not found error.

        Args:
            alert_id: ID of the alert that was not found
        """
        self.alert_id = alert_id
        super().__init__(
            message=f"Alert with ID {alert_id} not found",
            status_code=404,
        )


class RecipientNotFoundError(AlertingError):
    """Recipient user does not exist (404)."""

    def __init__(self, user_id: str):
        """Initialize recipient not found error.

        Args:
            user_id: ID of the user that was not found
        """
        self.user_id = user_id
        super().__init__(
            message=f"User with ID {user_id} not found",
            status_code=404,
        )


class InvalidSnoozeDurationError(AlertingError):
    """Requested snooze duration is outside the allowed range (400)."""

    def __init__(self, hours: float, max_hours: int):
        """Initialize invalid snooze duration error.

        Args:
            hours: Requested snooze length in hours
            max_hours: Largest allowed snooze length
        """
        self.hours = hours
        self.max_hours = max_hours
        super().__init__(
            message=f"Hours must be a number between 1 and {max_hours}, got {hours}",
            status_code=400,
        )


class InvalidVisibilityError(AlertingError):
    """Visibility value or type/target combination is invalid (400)."""

    def __init__(self, visibility: str, message: str | None = None):
        """Initialize invalid visibility error.

        Args:
            visibility: The offending visibility value
            message: Optional custom error message
        """
        self.visibility = visibility
        super().__init__(
            message=message or f"Invalid visibility: {visibility!r}",
            status_code=400,
        )


class AlertStoreError(AlertingError):
    """Alert store read or write failed (503)."""

    def __init__(self, operation: str, message: str | None = None):
        """Initialize alert store error.

        Args:
            operation: Name of the store operation that failed
            message: Optional underlying error description
        """
        self.operation = operation
        default_message = f"Alert store operation '{operation}' failed"
        super().__init__(
            message=f"{default_message}: {message}" if message else default_message,
            status_code=503,
        )


class InvalidAlertWindowError(AlertingError):
    """Alert expiry is not after its start time (400)."""

    def __init__(self, start_time, expiry_time):
        """Initialize invalid alert window error.

        Args:
            start_time: Resulting start time of the alert
            expiry_time: Resulting expiry time of the alert
        """
        self.start_time = start_time
        self.expiry_time = expiry_time
        super().__init__(
            message="expiry_time must be after start_time",
            status_code=400,
        )
