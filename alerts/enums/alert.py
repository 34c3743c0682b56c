"""Alert-related enumerations.

This module contains enums for alert severity, visibility targeting,
delivery channels and statuses, and the derived per-recipient alert state.
"""

from enum import Enum


class AlertSeverity(str, Enum):
    """Alert severity levels, ordered by escalation weight."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def weight(self) -> int:
        """Escalation weight used for ordering (higher is more severe)."""
        return _SEVERITY_WEIGHTS[self]

    @classmethod
    def ordered(cls) -> list["AlertSeverity"]:
        """Return severities from least to most severe."""
        return sorted(cls, key=lambda severity: severity.weight)


_SEVERITY_WEIGHTS = {
    AlertSeverity.INFO: 1,
    AlertSeverity.WARNING: 2,
    AlertSeverity.CRITICAL: 3,
}


class VisibilityType(str, Enum):
    """Targeting rule for an alert.

    TEAM and USER visibility require a target identifier; ORGANIZATION
    reaches every recipient.
    """

    ORGANIZATION = "organization"
    TEAM = "team"
    USER = "user"

    @property
    def requires_target(self) -> bool:
        """Whether this visibility type needs a visibility target."""
        return self in (VisibilityType.TEAM, VisibilityType.USER)


class ChannelName(str, Enum):
    """Names of the built-in notification channels."""

    IN_APP = "in_app"
    EMAIL = "email"
    SMS = "sms"


class DeliveryStatus(str, Enum):
    """Outcome recorded for a single channel delivery attempt."""

    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"


class AlertState(str, Enum):
    """Effective lifecycle state of an alert for one recipient.

    Derived at evaluation time from the alert and the recipient's
    preference; never persisted.
    """

    ACTIVE = "active"
    SNOOZED = "snoozed"
    EXPIRED = "expired"


class AlertStatusFilter(str, Enum):
    """Status filter accepted by the admin alert listing."""

    ACTIVE = "active"
    EXPIRED = "expired"
