"""Health checks for the database and the reminder scheduler."""

import logging
import time

from django.conf import settings
from django.db import connection
from django.db.utils import OperationalError

from alerts.enums import HealthStatus
from alerts.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from alerts.services.runtime import get_reminder_scheduler

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached database check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._db_health_cache: DependencyHealth | None = None
        self._db_health_cache_time: float = 0.0

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive)."""
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with database and scheduler checks.

        A stopped scheduler or an unreachable database reports degraded but
        still ready, so manual delivery endpoints stay available.

        Returns:
            ReadinessResponse with overall status and dependency health
        """
        db_health = self.check_database_health()
        scheduler_health = self.check_scheduler_health()
        dependencies = {"database": db_health, "reminder_scheduler": scheduler_health}

        degraded = not (db_health.healthy and scheduler_health.healthy)
        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity with caching.

        Returns:
            DependencyHealth with database status
        """
        current_time = time.time()
        if (
            self._db_health_cache is not None
            and (current_time - self._db_health_cache_time) < self.cache_ttl_seconds
        ):
            return self._db_health_cache

        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            new_health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except OperationalError as e:
            logger.warning("Database connection failed: %s", e)
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except Exception as e:
            logger.error("Unexpected error checking database: %s", e)
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking database: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        self._db_health_cache = new_health
        self._db_health_cache_time = current_time
        return new_health

    def check_scheduler_health(self) -> DependencyHealth:
        """Report whether the in-process reminder scheduler is running.

        When autostart is disabled the scheduler is expected to run in a
        separate process, so a stopped scheduler here is healthy.
        """
        try:
            status = get_reminder_scheduler().status()
        except Exception as e:
            logger.error("Unable to read reminder scheduler status: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Reminder scheduler unavailable: {e!s}",
            )

        if status.running:
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message=f"Running every {status.interval_minutes} minutes",
            )
        if not getattr(settings, "REMINDER_SCHEDULER_AUTOSTART", False):
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Scheduler runs outside the web process",
            )
        return DependencyHealth(
            healthy=False,
            status=HealthStatus.DEGRADED,
            message="Reminder scheduler is not running",
        )


# Global health service instance
health_service = HealthService()
