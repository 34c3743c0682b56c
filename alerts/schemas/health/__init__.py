"""Health check schemas."""

from alerts.schemas.health.dependency_health import DependencyHealth
from alerts.schemas.health.liveness_response import LivenessResponse
from alerts.schemas.health.readiness_response import ReadinessResponse

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
