"""API views for the alerting application."""

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from alerts.schemas.alert import (
    AlertCreateRequest,
    AlertDetail,
    AlertUpdateRequest,
    SnoozeRequest,
)
from alerts.services.alert_service import AlertService
from alerts.services.health_service import health_service
from alerts.services.runtime import get_delivery_orchestrator, get_reminder_scheduler

logger = structlog.get_logger(__name__)

alert_service = AlertService()


def _bad_request(message: str, errors: list | None = None) -> Response:
    body = {"error": "bad_request", "message": message}
    if errors is not None:
        body["errors"] = errors
    return Response(body, status=status.HTTP_400_BAD_REQUEST)


class LivenessCheckView(APIView):
    """Liveness probe; never checks dependencies."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Return 200 while the process is alive."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe covering the database and the reminder scheduler.

    Degraded dependencies still answer 200 so the service stays routable.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Return readiness with per-dependency health."""
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(), status=status.HTTP_200_OK)


class AlertListView(APIView):
    """List alerts (GET) or create one (POST)."""

    def get(self, request):
        """List non-archived alerts.

        Query parameters ``severity``, ``status`` (active/expired) and
        ``visibility_type`` narrow the result.

        Returns:
            200 with the alert list, 400 for an unknown filter value.
        """
        try:
            alerts = alert_service.list_alerts(
                severity=request.query_params.get("severity"),
                status=request.query_params.get("status"),
                visibility_type=request.query_params.get("visibility_type"),
            )
        except ValueError as e:
            return _bad_request(f"Invalid filter: {e}")

        return Response(
            {
                "alerts": [
                    AlertDetail.model_validate(alert).model_dump() for alert in alerts
                ],
                "count": len(alerts),
            },
            status=status.HTTP_200_OK,
        )

    def post(self, request):
        """Create an alert and queue its delivery.

        Returns:
            201 with the created alert, 400 if validation fails.
        """
        try:
            create_request = AlertCreateRequest(**request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for alert creation",
                validation_errors=e.errors(include_context=False),
            )
            return _bad_request(
                "Invalid request parameters", e.errors(include_context=False)
            )

        alert = alert_service.create_alert(create_request)
        return Response(
            AlertDetail.model_validate(alert).model_dump(),
            status=status.HTTP_201_CREATED,
        )


class AlertDetailView(APIView):
    """Retrieve, update or archive a single alert."""

    def get(self, _request, alert_id):
        """Return the alert or 404."""
        alert = alert_service.get_alert(alert_id)
        return Response(
            AlertDetail.model_validate(alert).model_dump(), status=status.HTTP_200_OK
        )

    def patch(self, request, alert_id):
        """Apply a partial update.

        Returns:
            200 with the updated alert, 400 if validation fails, 404 if the
            alert is missing or archived.
        """
        try:
            update_request = AlertUpdateRequest(**request.data)
        except ValidationError as e:
            return _bad_request(
                "Invalid request parameters", e.errors(include_context=False)
            )

        alert = alert_service.update_alert(alert_id, update_request)
        return Response(
            AlertDetail.model_validate(alert).model_dump(), status=status.HTTP_200_OK
        )

    def delete(self, _request, alert_id):
        """Archive the alert.

        Returns:
            204 on success, 404 if missing or already archived.
        """
        if not alert_service.archive_alert(alert_id):
            return Response(
                {"error": "not_found", "message": f"Alert with ID {alert_id} not found"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)


class AlertDeliverView(APIView):
    """Queue an immediate delivery pass for one alert."""

    def post(self, _request, alert_id):
        """Return 202 once the delivery job is queued."""
        alert = alert_service.get_alert(alert_id)
        alert_service.queue_delivery(alert.id)
        logger.info("Alert delivery requested", alert_id=alert.id)
        return Response(
            {"alert_id": alert.id, "status": "queued"},
            status=status.HTTP_202_ACCEPTED,
        )


class ProcessRemindersView(APIView):
    """Queue a reminder pass outside the regular schedule."""

    def post(self, _request):
        """Return 202 once the reminder job is queued."""
        alert_service.queue_reminder_pass()
        return Response({"status": "queued"}, status=status.HTTP_202_ACCEPTED)


class AlertAnalyticsView(APIView):
    """Platform-wide delivery and engagement statistics."""

    def get(self, _request):
        """Return analytics."""
        analytics = alert_service.get_analytics()
        return Response(analytics.model_dump(), status=status.HTTP_200_OK)


class SchedulerStatusView(APIView):
    """Report the in-process reminder scheduler state."""

    def get(self, _request):
        """Return running flag and interval."""
        scheduler_status = get_reminder_scheduler().status()
        return Response(scheduler_status.model_dump(), status=status.HTTP_200_OK)


class UserAlertListView(APIView):
    """Alerts currently visible to a user, with read and snooze state."""

    def get(self, _request, user_id):
        """Return the user's alerts or 404 for an unknown user."""
        user_alerts = alert_service.get_user_alerts(user_id)
        return Response(
            {
                "user_id": user_id,
                "alerts": [user_alert.model_dump() for user_alert in user_alerts],
                "count": len(user_alerts),
            },
            status=status.HTTP_200_OK,
        )


class UserAlertStatsView(APIView):
    """Read/unread/snoozed counters for a user."""

    def get(self, _request, user_id):
        """Return the user's alert statistics."""
        stats = alert_service.get_user_alert_stats(user_id)
        return Response(stats.model_dump(), status=status.HTTP_200_OK)


class MarkAlertReadView(APIView):
    """Mark an alert read for a user; stops reminders."""

    def post(self, _request, user_id, alert_id):
        """Return 200 once the read flag is stored."""
        get_delivery_orchestrator().mark_as_read(user_id, alert_id)
        return Response(
            {"alert_id": alert_id, "user_id": user_id, "is_read": True},
            status=status.HTTP_200_OK,
        )


class SnoozeAlertView(APIView):
    """Snooze an alert for a user.

    Body: ``{"hours": n}`` with 1 <= n <= MAX_SNOOZE_HOURS; omitted hours use
    the default snooze length.
    """

    def post(self, request, user_id, alert_id):
        """Return 200 with the snooze end, 400 for an invalid duration."""
        try:
            snooze_request = SnoozeRequest(**request.data)
        except ValidationError as e:
            return _bad_request(
                "Invalid request parameters", e.errors(include_context=False)
            )

        snoozed_until = get_delivery_orchestrator().snooze(
            user_id, alert_id, snooze_request.hours
        )
        return Response(
            {
                "alert_id": alert_id,
                "user_id": user_id,
                "snoozed_until": snoozed_until,
            },
            status=status.HTTP_200_OK,
        )
