"""URL routing configuration for the alerting API."""

from django.urls import path

from .views import (
    AlertAnalyticsView,
    AlertDeliverView,
    AlertDetailView,
    AlertListView,
    LivenessCheckView,
    MarkAlertReadView,
    ProcessRemindersView,
    ReadinessCheckView,
    SchedulerStatusView,
    SnoozeAlertView,
    UserAlertListView,
    UserAlertStatsView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Alert administration
    path("alerts", AlertListView.as_view(), name="alert-list"),
    path(
        "alerts/<str:alert_id>/deliver",
        AlertDeliverView.as_view(),
        name="alert-deliver",
    ),
    path("alerts/<str:alert_id>", AlertDetailView.as_view(), name="alert-detail"),
    path(
        "reminders/process",
        ProcessRemindersView.as_view(),
        name="reminders-process",
    ),
    path("analytics", AlertAnalyticsView.as_view(), name="alert-analytics"),
    path(
        "scheduler/status",
        SchedulerStatusView.as_view(),
        name="scheduler-status",
    ),
    # Per-user alert endpoints
    path(
        "users/<str:user_id>/alerts/stats",
        UserAlertStatsView.as_view(),
        name="user-alert-stats",
    ),
    path(
        "users/<str:user_id>/alerts/<str:alert_id>/read",
        MarkAlertReadView.as_view(),
        name="user-alert-read",
    ),
    path(
        "users/<str:user_id>/alerts/<str:alert_id>/snooze",
        SnoozeAlertView.as_view(),
        name="user-alert-snooze",
    ),
    path("users/<str:user_id>/alerts", UserAlertListView.as_view(), name="user-alerts"),
]
