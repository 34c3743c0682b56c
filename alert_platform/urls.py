"""Root URL configuration for the alerting service."""

from django.urls import include, path

from alerts.constants import API_VERSION_PREFIX

urlpatterns = [
    path(API_VERSION_PREFIX, include("alerts.urls")),
]
