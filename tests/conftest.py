"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "alert_platform.settings_test")
django.setup()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture(autouse=True)
def reset_runtime():
    """Drop process-wide store, registry, orchestrator and scheduler."""
    from alerts.services import runtime  # noqa: PLC0415

    runtime.reset()
    yield
    runtime.reset()
