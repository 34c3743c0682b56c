"""WSGI config for the alerting service."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "alert_platform.settings")

application = get_wsgi_application()
