"""Django project package for the alerting service."""
