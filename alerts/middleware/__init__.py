"""Middleware for the alerting service."""

from alerts.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
