"""Repository layer for alerting data access."""

from alerts.repositories.alert_store import AlertStore, DjangoAlertStore

__all__ = ["AlertStore", "DjangoAlertStore"]
