"""Pydantic schemas for the alerts app."""

from alerts.schemas.base_schema_model import BaseSchemaModel
from alerts.schemas.notification import DeliveryResult, Notification

__all__ = ["BaseSchemaModel", "DeliveryResult", "Notification"]
