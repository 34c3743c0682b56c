"""Process-wide wiring of the store, channel registry, orchestrator and scheduler.

Each object is built once per process on first use and shared afterwards.
"""

import threading

from alerts.channels import ChannelRegistry, build_default_registry
from alerts.repositories import AlertStore, DjangoAlertStore
from alerts.services.delivery_orchestrator import DeliveryOrchestrator
from alerts.services.reminder_scheduler import ReminderScheduler

_lock = threading.RLock()
_alert_store: AlertStore | None = None
_channel_registry: ChannelRegistry | None = None
_orchestrator: DeliveryOrchestrator | None = None
_scheduler: ReminderScheduler | None = None


def get_alert_store() -> AlertStore:
    """Return the shared alert store."""
    global _alert_store
    with _lock:
        if _alert_store is None:
            _alert_store = DjangoAlertStore()
        return _alert_store


def get_channel_registry() -> ChannelRegistry:
    """Return the shared channel registry."""
    global _channel_registry
    with _lock:
        if _channel_registry is None:
            _channel_registry = build_default_registry()
        return _channel_registry


def get_delivery_orchestrator() -> DeliveryOrchestrator:
    """Return the shared delivery orchestrator."""
    global _orchestrator
    with _lock:
        if _orchestrator is None:
            _orchestrator = DeliveryOrchestrator(
                store=get_alert_store(),
                registry=get_channel_registry(),
            )
        return _orchestrator


def get_reminder_scheduler() -> ReminderScheduler:
    """Return the shared reminder scheduler (not started)."""
    global _scheduler
    with _lock:
        if _scheduler is None:
            _scheduler = ReminderScheduler(get_delivery_orchestrator())
        return _scheduler


def reset() -> None:
    """Stop the scheduler and drop all shared objects."""
    global _alert_store, _channel_registry, _orchestrator, _scheduler
    with _lock:
        if _scheduler is not None:
            _scheduler.stop()
        _alert_store = None
        _channel_registry = None
        _orchestrator = None
        _scheduler = None
