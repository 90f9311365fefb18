"""Transient toast notifications: a timed, ordered stack with at-most-once removal."""

from .exceptions import InvalidRequest, NotificationError, SchedulerDisposed
from .models import NotificationItem, ScheduleRequest
from .services import NotificationScheduler
from .settings import ToastSettings, load_toast_settings

__all__ = [
    "InvalidRequest",
    "NotificationError",
    "SchedulerDisposed",
    "NotificationItem",
    "ScheduleRequest",
    "NotificationScheduler",
    "ToastSettings",
    "load_toast_settings",
]
