from .notification import KNOWN_CATEGORIES, NotificationItem, ScheduleRequest
from .presentation import ToastPresentation, toast_presentation

__all__ = [
    "KNOWN_CATEGORIES",
    "NotificationItem",
    "ScheduleRequest",
    "ToastPresentation",
    "toast_presentation",
]
