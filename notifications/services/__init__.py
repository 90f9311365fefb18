from .scheduler import NotificationScheduler
from .timers import QtSingleShotTimer, QtTimerFactory, TimerHandle

__all__ = [
    "NotificationScheduler",
    "QtSingleShotTimer",
    "QtTimerFactory",
    "TimerHandle",
]
