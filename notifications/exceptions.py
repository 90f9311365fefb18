"""Custom exceptions for the toast notification scheduler."""
from __future__ import annotations


class NotificationError(RuntimeError):
    """Base exception for notification scheduling."""


class InvalidRequest(NotificationError, ValueError):
    """Raised when a schedule request is malformed.

    Always caller-correctable; the scheduler state is untouched when this is
    raised.
    """


class SchedulerDisposed(NotificationError):
    """Raised when scheduling on a scheduler that has been torn down."""

    def __init__(self) -> None:
        super().__init__("Notification scheduler has been disposed")


__all__ = [
    "NotificationError",
    "InvalidRequest",
    "SchedulerDisposed",
]
