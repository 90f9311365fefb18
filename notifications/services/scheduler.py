from __future__ import annotations

import itertools
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from PySide6.QtCore import QObject, Signal

from notifications.exceptions import InvalidRequest, SchedulerDisposed
from notifications.models.notification import (
    NotificationItem,
    ScheduleRequest,
    normalize_category,
    normalize_lifetime,
    normalize_message,
)
from notifications.settings import ToastSettings
from .timers import QtTimerFactory, TimerFactory, TimerHandle

logger = logging.getLogger(__name__)

Snapshot = Tuple[NotificationItem, ...]
ChangeCallback = Callable[[Snapshot], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationScheduler(QObject):
    """Owns the live toast stack and one expiry timer per toast.

    Every operation runs on the thread that owns the scheduler (the Qt event
    loop). Removal goes through a single path shared by manual dismissal and
    timer expiry, so whichever happens first wins and the other is a no-op.
    """

    # Emitted with the new snapshot after every successful schedule/dismiss.
    changed = Signal(object)

    def __init__(
        self,
        settings: Optional[ToastSettings] = None,
        *,
        timer_factory: Optional[TimerFactory] = None,
        clock: Callable[[], datetime] = _utcnow,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings or ToastSettings()
        self._timer_factory = timer_factory or QtTimerFactory(self)
        self._clock = clock
        self._items: Dict[str, NotificationItem] = {}
        self._timers: Dict[str, TimerHandle] = {}
        self._seq = itertools.count(1)
        self._disposed = False
        self._notifying = False
        self._renotify = False

    # ---- Inbound API -------------------------------------------------------
    def schedule(self, request: Union[ScheduleRequest, Mapping[str, Any]]) -> str:
        if self._disposed:
            raise SchedulerDisposed()
        if isinstance(request, Mapping):
            request = ScheduleRequest.from_payload(request)
        elif not isinstance(request, ScheduleRequest):
            raise InvalidRequest(f"unsupported request type {type(request).__name__}")

        message = normalize_message(request.message)
        category = normalize_category(request.category, self.settings.default_category)
        lifetime_ms = normalize_lifetime(request.lifetime_ms, self.settings.default_lifetime_ms)

        toast_id = self._next_id()
        item = NotificationItem(
            id=toast_id,
            message=message,
            category=category,
            lifetime_ms=lifetime_ms,
            created_at=self._clock(),
        )
        # Arm first: if the backend fails nothing has been inserted yet.
        handle = self._timer_factory(lifetime_ms, lambda: self._expire(toast_id))
        self._items[toast_id] = item
        self._timers[toast_id] = handle
        logger.debug(
            "[toasts] scheduled %s category=%s lifetime_ms=%s (live=%s)",
            toast_id,
            category,
            lifetime_ms,
            len(self._items),
        )
        self._notify()
        return toast_id

    def show(self, message: str, category: Optional[str] = None, lifetime_ms: Optional[int] = None) -> str:
        return self.schedule(ScheduleRequest(message=message, category=category, lifetime_ms=lifetime_ms))

    def dismiss(self, toast_id: str) -> bool:
        if not isinstance(toast_id, str):
            return False
        return self._remove(toast_id, "dismissed")

    def dismiss_all(self) -> int:
        removed = 0
        for toast_id in list(self._items):
            if self._remove(toast_id, "dismissed"):
                removed += 1
        return removed

    # ---- Outbound API ------------------------------------------------------
    def snapshot(self) -> Snapshot:
        return tuple(self._items.values())

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        """Subscribe ``callback``; returns a function that unsubscribes it."""
        self.changed.connect(callback)
        connected = True

        def unsubscribe() -> None:
            nonlocal connected
            if not connected:
                return
            connected = False
            try:
                self.changed.disconnect(callback)
            except (RuntimeError, TypeError) as exc:
                logger.debug("[toasts] observer already disconnected: %s", exc)

        return unsubscribe

    def get(self, toast_id: str) -> Optional[NotificationItem]:
        return self._items.get(toast_id)

    def pending_timer_count(self) -> int:
        return len(self._timers)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def count(self) -> int:
        return len(self._items)

    def __contains__(self, toast_id: object) -> bool:
        return isinstance(toast_id, str) and toast_id in self._items

    # ---- Teardown ----------------------------------------------------------
    def dispose(self) -> None:
        """Cancel every outstanding timer and drop the live stack.

        Observers are not notified. Later ``dismiss`` calls return ``False``.
        """
        if self._disposed:
            return
        self._disposed = True
        for handle in self._timers.values():
            handle.cancel()
        logger.debug(
            "[toasts] disposed scheduler; cancelled %s timer(s), dropped %s toast(s)",
            len(self._timers),
            len(self._items),
        )
        self._timers.clear()
        self._items.clear()

    # ---- Internals ---------------------------------------------------------
    def _next_id(self) -> str:
        return f"toast-{next(self._seq)}-{uuid.uuid4().hex[:8]}"

    def _expire(self, toast_id: str) -> None:
        self._remove(toast_id, "expired")

    def _remove(self, toast_id: str, reason: str) -> bool:
        item = self._items.pop(toast_id, None)
        if item is None:
            logger.debug("[toasts] %s ignored for %s; not live", reason, toast_id)
            return False
        handle = self._timers.pop(toast_id, None)
        if handle is not None:
            handle.cancel()
        logger.debug("[toasts] %s %s (live=%s)", reason, toast_id, len(self._items))
        self._notify()
        return True

    def _notify(self) -> None:
        # Changes made by observers during an emit are folded into one more
        # emit of the latest snapshot, so every observer ends on the live set.
        if self._notifying:
            self._renotify = True
            return
        self._notifying = True
        try:
            while True:
                self._renotify = False
                self.changed.emit(self.snapshot())
                if not self._renotify:
                    break
        finally:
            self._notifying = False
            self._renotify = False


__all__ = ["NotificationScheduler", "Snapshot", "ChangeCallback"]
