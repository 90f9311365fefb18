from __future__ import annotations

from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer

# QTimer intervals are signed 32-bit milliseconds.
MAX_QTIMER_INTERVAL_MS = 2**31 - 1


class TimerHandle(Protocol):
    """Fire-once deferred callback that can be cancelled before it fires."""

    def cancel(self) -> None: ...

    def is_active(self) -> bool: ...


TimerFactory = Callable[[int, Callable[[], None]], TimerHandle]


class QtSingleShotTimer:
    """Single-shot ``QTimer`` wrapper bound to the owner's event loop.

    Intervals longer than a ``QTimer`` can hold are served by re-arming in
    chunks; ``callback`` only runs once the whole interval has elapsed.
    """

    def __init__(self, interval_ms: int, callback: Callable[[], None], parent: Optional[QObject] = None) -> None:
        self._callback = callback
        self._remaining_ms = max(0, int(interval_ms))
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)
        self._arm()

    def _arm(self) -> None:
        chunk = min(self._remaining_ms, MAX_QTIMER_INTERVAL_MS)
        self._remaining_ms -= chunk
        self._timer.start(chunk)

    def _on_timeout(self) -> None:
        if self._timer is None:
            return
        if self._remaining_ms > 0:
            self._arm()
            return
        self._callback()

    @property
    def remaining_ms(self) -> int:
        """Milliseconds still to run after the chunk currently armed."""
        return self._remaining_ms

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None

    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()


class QtTimerFactory:
    """Builds :class:`QtSingleShotTimer` objects parented to ``parent``."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self.parent = parent

    def __call__(self, interval_ms: int, callback: Callable[[], None]) -> QtSingleShotTimer:
        return QtSingleShotTimer(interval_ms, callback, self.parent)
