from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Callable, List

import pytest

# Qt widgets require a platform plugin.  Offscreen avoids libGL dependencies
# inside the test container.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from notifications.services.scheduler import NotificationScheduler  # noqa: E402
from notifications.settings import ToastSettings  # noqa: E402

START = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class ManualTimer:
    def __init__(self, due_ms: int, seq: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def is_active(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualTimers:
    """Deterministic stand-in for the Qt timer backend.

    Time only moves when ``advance`` is called; timers due at the same instant
    fire in the order they were armed.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self.timers: List[ManualTimer] = []

    def __call__(self, interval_ms: int, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now_ms + interval_ms, len(self.timers), callback)
        self.timers.append(timer)
        return timer

    def clock(self) -> datetime:
        return START + timedelta(milliseconds=self.now_ms)

    def active(self) -> List[ManualTimer]:
        return [t for t in self.timers if t.is_active()]

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [t for t in self.active() if t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.seq))
            self.now_ms = max(self.now_ms, timer.due_ms)
            timer.fired = True
            timer.callback()
        self.now_ms = target

    def tick(self) -> None:
        self.advance(0)


def _ensure_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    return _ensure_app()


@pytest.fixture
def timers() -> ManualTimers:
    return ManualTimers()


@pytest.fixture
def scheduler(qapp, timers):
    sched = NotificationScheduler(ToastSettings(), timer_factory=timers, clock=timers.clock)
    yield sched
    sched.dispose()


@pytest.fixture
def changes(scheduler) -> list:
    seen: list = []

    def _record(snapshot) -> None:
        seen.append(snapshot)

    scheduler.on_change(_record)
    return seen
