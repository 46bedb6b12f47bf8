"""QTimer-backed task scheduler for the running application."""

from __future__ import annotations

import time
from typing import Callable

from PySide6.QtCore import QObject, QTimer

from chem_quest.core.services.task_scheduler import ScheduledTask, TaskScheduler


class _QtTask:
    """Owns one QTimer; the timer is released when the task ends."""

    def __init__(self, timer: QTimer, callback: Callable[[], None], repeating: bool) -> None:
        self._timer = timer
        self._callback = callback
        self._repeating = repeating
        self._done = False
        timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return not self._done

    def cancel(self) -> None:
        if not self._done:
            self._release()

    def _fire(self) -> None:
        if not self._repeating:
            self._release()
        self._callback()

    def _release(self) -> None:
        self._done = True
        self._timer.stop()
        self._timer.deleteLater()


class QtTaskScheduler(TaskScheduler):
    """Schedules callbacks on the Qt event loop of the calling thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        return self._start(delay_seconds, callback, repeating=False)

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        if interval_seconds <= 0:
            raise ValueError("Interval must be positive.")
        return self._start(interval_seconds, callback, repeating=True)

    def now(self) -> float:
        return time.time()

    def _start(self, seconds: float, callback: Callable[[], None], repeating: bool) -> _QtTask:
        timer = QTimer(self._parent)
        timer.setSingleShot(not repeating)
        timer.setInterval(max(0, int(round(seconds * 1000))))
        task = _QtTask(timer, callback, repeating)
        timer.start()
        return task
