"""Cancellable scheduled tasks for the single-threaded session engine.

The controller never touches timers directly: it asks a ``TaskScheduler`` for
one-shot or repeating tasks and keeps the returned handles so it can cancel
them at every state transition. ``ManualTaskScheduler`` drives a virtual clock
for tests and headless runs; the Qt application uses ``QtTaskScheduler`` from
``chem_quest.ui.qt_scheduler``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Protocol


class ScheduledTask(Protocol):
    """Handle for a pending callback."""

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class TaskScheduler(ABC):
    """Schedules callbacks and reports wall-clock time in seconds."""

    @abstractmethod
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` once after ``delay_seconds``."""

    @abstractmethod
    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` every ``interval_seconds`` until cancelled."""

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds since the epoch."""

    def now_millis(self) -> int:
        return int(self.now() * 1000)


@dataclass(eq=False)
class _ManualTask:
    due: float
    sequence: int
    callback: Callable[[], None]
    interval: float | None = None
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.fired


class ManualTaskScheduler(TaskScheduler):
    """Virtual-clock scheduler; time only moves when ``advance`` is called."""

    def __init__(self, start_time: float = 0.0) -> None:
        self._now = start_time
        self._sequence = 0
        self._tasks: list[_ManualTask] = []

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        return self._add(delay_seconds, callback, interval=None)

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        if interval_seconds <= 0:
            raise ValueError("Interval must be positive.")
        return self._add(interval_seconds, callback, interval=interval_seconds)

    def now(self) -> float:
        return self._now

    def pending_count(self) -> int:
        self._tasks = [task for task in self._tasks if task.active]
        return len(self._tasks)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in time order."""
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards.")
        target = self._now + seconds
        while True:
            due = [task for task in self._tasks if task.active and task.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.sequence))
            self._now = task.due
            if task.interval is None:
                task.fired = True
            else:
                task.due += task.interval
            task.callback()
        self._now = target
        self._tasks = [task for task in self._tasks if task.active]

    def _add(self, delay: float, callback: Callable[[], None], interval: float | None) -> _ManualTask:
        if delay < 0:
            raise ValueError("Delay must not be negative.")
        self._sequence += 1
        task = _ManualTask(
            due=self._now + delay,
            sequence=self._sequence,
            callback=callback,
            interval=interval,
        )
        self._tasks.append(task)
        return task
