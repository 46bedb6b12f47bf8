"""Timer-advanced intro slideshow."""

from __future__ import annotations

from typing import Callable, Sequence

from chem_quest.constants.quiz_constants import INTRO_SLIDE_SECONDS
from chem_quest.core.services.task_scheduler import ScheduledTask, TaskScheduler


class CutscenePlayer:
    """Shows slides in order, holds the last one for an interval, then finishes."""

    def __init__(
        self,
        slides: Sequence[str],
        scheduler: TaskScheduler,
        *,
        slide_seconds: float = INTRO_SLIDE_SECONDS,
        on_slide: Callable[[int, str], None] | None = None,
        on_finished: Callable[[], None] | None = None,
    ) -> None:
        if not slides:
            raise ValueError("A cutscene needs at least one slide.")
        self._slides = tuple(slides)
        self._scheduler = scheduler
        self._slide_seconds = slide_seconds
        self._on_slide = on_slide
        self._on_finished = on_finished
        self._current_index = 0
        self._task: ScheduledTask | None = None
        self._finished = False

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_slide(self) -> str:
        return self._slides[self._current_index]

    @property
    def finished(self) -> bool:
        return self._finished

    def play(self) -> None:
        if self._task is not None or self._finished:
            return
        self._show(0)
        self._task = self._scheduler.call_every(self._slide_seconds, self._next)

    def skip(self) -> None:
        self._finish()

    def dispose(self) -> None:
        self._cancel()

    def _next(self) -> None:
        if self._current_index + 1 < len(self._slides):
            self._show(self._current_index + 1)
        else:
            self._finish()

    def _show(self, index: int) -> None:
        self._current_index = index
        if self._on_slide is not None:
            self._on_slide(index, self._slides[index])

    def _finish(self) -> None:
        if self._finished:
            return
        self._cancel()
        self._finished = True
        if self._on_finished is not None:
            self._on_finished()

    def _cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
