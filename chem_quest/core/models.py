"""Domain models for the quiz session engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from chem_quest.core.exceptions import AmbiguousOptionText


class Difficulty(Enum):
    """Informational difficulty tag; never gates session logic."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionState(Enum):
    """Lifecycle of a quiz session."""

    READY = "ready"
    AWAITING_ANSWER = "awaiting_answer"
    SHOWING_FEEDBACK = "showing_feedback"
    COMPLETE = "complete"
    DISPOSED = "disposed"


class AnsweredState(Enum):
    """Resolution of the current question."""

    UNANSWERED = "unanswered"
    ANSWERED_CORRECT = "answered_correct"
    ANSWERED_INCORRECT = "answered_incorrect"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True, slots=True)
class Question:
    """Immutable catalog entry."""

    id: str
    scenario_label: str
    prompt_text: str
    options: tuple[str, ...]
    correct_option_index: int
    explanation_text: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    time_limit_seconds: int = 30
    related_concepts: frozenset[str] = field(default_factory=frozenset)

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_option_index]


def ensure_distinct_options(question_id: str, options: Iterable[str]) -> None:
    """Raise AmbiguousOptionText on the first option text seen twice."""
    seen: set[str] = set()
    for option in options:
        if option in seen:
            raise AmbiguousOptionText(question_id, option)
        seen.add(option)


@dataclass(frozen=True, slots=True)
class ShuffledQuestion:
    """Per-session view of a catalog question with permuted options."""

    source: Question
    options: tuple[str, ...]
    correct_option_index: int

    @property
    def id(self) -> str:
        return self.source.id

    @property
    def scenario_label(self) -> str:
        return self.source.scenario_label

    @property
    def prompt_text(self) -> str:
        return self.source.prompt_text

    @property
    def explanation_text(self) -> str:
        return self.source.explanation_text

    @property
    def difficulty(self) -> Difficulty:
        return self.source.difficulty

    @property
    def time_limit_seconds(self) -> int:
        return self.source.time_limit_seconds

    @property
    def related_concepts(self) -> frozenset[str]:
        return self.source.related_concepts


@dataclass(slots=True)
class QuizSession:
    """Mutable run state, owned exclusively by the session controller."""

    questions: list[ShuffledQuestion]
    started_at_epoch_millis: int
    current_index: int = 0
    score: int = 0
    points: int = 0
    time_bonus_accumulator: int = 0
    answered_state: AnsweredState = AnsweredState.UNANSWERED
    selected_option_index: int | None = None
    time_remaining: int = 0

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_exhausted(self) -> bool:
        return self.current_index >= len(self.questions)

    def current_question(self) -> ShuffledQuestion | None:
        if self.is_exhausted:
            return None
        return self.questions[self.current_index]


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only copy of the session handed to the renderer."""

    state: SessionState
    current_question: ShuffledQuestion | None
    current_index: int
    total: int
    score: int
    time_remaining: int
    answered_state: AnsweredState
    points: int = 0
    selected_option_index: int | None = None


@dataclass(frozen=True, slots=True)
class SessionReport:
    """Variant-agnostic end-of-session summary."""

    correct_count: int
    total_questions: int
    bonus: int
