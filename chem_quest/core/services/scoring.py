"""Pure scoring functions for both supported scoring variants.

Count-based: one point per correct answer plus a single time bonus computed at
completion from unused session time. Points-with-bonus: every correct answer
earns a base award plus a weighted bonus for the seconds left on its clock.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Union

from chem_quest.constants.quiz_constants import (
    DEFAULT_BASE_POINTS,
    DEFAULT_NORMALIZATION_FACTOR,
    DEFAULT_PER_QUESTION_BUDGET_SECONDS,
    DEFAULT_PER_SECOND_WEIGHT,
)
from chem_quest.core.models import QuizSession, SessionReport


@dataclass(frozen=True, slots=True)
class CountBased:
    per_question_budget_seconds: int = DEFAULT_PER_QUESTION_BUDGET_SECONDS
    normalization_factor: int = DEFAULT_NORMALIZATION_FACTOR

    def __post_init__(self) -> None:
        if self.per_question_budget_seconds <= 0:
            raise ValueError("Per-question budget must be positive.")
        if self.normalization_factor <= 0:
            raise ValueError("Normalization factor must be positive.")


@dataclass(frozen=True, slots=True)
class PointsWithBonus:
    base_points: int = DEFAULT_BASE_POINTS
    per_second_weight: int = DEFAULT_PER_SECOND_WEIGHT

    def __post_init__(self) -> None:
        if self.base_points < 0 or self.per_second_weight < 0:
            raise ValueError("Base points and per-second weight must not be negative.")


ScoringVariant = Union[CountBased, PointsWithBonus]


@dataclass(frozen=True, slots=True)
class AnswerScore:
    """Deltas applied to the session for one resolved question."""

    correct_delta: int
    points_delta: int
    time_bonus_delta: int


def score_answer(variant: ScoringVariant, is_correct: bool, remaining_seconds: int) -> AnswerScore:
    """Compute the deltas for one answer. Incorrect answers (and timeouts) award nothing."""
    if not is_correct:
        return AnswerScore(0, 0, 0)
    if isinstance(variant, PointsWithBonus):
        time_bonus = max(0, remaining_seconds) * variant.per_second_weight
        return AnswerScore(1, variant.base_points + time_bonus, time_bonus)
    return AnswerScore(1, 1, 0)


def session_time_bonus(
    variant: ScoringVariant,
    question_count: int,
    elapsed_seconds: float,
    per_question_seconds: int | None = None,
) -> int:
    """End-of-session bonus; only the count-based variant has one.

    A fixed ``per_question_seconds`` sets the budget; without one (catalog
    time limits) the variant's own per-question budget applies.
    """
    if not isinstance(variant, CountBased):
        return 0
    budget_per_question = per_question_seconds or variant.per_question_budget_seconds
    budget = question_count * budget_per_question
    return max(0, math.floor((budget - elapsed_seconds) / variant.normalization_factor))


def finalize(
    session: QuizSession,
    variant: ScoringVariant,
    elapsed_seconds: float,
    per_question_seconds: int | None = None,
) -> SessionReport:
    """Build the report handed to ending screens, whatever the variant."""
    if isinstance(variant, PointsWithBonus):
        bonus = session.time_bonus_accumulator
    else:
        bonus = session_time_bonus(variant, session.total, elapsed_seconds, per_question_seconds)
    return SessionReport(
        correct_count=session.score,
        total_questions=session.total,
        bonus=bonus,
    )


def variant_name(variant: ScoringVariant) -> str:
    return "points-with-bonus" if isinstance(variant, PointsWithBonus) else "count-based"
