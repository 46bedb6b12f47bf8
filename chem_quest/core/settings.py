"""Game configuration and the built-in game mode presets."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chem_quest.constants.audio_constants import DEFAULT_MASTER_VOLUME
from chem_quest.constants.quiz_constants import (
    DEFAULT_FEEDBACK_SECONDS,
    DEFAULT_QUESTION_COUNT,
    MAX_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
)
from chem_quest.core.models import Difficulty
from chem_quest.core.services.scoring import CountBased, PointsWithBonus, ScoringVariant


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Configuration surface of a quiz run.

    ``per_question_seconds`` of ``None`` means each question uses the time
    limit stored in the catalog.
    """

    question_count: int = DEFAULT_QUESTION_COUNT
    per_question_seconds: int | None = None
    difficulty_filter: Difficulty | None = None
    scoring_variant: ScoringVariant = field(default_factory=PointsWithBonus)
    feedback_seconds: float = DEFAULT_FEEDBACK_SECONDS
    audio_master_volume: float = DEFAULT_MASTER_VOLUME
    audio_enabled: bool = True
    shuffle_seed: int | None = None

    def __post_init__(self) -> None:
        if not MIN_QUESTION_COUNT <= self.question_count <= MAX_QUESTION_COUNT:
            raise ValueError(
                f"Question count must be between {MIN_QUESTION_COUNT} and {MAX_QUESTION_COUNT}."
            )
        if self.per_question_seconds is not None and self.per_question_seconds <= 0:
            raise ValueError("Per-question time must be a positive integer.")
        if self.feedback_seconds < 0:
            raise ValueError("Feedback duration must not be negative.")
        if not 0.0 <= self.audio_master_volume <= 1.0:
            raise ValueError("Master volume must be between 0 and 1.")

    def with_updates(self, **changes: object) -> GameSettings:
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes)


GAME_PRESETS: dict[str, GameSettings] = {
    "classic": GameSettings(
        question_count=4,
        per_question_seconds=30,
        scoring_variant=CountBased(per_question_budget_seconds=30, normalization_factor=10),
        feedback_seconds=2.0,
    ),
    "enhanced": GameSettings(
        question_count=6,
        scoring_variant=PointsWithBonus(base_points=100, per_second_weight=10),
        feedback_seconds=3.5,
    ),
    "holographic": GameSettings(
        question_count=8,
        scoring_variant=CountBased(per_question_budget_seconds=60, normalization_factor=10),
        feedback_seconds=6.0,
    ),
}


def preset(name: str) -> GameSettings:
    try:
        return GAME_PRESETS[name]
    except KeyError as exc:
        raise ValueError(
            f"Unknown game mode '{name}'. Choose one of: {', '.join(GAME_PRESETS)}."
        ) from exc
