from __future__ import annotations

import random

import numpy as np
import pytest

from chem_quest.audio.cues import CueName
from chem_quest.core.models import Difficulty, Question
from chem_quest.core.services.question_bank import QuestionBank
from chem_quest.core.services.task_scheduler import ManualTaskScheduler


class RecordingSynthesizer:
    """Stands in for ``ToneSynthesizer`` and records every cue request."""

    def __init__(self) -> None:
        self.cues: list[CueName] = []
        self.resumed = 0

    def play(self, cue: CueName) -> None:
        self.cues.append(cue)

    def resume(self) -> None:
        self.resumed += 1


class RecordingOutput:
    """Audio output that keeps the buffers it is asked to play."""

    def __init__(self, suspended: bool = False) -> None:
        self.suspended = suspended
        self.played: list[tuple[np.ndarray, int]] = []
        self.closed = False

    def resume(self) -> None:
        self.suspended = False

    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        self.played.append((samples, sample_rate))

    def close(self) -> None:
        self.closed = True


def make_question(
    question_id: str,
    options: tuple[str, ...] = ("H2O", "CO2", "NaCl", "O2"),
    correct_option_index: int = 0,
    difficulty: Difficulty = Difficulty.MEDIUM,
    time_limit_seconds: int = 30,
) -> Question:
    return Question(
        id=question_id,
        scenario_label=f"Scenario {question_id}",
        prompt_text=f"Prompt for {question_id}?",
        options=options,
        correct_option_index=correct_option_index,
        explanation_text=f"Because of {options[correct_option_index]}.",
        difficulty=difficulty,
        time_limit_seconds=time_limit_seconds,
        related_concepts=frozenset({"H2O"}),
    )


@pytest.fixture
def questions() -> list[Question]:
    difficulties = [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]
    return [
        make_question(f"q{idx}", correct_option_index=idx % 4, difficulty=difficulties[idx % 3])
        for idx in range(6)
    ]


@pytest.fixture
def bank(questions: list[Question]) -> QuestionBank:
    return QuestionBank(questions)


@pytest.fixture
def scheduler() -> ManualTaskScheduler:
    return ManualTaskScheduler(start_time=1_700_000_000.0)


@pytest.fixture
def synthesizer() -> RecordingSynthesizer:
    return RecordingSynthesizer()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
