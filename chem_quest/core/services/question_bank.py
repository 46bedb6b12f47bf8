"""Service for managing the static catalog of quiz questions."""

from __future__ import annotations

import logging
from pathlib import Path
import random

from chem_quest.constants.quiz_constants import DEFAULT_CATALOG_FILENAME, MIN_OPTION_COUNT
from chem_quest.core.catalog_importer import load_catalog_from_file
from chem_quest.core.exceptions import InsufficientQuestions
from chem_quest.core.models import Difficulty, Question, ensure_distinct_options

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / "data" / DEFAULT_CATALOG_FILENAME


class QuestionBank:
    """Read-only catalog of questions keyed by their stable id."""

    def __init__(self, questions: list[Question]) -> None:
        if not questions:
            raise ValueError("Catalog must contain at least one question.")

        self._questions: list[Question] = []
        self._by_id: dict[str, Question] = {}
        for question in questions:
            validated = self._validate_question(question)
            if validated.id in self._by_id:
                raise ValueError(f"Duplicate question id '{validated.id}'.")
            self._questions.append(validated)
            self._by_id[validated.id] = validated

    @classmethod
    def from_file(cls, file_path: Path) -> QuestionBank:
        questions = load_catalog_from_file(file_path)
        logger.info("Loaded %d question(s) from %s", len(questions), file_path)
        return cls(questions)

    @classmethod
    def from_default_catalog(cls) -> QuestionBank:
        return cls.from_file(DEFAULT_CATALOG_PATH)

    def get_questions(self) -> list[Question]:
        """Return a copy of all catalog questions in catalog order."""
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question_by_id(self, question_id: str) -> Question | None:
        return self._by_id.get(question_id)

    def get_questions_by_difficulty(self, difficulty: Difficulty | None = None) -> list[Question]:
        if difficulty is None:
            return self.get_questions()
        return [q for q in self._questions if q.difficulty == difficulty]

    def draw_random(
        self,
        count: int,
        difficulty: Difficulty | None = None,
        rng: random.Random | None = None,
    ) -> list[Question]:
        """Pick ``count`` distinct questions uniformly, in catalog order.

        Presentation order is the Shuffler's job; this only selects the subset.
        """
        if count < 1:
            raise ValueError("Question count must be at least 1.")
        pool = self.get_questions_by_difficulty(difficulty)
        if count > len(pool):
            raise InsufficientQuestions(count, len(pool))
        rng = rng or random.Random()
        chosen = set(rng.sample(range(len(pool)), count))
        return [q for idx, q in enumerate(pool) if idx in chosen]

    @staticmethod
    def _validate_question(question: Question) -> Question:
        if not question.id.strip():
            raise ValueError("Question id must not be empty.")
        if not question.prompt_text.strip():
            raise ValueError(f"Question text must not be empty ('{question.id}').")
        if len(question.options) < MIN_OPTION_COUNT:
            raise ValueError(
                f"Question '{question.id}' needs at least {MIN_OPTION_COUNT} options."
            )
        if not 0 <= question.correct_option_index < len(question.options):
            raise ValueError(
                f"Correct option index for '{question.id}' must be between 0 and "
                f"{len(question.options) - 1}."
            )
        if question.time_limit_seconds <= 0:
            raise ValueError(f"Time limit for '{question.id}' must be a positive integer.")
        ensure_distinct_options(question.id, question.options)
        return question
