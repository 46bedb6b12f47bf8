"""Presentation-order shuffling for questions and their options.

All functions take an explicit ``random.Random`` so a seeded source gives
reproducible sessions. Inputs are never mutated.
"""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

from chem_quest.core.models import Question, ShuffledQuestion, ensure_distinct_options

T = TypeVar("T")


def _fisher_yates(items: Sequence[T], rng: random.Random) -> list[T]:
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def shuffle_question_order(questions: Sequence[T], rng: random.Random) -> list[T]:
    """Return a uniformly random permutation of ``questions``."""
    return _fisher_yates(questions, rng)


def shuffle_options(question: Question, rng: random.Random) -> ShuffledQuestion:
    """Permute a question's options and re-locate the correct one by its text."""
    ensure_distinct_options(question.id, question.options)
    correct_text = question.options[question.correct_option_index]
    options = tuple(_fisher_yates(question.options, rng))
    return ShuffledQuestion(
        source=question,
        options=options,
        correct_option_index=options.index(correct_text),
    )


def shuffle_questions(questions: Sequence[Question], rng: random.Random) -> list[ShuffledQuestion]:
    """Shuffle question order, then each question's options."""
    return [shuffle_options(question, rng) for question in shuffle_question_order(questions, rng)]
