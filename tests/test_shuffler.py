from __future__ import annotations

from collections import Counter
import random

import pytest

from chem_quest.core.exceptions import AmbiguousOptionText
from chem_quest.core.models import ensure_distinct_options
from chem_quest.core.services.shuffler import shuffle_options, shuffle_question_order, shuffle_questions

from conftest import make_question


def test_correct_option_text_survives_shuffling_for_many_seeds() -> None:
    question = make_question("q1", options=("A1", "B2", "C3", "D4", "E5"), correct_option_index=3)
    for seed in range(200):
        shuffled = shuffle_options(question, random.Random(seed))
        assert shuffled.options[shuffled.correct_option_index] == "D4"
        assert sorted(shuffled.options) == sorted(question.options)
        assert shuffled.source is question


def test_two_option_question_keeps_correct_answer() -> None:
    question = make_question("q2", options=("yes", "no"), correct_option_index=1)
    seen_indices = set()
    for seed in range(50):
        shuffled = shuffle_options(question, random.Random(seed))
        assert shuffled.options[shuffled.correct_option_index] == "no"
        seen_indices.add(shuffled.correct_option_index)
    assert seen_indices == {0, 1}


def test_duplicate_option_text_is_rejected() -> None:
    question = make_question("dup", options=("H2O", "CO2", "H2O"), correct_option_index=0)
    with pytest.raises(AmbiguousOptionText) as excinfo:
        shuffle_options(question, random.Random(0))
    assert excinfo.value.question_id == "dup"
    assert excinfo.value.duplicate == "H2O"


def test_shuffle_does_not_mutate_input() -> None:
    questions = [make_question(f"q{idx}") for idx in range(5)]
    original_ids = [q.id for q in questions]
    shuffle_question_order(questions, random.Random(7))
    assert [q.id for q in questions] == original_ids


def test_question_order_is_a_permutation() -> None:
    questions = [make_question(f"q{idx}") for idx in range(8)]
    shuffled = shuffle_questions(questions, random.Random(3))
    assert sorted(q.id for q in shuffled) == sorted(q.id for q in questions)


def test_same_seed_gives_same_session() -> None:
    questions = [make_question(f"q{idx}", correct_option_index=idx % 4) for idx in range(6)]
    first = shuffle_questions(questions, random.Random(99))
    second = shuffle_questions(questions, random.Random(99))
    assert [(q.id, q.options) for q in first] == [(q.id, q.options) for q in second]


def test_correct_position_is_roughly_uniform() -> None:
    question = make_question("q", correct_option_index=0)
    rng = random.Random(2024)
    counts = Counter(shuffle_options(question, rng).correct_option_index for _ in range(4000))
    assert set(counts) == {0, 1, 2, 3}
    for position in range(4):
        assert 800 < counts[position] < 1200


def test_distinct_option_check_reports_the_first_repeat() -> None:
    ensure_distinct_options("ok", ("a", "b", "c"))
    with pytest.raises(AmbiguousOptionText) as excinfo:
        ensure_distinct_options("dup", ["x", "y", "y", "x"])
    assert excinfo.value.question_id == "dup"
    assert excinfo.value.duplicate == "y"
