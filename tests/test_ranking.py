from __future__ import annotations

import pytest

from chem_quest.core.models import SessionReport
from chem_quest.core.services.ranking import (
    correct_percentage,
    ending_for_report,
    final_score,
    rank_for_report,
)


@pytest.mark.parametrize(
    "correct, total, rank",
    [
        (10, 10, "Legendary Chemist"),
        (9, 10, "Legendary Chemist"),
        (8, 10, "Elite Specialist"),
        (6, 8, "Elite Specialist"),
        (6, 10, "Skilled Survivor"),
        (4, 10, "Brave Apprentice"),
        (3, 10, "Determined Novice"),
        (0, 4, "Determined Novice"),
    ],
)
def test_rank_thresholds(correct: int, total: int, rank: str) -> None:
    assert rank_for_report(SessionReport(correct, total, 0)) == rank


@pytest.mark.parametrize(
    "correct, total, kind",
    [
        (9, 10, "perfect"),
        (7, 10, "success"),
        (3, 4, "success"),
        (5, 10, "partial"),
        (4, 10, "failure"),
    ],
)
def test_ending_thresholds(correct: int, total: int, kind: str) -> None:
    ending = ending_for_report(SessionReport(correct, total, 0))
    assert ending.kind == kind
    assert ending.title
    assert ending.related_concepts


def test_empty_report_counts_as_zero_percent() -> None:
    report = SessionReport(0, 0, 0)
    assert correct_percentage(report) == 0.0
    assert ending_for_report(report).kind == "failure"


def test_final_score_adds_bonus_to_correct_answers() -> None:
    assert final_score(SessionReport(correct_count=3, total_questions=4, bonus=3)) == 6
