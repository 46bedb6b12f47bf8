"""Rank titles and ending scenarios derived from a session report."""

from __future__ import annotations

from dataclasses import dataclass

from chem_quest.core.models import SessionReport


@dataclass(frozen=True, slots=True)
class Ending:
    """Narrative ending shown after a session."""

    kind: str
    title: str
    subtitle: str
    description: str
    related_concepts: tuple[str, ...]


_RANKS: tuple[tuple[float, str], ...] = (
    (90, "Legendary Chemist"),
    (75, "Elite Specialist"),
    (60, "Skilled Survivor"),
    (40, "Brave Apprentice"),
    (0, "Determined Novice"),
)

_ENDINGS: tuple[tuple[float, Ending], ...] = (
    (
        90,
        Ending(
            kind="perfect",
            title="PHOENIX PROTOCOL: TOTAL SUCCESS",
            subtitle="Rebirth of humanity",
            description=(
                "Your chemistry saved humanity. The water is pure, the air is clean, "
                "and communities flourish in the old toxic deserts."
            ),
            related_concepts=("H2O", "O2", "CO2", "NH3"),
        ),
    ),
    (
        70,
        Ending(
            kind="success",
            title="PHOENIX PROTOCOL: MISSION ACCOMPLISHED",
            subtitle="Survival secured",
            description=(
                "You established safe colonies. Challenges remain, but your expertise "
                "laid solid foundations for rebuilding."
            ),
            related_concepts=("H2O", "NaCl", "O2"),
        ),
    ),
    (
        50,
        Ending(
            kind="partial",
            title="PHOENIX PROTOCOL: CRITICAL SURVIVAL",
            subtitle="Scarce resources",
            description=(
                "You survived, but resources remain dangerously scarce. Much work is "
                "still needed to secure the future."
            ),
            related_concepts=("H2O", "CO2"),
        ),
    ),
    (
        0,
        Ending(
            kind="failure",
            title="PHOENIX PROTOCOL: CRITICAL FAILURE",
            subtitle="Knowledge lost",
            description=(
                "Wrong decisions cost precious lives. But there is always a second chance..."
            ),
            related_concepts=("CO2", "SO2"),
        ),
    ),
)


def correct_percentage(report: SessionReport) -> float:
    if report.total_questions <= 0:
        return 0.0
    return report.correct_count / report.total_questions * 100


def rank_for_report(report: SessionReport) -> str:
    percentage = correct_percentage(report)
    return next(title for threshold, title in _RANKS if percentage >= threshold)


def ending_for_report(report: SessionReport) -> Ending:
    percentage = correct_percentage(report)
    return next(ending for threshold, ending in _ENDINGS if percentage >= threshold)


def final_score(report: SessionReport) -> int:
    return report.correct_count + report.bonus
