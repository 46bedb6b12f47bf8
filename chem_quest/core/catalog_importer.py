"""Utilities for loading the question catalog from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    ID: survival-001
    SCENARIO: Critical mission: water purification
    Q: Question text. Additional lines until the next marker are treated as
       part of the question.
    A: First option text
    B: Second option text
    ...            (two to eight options, letters A-H in order)
    CORRECT: A
    EXPLANATION: Shown after the answer is locked in. May continue on the
       following lines.
    DIFFICULTY: easy|medium|hard
    CONCEPTS: H2O, Pb, Cd
    TIMELIMIT: seconds (optional, defaults to DEFAULT_TIME_LIMIT_SECONDS)

Example:

    ID: field-002
    SCENARIO: Rescue signal
    Q: Which reaction releases CO2 fastest?
    A: CaCO3 + HCl
    B: NaHCO3 + CH3COOH
    CORRECT: B
    EXPLANATION: Baking soda and vinegar react instantly.
    DIFFICULTY: easy
    CONCEPTS: CO2, NaHCO3
    TIMELIMIT: 30

Duplicate option text is rejected here with AmbiguousOptionText, so authoring
defects never reach a running session.
"""

from __future__ import annotations

from pathlib import Path
import string

from chem_quest.constants.quiz_constants import (
    DEFAULT_TIME_LIMIT_SECONDS,
    MAX_OPTION_COUNT,
    MIN_OPTION_COUNT,
)
from chem_quest.core.models import Difficulty, Question, ensure_distinct_options


class CatalogImportError(Exception):
    """Raised when a catalog definition cannot be parsed."""


_OPTION_ORDER = list(string.ascii_uppercase[:MAX_OPTION_COUNT])
_MULTILINE_SECTIONS = {"Q", "EXPLANATION"}


def load_catalog_from_file(file_path: Path) -> list[Question]:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_catalog_text(text)
    if not questions:
        raise CatalogImportError(f"Catalog file {file_path} did not contain any questions.")
    return questions


def parse_catalog_text(text: str) -> list[Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped.startswith("#"):
            continue
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line encountered after content - finalize current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [_parse_block(block) for block in blocks if block]


def _parse_block(block: str) -> Question:
    fields: dict[str, str] = {}
    question_lines: list[str] = []
    explanation_lines: list[str] = []
    options: dict[str, str] = {}
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("EXPLANATION:"):
            explanation_lines = [line.split(":", 1)[1].strip()]
            current_section = "EXPLANATION"
            continue

        key, sep, value = line.partition(":")
        if sep and key.upper() in {"ID", "SCENARIO", "CORRECT", "DIFFICULTY", "CONCEPTS", "TIMELIMIT"}:
            fields[key.upper()] = value.strip()
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section == "EXPLANATION":
            explanation_lines.append(line)
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise CatalogImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_id = fields.get("ID", "")
    if not question_id:
        raise CatalogImportError("Question id missing (ID: ...)")

    prompt_text = "\n".join(question_lines).strip()
    if not prompt_text:
        raise CatalogImportError(f"Question text missing for '{question_id}' (Q: ...)")

    option_list = _collect_options(question_id, options)
    correct_index = _parse_correct(question_id, fields.get("CORRECT"), len(option_list))

    return Question(
        id=question_id,
        scenario_label=fields.get("SCENARIO", ""),
        prompt_text=prompt_text,
        options=tuple(option_list),
        correct_option_index=correct_index,
        explanation_text="\n".join(explanation_lines).strip(),
        difficulty=_parse_difficulty(question_id, fields.get("DIFFICULTY")),
        time_limit_seconds=_parse_time_limit(question_id, fields.get("TIMELIMIT")),
        related_concepts=_parse_concepts(fields.get("CONCEPTS", "")),
    )


def _collect_options(question_id: str, options: dict[str, str]) -> list[str]:
    count = len(options)
    if not MIN_OPTION_COUNT <= count <= MAX_OPTION_COUNT:
        raise CatalogImportError(
            f"Question '{question_id}' must define between {MIN_OPTION_COUNT} "
            f"and {MAX_OPTION_COUNT} options."
        )
    expected = _OPTION_ORDER[:count]
    if sorted(options) != expected:
        raise CatalogImportError(
            f"Question '{question_id}' options must use consecutive letters starting at A."
        )

    option_list = [options[letter].strip() for letter in expected]
    if any(not opt for opt in option_list):
        raise CatalogImportError(f"Option text cannot be empty in '{question_id}'.")

    ensure_distinct_options(question_id, option_list)
    return option_list


def _parse_correct(question_id: str, raw_value: str | None, option_count: int) -> int:
    if not raw_value:
        raise CatalogImportError(f"Question '{question_id}' is missing CORRECT.")
    letter = raw_value.upper()
    valid = _OPTION_ORDER[:option_count]
    if letter not in valid:
        raise CatalogImportError(
            f"CORRECT for '{question_id}' must be one of {', '.join(valid)}."
        )
    return valid.index(letter)


def _parse_difficulty(question_id: str, raw_value: str | None) -> Difficulty:
    if not raw_value:
        return Difficulty.MEDIUM
    try:
        return Difficulty(raw_value.lower())
    except ValueError as exc:
        raise CatalogImportError(
            f"DIFFICULTY for '{question_id}' must be easy, medium or hard."
        ) from exc


def _parse_time_limit(question_id: str, raw_value: str | None) -> int:
    if raw_value is None:
        return DEFAULT_TIME_LIMIT_SECONDS
    if not raw_value:
        raise CatalogImportError("TIMELIMIT must include an integer value.")
    try:
        parsed_value = int(raw_value)
    except ValueError as exc:  # pragma: no cover - conversion error details unnecessary
        raise CatalogImportError("TIMELIMIT must be an integer number of seconds.") from exc
    if parsed_value <= 0:
        raise CatalogImportError(f"TIMELIMIT for '{question_id}' must be a positive integer.")
    return parsed_value


def _parse_concepts(raw_value: str) -> frozenset[str]:
    return frozenset(part.strip() for part in raw_value.split(",") if part.strip())
