"""Exceptions raised by the quiz session engine."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz engine errors."""


class InsufficientQuestions(QuizError):
    """The catalog (after filtering) cannot supply the requested question count."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Requested {requested} question(s) but only {available} available."
        )
        self.requested = requested
        self.available = available


class InvalidAnswerIndex(QuizError):
    """An option index outside the rendered option range was submitted."""

    def __init__(self, option_index: int, option_count: int) -> None:
        super().__init__(
            f"Option index {option_index} is outside the range [0, {option_count})."
        )
        self.option_index = option_index
        self.option_count = option_count


class AmbiguousOptionText(QuizError):
    """A question has two or more options with identical text."""

    def __init__(self, question_id: str, duplicate: str) -> None:
        super().__init__(
            f"Question '{question_id}' has duplicate option text: '{duplicate}'."
        )
        self.question_id = question_id
        self.duplicate = duplicate


class InvalidSessionState(QuizError):
    """An operation was invoked in a state that does not allow it."""
