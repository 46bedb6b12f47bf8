"""Question rendering utilities for the quiz panel."""

from __future__ import annotations

from html import escape

from chem_quest.core.markdown_renderer import renderer
from chem_quest.core.models import ShuffledQuestion


def render_question_html(question: ShuffledQuestion, font_size: int = 14) -> str:
    """Render the scenario headline and prompt of a question as HTML.

    Args:
        question: The shuffled question currently on screen
        font_size: Font size in points for the prompt text (default 14)

    Returns:
        HTML string ready for a rich-text QLabel
    """
    headline = ""
    if question.scenario_label:
        headline = (
            f'<p style="font-size: {font_size + 2}pt; font-weight: bold;">'
            f"{escape(question.scenario_label.upper())}</p>"
        )
    return headline + renderer.render_block(question.prompt_text, font_size)


def render_explanation_html(question: ShuffledQuestion, font_size: int = 12) -> str:
    correct_letter = chr(ord("A") + question.correct_option_index)
    correct_text = escape(question.options[question.correct_option_index])
    answer_line = f"<p><b>Correct answer: {correct_letter}. {correct_text}</b></p>"
    return answer_line + renderer.render_block(question.explanation_text, font_size)


def option_label(index: int, option_text: str) -> str:
    return f"{chr(ord('A') + index)}. {option_text}"


def concepts_label(question: ShuffledQuestion) -> str:
    if not question.related_concepts:
        return ""
    return "Molecules: " + " · ".join(sorted(question.related_concepts))
