"""Qt UI components for the ChemQuest game."""

from .dialog_helpers import confirm_abandon_session, show_error, show_info, show_warning
from .main_window import MainWindow
from .qt_scheduler import QtTaskScheduler
from .question_renderer import render_explanation_html, render_question_html

__all__ = [
    "MainWindow",
    "QtTaskScheduler",
    "confirm_abandon_session",
    "show_error",
    "show_info",
    "show_warning",
    "render_explanation_html",
    "render_question_html",
]
