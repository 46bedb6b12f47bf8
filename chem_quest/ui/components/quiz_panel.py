"""Component for playing through a quiz session."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chem_quest.audio.cues import CueName
from chem_quest.audio.tone_synthesizer import ToneSynthesizer
from chem_quest.constants.quiz_constants import TIME_LIMIT_WARNING_WINDOW_SECONDS
from chem_quest.constants.ui_constants import (
    BUTTON_ABANDON,
    FEEDBACK_CORRECT,
    FEEDBACK_INCORRECT,
    FEEDBACK_TIMED_OUT,
    POINTS_TEMPLATE,
    QUESTION_PROGRESS_TEMPLATE,
    SCORE_TEMPLATE,
    SNAPSHOT_REFRESH_INTERVAL_MS,
)
from chem_quest.core.exceptions import QuizError
from chem_quest.core.models import AnsweredState, SessionSnapshot, SessionState, ShuffledQuestion
from chem_quest.core.services.scoring import PointsWithBonus
from chem_quest.core.services.session_controller import QuizSessionController
from chem_quest.ui.question_renderer import (
    concepts_label,
    option_label,
    render_explanation_html,
    render_question_html,
)
from chem_quest.styling.styles import Styles

logger = logging.getLogger(__name__)


class _OptionButton(QPushButton):
    """Answer button that reports pointer hover for the hover cue."""

    def __init__(self, text: str, on_hover: callable, parent: QWidget | None = None) -> None:
        super().__init__(text, parent)
        self._on_hover = on_hover

    def enterEvent(self, event) -> None:
        if self.isEnabled():
            self._on_hover()
        super().enterEvent(event)


class QuizPanel(QWidget):
    """Renders controller snapshots and forwards answers to the controller.

    The panel owns no quiz state; it polls ``snapshot()`` on a refresh timer
    and rebuilds widgets whenever the displayed question changes.
    """

    def __init__(
        self,
        synthesizer: ToneSynthesizer,
        on_abandon: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.synthesizer = synthesizer
        self.on_abandon = on_abandon
        self.controller: QuizSessionController | None = None

        self._game_font_size: int = 14
        self._displayed_question: ShuffledQuestion | None = None
        self._displayed_answered_state: AnsweredState | None = None
        self._question_time_limit: int = 1
        self._timed_question: ShuffledQuestion | None = None
        self.option_buttons: list[_OptionButton] = []

        self._build_ui()
        self._configure_refresh_timer()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Header: progress, difficulty, score
        header_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        header_row.addWidget(self.progress_label)
        self.difficulty_label = QLabel("", self)
        header_row.addWidget(self.difficulty_label)
        header_row.addStretch()
        self.score_label = QLabel("", self)
        header_row.addWidget(self.score_label)
        layout.addLayout(header_row)

        # Timer row
        timer_row = QHBoxLayout()
        self.time_limit_label = QLabel("", self)
        timer_row.addWidget(self.time_limit_label)

        self.time_limit_progress = QProgressBar(self)
        self.time_limit_progress.setRange(0, 1000)
        self.time_limit_progress.setValue(0)
        self.time_limit_progress.setTextVisible(False)
        timer_row.addWidget(self.time_limit_progress, stretch=1)
        layout.addLayout(timer_row)

        # Question
        self.question_label = QLabel("", self)
        self.question_label.setTextFormat(Qt.RichText)
        self.question_label.setWordWrap(True)
        layout.addWidget(self.question_label)

        self.concepts_label = QLabel("", self)
        self.concepts_label.setWordWrap(True)
        layout.addWidget(self.concepts_label)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)

        # Feedback
        self.feedback_label = QLabel("", self)
        self.feedback_label.setAlignment(Qt.AlignCenter)
        self.feedback_label.setVisible(False)
        layout.addWidget(self.feedback_label)

        self.explanation_label = QLabel("", self)
        self.explanation_label.setTextFormat(Qt.RichText)
        self.explanation_label.setWordWrap(True)
        self.explanation_label.setVisible(False)
        layout.addWidget(self.explanation_label)

        layout.addStretch()

        bottom_row = QHBoxLayout()
        bottom_row.addStretch()
        self.abandon_button = QPushButton(BUTTON_ABANDON, self)
        self.abandon_button.clicked.connect(self._handle_abandon)
        bottom_row.addWidget(self.abandon_button)
        layout.addLayout(bottom_row)

        self.apply_font_size(self._game_font_size)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(SNAPSHOT_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self.refresh)

    def attach(self, controller: QuizSessionController) -> None:
        """Start rendering ``controller``; it must already be started."""
        self.controller = controller
        self._displayed_question = None
        self._displayed_answered_state = None
        self.refresh()
        self.refresh_timer.start()

    def detach(self) -> None:
        self.refresh_timer.stop()
        self.controller = None
        self._displayed_question = None
        self._clear_option_buttons()

    def refresh(self) -> None:
        if self.controller is None:
            return
        snapshot = self.controller.snapshot()
        if snapshot.state in (SessionState.COMPLETE, SessionState.DISPOSED):
            self.refresh_timer.stop()
            return
        question = snapshot.current_question
        if question is None:
            return

        if question is not self._displayed_question:
            self._display_question(snapshot, question)
        if snapshot.answered_state is not self._displayed_answered_state:
            self._display_answer_state(snapshot, question)

        self._update_header(snapshot)
        self._update_time_limit_indicator(snapshot)

    def _display_question(self, snapshot: SessionSnapshot, question: ShuffledQuestion) -> None:
        self._displayed_question = question
        self._displayed_answered_state = None
        if question is not self._timed_question:
            self._timed_question = question
            self._question_time_limit = max(1, snapshot.time_remaining)

        self.question_label.setText(render_question_html(question, self._game_font_size))
        self.concepts_label.setText(concepts_label(question))
        self.concepts_label.setVisible(bool(question.related_concepts))
        self.feedback_label.setVisible(False)
        self.explanation_label.setVisible(False)

        self._clear_option_buttons()
        for idx, text in enumerate(question.options):
            button = _OptionButton(option_label(idx, text), self._handle_hover, self)
            button.setStyleSheet(Styles.get_option_button_style(self._game_font_size))
            button.clicked.connect(lambda _checked=False, i=idx: self._handle_option_clicked(i))
            self.options_layout.addWidget(button)
            self.option_buttons.append(button)

    def _display_answer_state(self, snapshot: SessionSnapshot, question: ShuffledQuestion) -> None:
        self._displayed_answered_state = snapshot.answered_state
        if snapshot.answered_state is AnsweredState.UNANSWERED:
            return

        for idx, button in enumerate(self.option_buttons):
            button.setEnabled(False)
            outcome = None
            if idx == question.correct_option_index:
                outcome = "correct"
            elif idx == snapshot.selected_option_index:
                outcome = "wrong"
            button.setStyleSheet(Styles.get_option_button_style(self._game_font_size, outcome))

        correct = snapshot.answered_state is AnsweredState.ANSWERED_CORRECT
        if snapshot.answered_state is AnsweredState.TIMED_OUT:
            message = FEEDBACK_TIMED_OUT
        else:
            message = FEEDBACK_CORRECT if correct else FEEDBACK_INCORRECT
        self.feedback_label.setText(message)
        self.feedback_label.setStyleSheet(Styles.get_feedback_style(self._game_font_size + 4, correct))
        self.feedback_label.setVisible(True)

        self.explanation_label.setText(render_explanation_html(question, self._game_font_size))
        self.explanation_label.setVisible(True)

    def _update_header(self, snapshot: SessionSnapshot) -> None:
        self.progress_label.setText(
            QUESTION_PROGRESS_TEMPLATE.format(index=snapshot.current_index + 1, total=snapshot.total)
        )
        question = snapshot.current_question
        self.difficulty_label.setText(f"[{question.difficulty.value.upper()}]" if question else "")
        score_text = SCORE_TEMPLATE.format(score=snapshot.score)
        if self.controller is not None and isinstance(self.controller.scoring_variant, PointsWithBonus):
            score_text += "  " + POINTS_TEMPLATE.format(points=snapshot.points)
        self.score_label.setText(score_text)

    def _update_time_limit_indicator(self, snapshot: SessionSnapshot) -> None:
        remaining = snapshot.time_remaining
        fraction = max(0.0, min(1.0, remaining / self._question_time_limit))
        self.time_limit_progress.setValue(int(fraction * 1000))

        if snapshot.state is not SessionState.AWAITING_ANSWER:
            self.time_limit_label.setText(f"{remaining}s left")
            self._set_time_limit_label_emphasis(enabled=False)
            return
        if remaining > 0:
            self.time_limit_label.setText(f"{remaining}s remaining")
        else:
            self.time_limit_label.setText("Time limit reached")
        in_window = 0 < remaining <= min(TIME_LIMIT_WARNING_WINDOW_SECONDS, self._question_time_limit)
        self._set_time_limit_label_emphasis(enabled=in_window, blink_state=(remaining % 2 == 0))

    def _set_time_limit_label_emphasis(self, enabled: bool, blink_state: bool = False) -> None:
        self.time_limit_label.setStyleSheet(
            Styles.get_timer_label_style(self._game_font_size, enabled, blink_state)
        )

    def _handle_option_clicked(self, option_index: int) -> None:
        if self.controller is None:
            return
        self.synthesizer.resume()
        self.synthesizer.play(CueName.CLICK)
        try:
            self.controller.submit_answer(option_index)
        except QuizError as exc:
            logger.debug("Answer ignored: %s", exc)
            return
        self.refresh()

    def _handle_hover(self) -> None:
        self.synthesizer.play(CueName.HOVER)

    def _handle_abandon(self) -> None:
        self.synthesizer.resume()
        self.synthesizer.play(CueName.CLICK)
        self.on_abandon()

    def _clear_option_buttons(self) -> None:
        while self.options_layout.count():
            item = self.options_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.option_buttons = []

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size

        game_label_style = f"font-size: {font_size}pt;"
        self.progress_label.setStyleSheet(game_label_style + " font-weight: bold;")
        self.difficulty_label.setStyleSheet(Styles.get_muted_label_style(font_size))
        self.score_label.setStyleSheet(game_label_style)
        self.concepts_label.setStyleSheet(Styles.get_muted_label_style(max(8, font_size - 2)))
        self.abandon_button.setStyleSheet(game_label_style)
        self._set_time_limit_label_emphasis(enabled=False)

        # Re-render the current question at the new size
        self._displayed_question = None
        self._displayed_answered_state = None
        self.refresh()
