"""Component for the end-of-run report and narrative ending."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from chem_quest.audio.cues import CueName
from chem_quest.audio.tone_synthesizer import ToneSynthesizer
from chem_quest.constants.ui_constants import BUTTON_RESTART
from chem_quest.core.models import SessionReport
from chem_quest.core.services.ranking import (
    correct_percentage,
    ending_for_report,
    final_score,
    rank_for_report,
)
from chem_quest.styling.styles import Styles

_CELEBRATION_PERCENTAGE = 70


class EndingPanel(QWidget):
    """Shows the ending scenario, rank and score breakdown of a finished run."""

    def __init__(
        self,
        synthesizer: ToneSynthesizer,
        on_restart: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.synthesizer = synthesizer
        self.on_restart = on_restart
        self._game_font_size: int = 14

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel("", self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setWordWrap(True)
        layout.addWidget(self.title_label)

        self.subtitle_label = QLabel("", self)
        self.subtitle_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.subtitle_label)

        self.description_label = QLabel("", self)
        self.description_label.setAlignment(Qt.AlignCenter)
        self.description_label.setWordWrap(True)
        layout.addWidget(self.description_label)

        self.concepts_label = QLabel("", self)
        self.concepts_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.concepts_label)

        self.stats_group = QGroupBox("Mission Report", self)
        stats_layout = QVBoxLayout()
        self.stats_group.setLayout(stats_layout)
        self.rank_label = QLabel("", self)
        self.correct_label = QLabel("", self)
        self.bonus_label = QLabel("", self)
        self.final_score_label = QLabel("", self)
        for label in (self.rank_label, self.correct_label, self.bonus_label, self.final_score_label):
            stats_layout.addWidget(label)
        layout.addWidget(self.stats_group)

        layout.addStretch()

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.restart_button = QPushButton(BUTTON_RESTART, self)
        self.restart_button.clicked.connect(self._handle_restart)
        button_row.addWidget(self.restart_button)
        button_row.addStretch()
        layout.addLayout(button_row)

        self.apply_font_size(self._game_font_size)

    def show_report(self, report: SessionReport) -> None:
        ending = ending_for_report(report)
        percentage = correct_percentage(report)

        self.title_label.setText(ending.title)
        self.subtitle_label.setText(ending.subtitle)
        self.description_label.setText(ending.description)
        self.concepts_label.setText(" · ".join(ending.related_concepts))

        self.rank_label.setText(f"Rank: {rank_for_report(report)}")
        self.correct_label.setText(
            f"Correct answers: {report.correct_count} / {report.total_questions} ({percentage:.0f}%)"
        )
        self.bonus_label.setText(f"Time bonus: {report.bonus}")
        self.final_score_label.setText(f"Final score: {final_score(report)}")

        if percentage >= _CELEBRATION_PERCENTAGE:
            self.synthesizer.play(CueName.CORRECT)
        self.synthesizer.play(CueName.AMBIENT)
        if ending.kind == "perfect":
            self.synthesizer.play(CueName.BOND_FORMED)

    def _handle_restart(self) -> None:
        self.synthesizer.resume()
        self.synthesizer.play(CueName.CLICK)
        self.on_restart()

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        self.title_label.setStyleSheet(Styles.get_headline_style(font_size + 8))
        self.subtitle_label.setStyleSheet(Styles.get_muted_label_style(font_size + 2))
        self.description_label.setStyleSheet(f"font-size: {font_size}pt;")
        self.concepts_label.setStyleSheet(Styles.get_muted_label_style(font_size))
        stat_style = f"font-size: {font_size}pt;"
        for label in (self.rank_label, self.correct_label, self.bonus_label):
            label.setStyleSheet(stat_style)
        self.final_score_label.setStyleSheet(stat_style + " font-weight: bold;")
        self.stats_group.setStyleSheet(f"font-size: {font_size}pt; font-weight: bold;")
        self.restart_button.setStyleSheet(stat_style)
