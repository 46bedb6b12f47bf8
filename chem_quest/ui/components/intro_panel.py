"""Component for the intro cutscene and mission start screen."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from chem_quest.audio.cues import CueName
from chem_quest.audio.tone_synthesizer import ToneSynthesizer
from chem_quest.constants.about import INTRO_SLIDES
from chem_quest.constants.ui_constants import BUTTON_SKIP_INTRO, BUTTON_START, MISSION_BRIEFING
from chem_quest.core.services.cutscene_player import CutscenePlayer
from chem_quest.core.services.task_scheduler import TaskScheduler
from chem_quest.styling.styles import Styles


class IntroPanel(QWidget):
    """Plays the intro slides, then offers the mission start button."""

    def __init__(
        self,
        scheduler: TaskScheduler,
        synthesizer: ToneSynthesizer,
        on_start_mission: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.scheduler = scheduler
        self.synthesizer = synthesizer
        self.on_start_mission = on_start_mission

        self._game_font_size: int = 14
        self._player: CutscenePlayer | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        self.slide_label = QLabel("", self)
        self.slide_label.setAlignment(Qt.AlignCenter)
        self.slide_label.setWordWrap(True)
        layout.addWidget(self.slide_label)

        self.briefing_label = QLabel(MISSION_BRIEFING, self)
        self.briefing_label.setAlignment(Qt.AlignCenter)
        self.briefing_label.setWordWrap(True)
        self.briefing_label.setVisible(False)
        layout.addWidget(self.briefing_label)

        layout.addStretch()

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.skip_button = QPushButton(BUTTON_SKIP_INTRO, self)
        self.skip_button.clicked.connect(self._handle_skip)
        button_row.addWidget(self.skip_button)

        self.start_button = QPushButton(BUTTON_START, self)
        self.start_button.clicked.connect(self._handle_start)
        self.start_button.setVisible(False)
        button_row.addWidget(self.start_button)

        button_row.addStretch()
        layout.addLayout(button_row)

        self.apply_font_size(self._game_font_size)

    def play_intro(self) -> None:
        self.stop()
        self.skip_button.setVisible(True)
        self.start_button.setVisible(False)
        self.briefing_label.setVisible(False)
        self._player = CutscenePlayer(
            INTRO_SLIDES,
            self.scheduler,
            on_slide=self._handle_slide,
            on_finished=self._handle_intro_finished,
        )
        self._player.play()

    def show_start_screen(self) -> None:
        """Skip straight to the start button, e.g. after a finished run."""
        self.stop()
        self._handle_intro_finished()

    def stop(self) -> None:
        if self._player is not None:
            self._player.dispose()
            self._player = None

    def _handle_slide(self, index: int, text: str) -> None:
        self.slide_label.setText(text)
        if index > 0:
            self.synthesizer.play(CueName.TRANSITION)

    def _handle_skip(self) -> None:
        self.synthesizer.resume()
        self.synthesizer.play(CueName.TRANSITION)
        if self._player is not None:
            self._player.skip()

    def _handle_intro_finished(self) -> None:
        self.slide_label.setText(INTRO_SLIDES[-1])
        self.skip_button.setVisible(False)
        self.briefing_label.setVisible(True)
        self.start_button.setVisible(True)
        self.start_button.setFocus()

    def _handle_start(self) -> None:
        self.synthesizer.resume()
        self.synthesizer.play(CueName.CLICK)
        self.synthesizer.play(CueName.AMBIENT)
        self.on_start_mission()

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        self.slide_label.setStyleSheet(Styles.get_headline_style(font_size + 8))
        self.briefing_label.setStyleSheet(f"font-size: {font_size}pt;")
        button_style = f"font-size: {font_size}pt;"
        self.skip_button.setStyleSheet(button_style)
        self.start_button.setStyleSheet(button_style)
