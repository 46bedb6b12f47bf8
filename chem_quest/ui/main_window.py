"""Qt main window switching between intro, quiz and ending screens."""

from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from chem_quest.audio.tone_synthesizer import ToneSynthesizer
from chem_quest.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from chem_quest.constants.ui_constants import (
    BUTTON_ABOUT,
    BUTTON_SETTINGS,
    NOT_ENOUGH_QUESTIONS_TITLE,
    WINDOW_TITLE,
)
from chem_quest.core.exceptions import InsufficientQuestions
from chem_quest.core.models import SessionReport
from chem_quest.core.services.question_bank import QuestionBank
from chem_quest.core.services.session_controller import QuizSessionController
from chem_quest.core.services.task_scheduler import TaskScheduler
from chem_quest.core.settings import GameSettings
from chem_quest.styling.styles import Styles
from chem_quest.ui.components.ending_panel import EndingPanel
from chem_quest.ui.components.intro_panel import IntroPanel
from chem_quest.ui.components.quiz_panel import QuizPanel
from chem_quest.ui.dialog_helpers import confirm_abandon_session, show_info, show_warning
from chem_quest.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """High-level UI mode of the game window."""

    INTRO = auto()
    QUIZ = auto()
    ENDING = auto()


class MainWindow(QMainWindow):
    """Main Qt window orchestrating the intro, quiz and ending screens."""

    def __init__(
        self,
        question_bank: QuestionBank,
        scheduler: TaskScheduler,
        synthesizer: ToneSynthesizer,
        settings: GameSettings | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(900, 680)

        self.question_bank = question_bank
        self.scheduler = scheduler
        self.synthesizer = synthesizer
        self._settings = settings or GameSettings()
        self._controller: QuizSessionController | None = None
        self._mode = GameMode.INTRO

        self._ui_font_size: int = 10
        self._game_font_size: int = 14

        self._build_ui()
        self._apply_settings()
        self._apply_styles()
        self.intro_panel.play_intro()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_menu_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.intro_panel = IntroPanel(
            self.scheduler,
            self.synthesizer,
            on_start_mission=self._start_session,
            parent=self,
        )
        self.quiz_panel = QuizPanel(
            self.synthesizer,
            on_abandon=self._handle_abandon,
            parent=self,
        )
        self.ending_panel = EndingPanel(
            self.synthesizer,
            on_restart=self._start_session,
            parent=self,
        )
        self.mode_stack.addWidget(self.intro_panel)
        self.mode_stack.addWidget(self.quiz_panel)
        self.mode_stack.addWidget(self.ending_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(GameMode.INTRO)

    def _build_menu_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.settings_button = QPushButton(BUTTON_SETTINGS, self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        self.about_button = QPushButton(BUTTON_ABOUT, self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: GameMode) -> None:
        self._mode = mode
        index_map = {
            GameMode.INTRO: 0,
            GameMode.QUIZ: 1,
            GameMode.ENDING: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _start_session(self) -> None:
        self._dispose_controller()
        controller = QuizSessionController.from_settings(
            self.question_bank,
            self.scheduler,
            self.synthesizer,
            self._settings,
            on_complete=self._handle_session_complete,
        )
        try:
            controller.start(self._settings.question_count, self._settings.difficulty_filter)
        except InsufficientQuestions as exc:
            show_warning(self, NOT_ENOUGH_QUESTIONS_TITLE, str(exc))
            self.intro_panel.show_start_screen()
            self._set_mode(GameMode.INTRO)
            return

        self._controller = controller
        self.intro_panel.stop()
        self.quiz_panel.attach(controller)
        self._set_mode(GameMode.QUIZ)

    def _handle_session_complete(self, report: SessionReport) -> None:
        self.quiz_panel.detach()
        self.ending_panel.show_report(report)
        self._set_mode(GameMode.ENDING)

    def _handle_abandon(self) -> None:
        if not confirm_abandon_session(self):
            return
        # The run keeps ticking behind the modal dialog and may have ended.
        if self._controller is None or not self._controller.is_active:
            return
        logger.info("Session abandoned by player")
        self._dispose_controller()
        self.intro_panel.show_start_screen()
        self._set_mode(GameMode.INTRO)

    def _dispose_controller(self) -> None:
        self.quiz_panel.detach()
        if self._controller is not None:
            self._controller.dispose()
            self._controller = None

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(self._settings, self, self._game_font_size)
        if dialog.exec():
            try:
                self._settings = dialog.get_settings()
            except ValueError as exc:
                show_warning(self, "Invalid settings", str(exc))
                return
            self._game_font_size = dialog.get_game_font_size()
            self._apply_settings()
            self._apply_styles()
            if self._mode == GameMode.QUIZ:
                show_info(self, "Settings saved", "New settings apply from the next mission.")

    def _apply_settings(self) -> None:
        self.synthesizer.set_enabled(self._settings.audio_enabled)
        self.synthesizer.set_volume(self._settings.audio_master_volume)

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        for button in (self.settings_button, self.about_button):
            button.setStyleSheet(ui_style)

        self.intro_panel.apply_font_size(self._game_font_size)
        self.quiz_panel.apply_font_size(self._game_font_size)
        self.ending_panel.apply_font_size(self._game_font_size)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._dispose_controller()
        self.intro_panel.stop()
        self.synthesizer.dispose()
        super().closeEvent(event)
