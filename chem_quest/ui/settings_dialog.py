"""Settings dialog for configuring a ChemQuest run."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
)

from chem_quest.constants.quiz_constants import (
    DEFAULT_TIME_LIMIT_SECONDS,
    MAX_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
)
from chem_quest.core.models import Difficulty
from chem_quest.core.services.scoring import CountBased, PointsWithBonus, ScoringVariant
from chem_quest.core.settings import GAME_PRESETS, GameSettings

_CUSTOM_MODE = "custom"
_VARIANT_LABELS = ("Count-based + end bonus", "Points + per-answer time bonus")


class SettingsDialog(QDialog):
    """Dialog for configuring game mode, timing, scoring and audio."""

    def __init__(self, settings: GameSettings, parent=None, game_font_size: int = 14) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(420)

        self._settings = settings
        self._game_font_size = game_font_size
        self._updating_from_preset = False

        self._build_ui()
        self._load_settings(settings)

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Game mode group
        mode_group = QGroupBox("Game Mode")
        mode_layout = QVBoxLayout()
        mode_group.setLayout(mode_layout)

        mode_row = QHBoxLayout()
        mode_row.addWidget(QLabel("Preset:"))
        mode_row.addStretch()
        self.mode_combo = QComboBox()
        for name in GAME_PRESETS:
            self.mode_combo.addItem(name.capitalize(), name)
        self.mode_combo.addItem("Custom", _CUSTOM_MODE)
        self.mode_combo.currentIndexChanged.connect(self._handle_mode_changed)
        mode_row.addWidget(self.mode_combo)
        mode_layout.addLayout(mode_row)

        count_row = QHBoxLayout()
        count_row.addWidget(QLabel("Questions per run:"))
        count_row.addStretch()
        self.count_spinbox = QSpinBox()
        self.count_spinbox.setRange(MIN_QUESTION_COUNT, MAX_QUESTION_COUNT)
        self.count_spinbox.valueChanged.connect(self._mark_custom)
        count_row.addWidget(self.count_spinbox)
        mode_layout.addLayout(count_row)

        difficulty_row = QHBoxLayout()
        difficulty_row.addWidget(QLabel("Difficulty:"))
        difficulty_row.addStretch()
        self.difficulty_combo = QComboBox()
        self.difficulty_combo.addItem("Any", None)
        for difficulty in Difficulty:
            self.difficulty_combo.addItem(difficulty.value.capitalize(), difficulty)
        self.difficulty_combo.currentIndexChanged.connect(self._mark_custom)
        difficulty_row.addWidget(self.difficulty_combo)
        mode_layout.addLayout(difficulty_row)

        layout.addWidget(mode_group)

        # Timing and scoring group
        scoring_group = QGroupBox("Timing and Scoring")
        scoring_layout = QVBoxLayout()
        scoring_group.setLayout(scoring_layout)

        self.catalog_time_checkbox = QCheckBox("Use each question's own time limit")
        self.catalog_time_checkbox.toggled.connect(self._handle_catalog_time_toggled)
        scoring_layout.addWidget(self.catalog_time_checkbox)

        time_row = QHBoxLayout()
        time_row.addWidget(QLabel("Fixed time per question:"))
        time_row.addStretch()
        self.time_spinbox = QSpinBox()
        self.time_spinbox.setRange(5, 300)
        self.time_spinbox.setSuffix(" s")
        self.time_spinbox.valueChanged.connect(self._mark_custom)
        time_row.addWidget(self.time_spinbox)
        scoring_layout.addLayout(time_row)

        variant_row = QHBoxLayout()
        variant_row.addWidget(QLabel("Scoring:"))
        variant_row.addStretch()
        self.variant_combo = QComboBox()
        self.variant_combo.addItems(list(_VARIANT_LABELS))
        self.variant_combo.currentIndexChanged.connect(self._mark_custom)
        variant_row.addWidget(self.variant_combo)
        scoring_layout.addLayout(variant_row)

        layout.addWidget(scoring_group)

        # Audio group
        audio_group = QGroupBox("Audio")
        audio_layout = QVBoxLayout()
        audio_group.setLayout(audio_layout)

        self.audio_checkbox = QCheckBox("Enable sound effects")
        audio_layout.addWidget(self.audio_checkbox)

        volume_row = QHBoxLayout()
        volume_row.addWidget(QLabel("Master volume:"))
        self.volume_slider = QSlider(Qt.Horizontal)
        self.volume_slider.setRange(0, 100)
        volume_row.addWidget(self.volume_slider, stretch=1)
        audio_layout.addLayout(volume_row)

        font_row = QHBoxLayout()
        font_row.addWidget(QLabel("Game font size:"))
        font_row.addStretch()
        self.game_font_spinbox = QSpinBox()
        self.game_font_spinbox.setRange(10, 32)
        self.game_font_spinbox.setSuffix(" pt")
        self.game_font_spinbox.setValue(self._game_font_size)
        font_row.addWidget(self.game_font_spinbox)
        audio_layout.addLayout(font_row)

        layout.addWidget(audio_group)

        # Buttons
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def _load_settings(self, settings: GameSettings) -> None:
        self._updating_from_preset = True
        try:
            self.count_spinbox.setValue(settings.question_count)
            difficulty_index = self.difficulty_combo.findData(settings.difficulty_filter)
            self.difficulty_combo.setCurrentIndex(max(0, difficulty_index))
            uses_catalog_time = settings.per_question_seconds is None
            self.catalog_time_checkbox.setChecked(uses_catalog_time)
            self.time_spinbox.setValue(settings.per_question_seconds or DEFAULT_TIME_LIMIT_SECONDS)
            self.time_spinbox.setEnabled(not uses_catalog_time)
            self.variant_combo.setCurrentIndex(
                1 if isinstance(settings.scoring_variant, PointsWithBonus) else 0
            )
            self.audio_checkbox.setChecked(settings.audio_enabled)
            self.volume_slider.setValue(int(round(settings.audio_master_volume * 100)))
            # Audio preferences do not decide which game mode is selected.
            mode_name = next(
                (
                    name
                    for name, candidate in GAME_PRESETS.items()
                    if candidate.with_updates(
                        audio_enabled=settings.audio_enabled,
                        audio_master_volume=settings.audio_master_volume,
                        shuffle_seed=settings.shuffle_seed,
                    )
                    == settings
                ),
                _CUSTOM_MODE,
            )
            self.mode_combo.setCurrentIndex(self.mode_combo.findData(mode_name))
        finally:
            self._updating_from_preset = False

    def _handle_mode_changed(self) -> None:
        if self._updating_from_preset:
            return
        mode_name = self.mode_combo.currentData()
        if mode_name == _CUSTOM_MODE:
            return
        preset_settings = GAME_PRESETS[mode_name].with_updates(
            audio_enabled=self.audio_checkbox.isChecked(),
            audio_master_volume=self.volume_slider.value() / 100,
        )
        self._settings = preset_settings
        self._load_settings(preset_settings)

    def _handle_catalog_time_toggled(self, checked: bool) -> None:
        self.time_spinbox.setEnabled(not checked)
        self._mark_custom()

    def _mark_custom(self) -> None:
        if self._updating_from_preset:
            return
        self._updating_from_preset = True
        self.mode_combo.setCurrentIndex(self.mode_combo.findData(_CUSTOM_MODE))
        self._updating_from_preset = False

    def _selected_variant(self) -> ScoringVariant:
        current = self._settings.scoring_variant
        if self.variant_combo.currentIndex() == 1:
            return current if isinstance(current, PointsWithBonus) else PointsWithBonus()
        return current if isinstance(current, CountBased) else CountBased()

    def get_settings(self) -> GameSettings:
        """Build settings from the dialog state."""
        return self._settings.with_updates(
            question_count=self.count_spinbox.value(),
            difficulty_filter=self.difficulty_combo.currentData(),
            per_question_seconds=(
                None if self.catalog_time_checkbox.isChecked() else self.time_spinbox.value()
            ),
            scoring_variant=self._selected_variant(),
            audio_enabled=self.audio_checkbox.isChecked(),
            audio_master_volume=self.volume_slider.value() / 100,
        )

    def get_game_font_size(self) -> int:
        """Get the selected game font size."""
        return self.game_font_spinbox.value()
