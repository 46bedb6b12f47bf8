"""Application entry point for ChemQuest."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from chem_quest.audio.qt_audio_output import QtAudioOutput
from chem_quest.audio.tone_synthesizer import ToneSynthesizer
from chem_quest.constants.audio_constants import SAMPLE_RATE
from chem_quest.constants.ui_constants import CATALOG_ERROR_TITLE
from chem_quest.core.catalog_importer import CatalogImportError
from chem_quest.core.exceptions import QuizError
from chem_quest.core.services.question_bank import QuestionBank
from chem_quest.core.settings import GameSettings
from chem_quest.ui.dialog_helpers import show_error
from chem_quest.ui.main_window import MainWindow
from chem_quest.ui.qt_scheduler import QtTaskScheduler
from chem_quest.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, load the catalog, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting ChemQuest…")

    app = QApplication(sys.argv)

    try:
        question_bank = QuestionBank.from_default_catalog()
    except (OSError, CatalogImportError, QuizError, ValueError) as exc:
        logger.error("Could not load the question catalog: %s", exc)
        show_error(None, CATALOG_ERROR_TITLE, str(exc))
        sys.exit(1)

    settings = GameSettings()
    try:
        audio_output = QtAudioOutput(SAMPLE_RATE)
    except RuntimeError as exc:
        logger.warning("Audio disabled: %s", exc)
        audio_output = None
    synthesizer = ToneSynthesizer.create(
        audio_output,
        master_volume=settings.audio_master_volume,
        enabled=settings.audio_enabled,
    )

    scheduler = QtTaskScheduler(app)
    window = MainWindow(question_bank, scheduler, synthesizer, settings)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
