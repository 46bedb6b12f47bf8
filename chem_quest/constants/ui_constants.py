"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "ChemQuest: Survival Protocol"
SNAPSHOT_REFRESH_INTERVAL_MS: int = 250

BUTTON_START: str = "Start Mission"
BUTTON_SKIP_INTRO: str = "Skip Intro"
BUTTON_SETTINGS: str = "Settings"
BUTTON_ABOUT: str = "About ChemQuest"
BUTTON_RESTART: str = "Play Again"
BUTTON_ABANDON: str = "Abandon Mission"

FEEDBACK_CORRECT: str = "Correct!"
FEEDBACK_INCORRECT: str = "Wrong answer."
FEEDBACK_TIMED_OUT: str = "Time is up!"

NOT_ENOUGH_QUESTIONS_TITLE: str = "Not enough questions"
CATALOG_ERROR_TITLE: str = "Catalog error"

MISSION_BRIEFING: str = (
    "Each scenario is a survival decision. Pick the right chemistry before the "
    "countdown hits zero."
)
QUESTION_PROGRESS_TEMPLATE: str = "Question {index} / {total}"
SCORE_TEMPLATE: str = "Correct: {score}"
POINTS_TEMPLATE: str = "Points: {points}"
