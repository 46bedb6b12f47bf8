"""Quiz-related constants shared across UI and core layers."""

DEFAULT_TIME_LIMIT_SECONDS: int = 30
DEFAULT_QUESTION_COUNT: int = 6
MIN_QUESTION_COUNT: int = 1
MAX_QUESTION_COUNT: int = 8
MIN_OPTION_COUNT: int = 2
MAX_OPTION_COUNT: int = 8

COUNTDOWN_TICK_SECONDS: float = 1.0
DEFAULT_FEEDBACK_SECONDS: float = 3.0
TIME_LIMIT_WARNING_WINDOW_SECONDS: int = 10

# Count-based scoring
DEFAULT_PER_QUESTION_BUDGET_SECONDS: int = 60
DEFAULT_NORMALIZATION_FACTOR: int = 10

# Points-with-bonus scoring
DEFAULT_BASE_POINTS: int = 100
DEFAULT_PER_SECOND_WEIGHT: int = 10

INTRO_SLIDE_SECONDS: float = 3.0

DEFAULT_CATALOG_FILENAME: str = "survival_catalog.txt"
