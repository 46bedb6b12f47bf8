"""Static metadata describing ChemQuest."""

APP_NAME = "ChemQuest"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "ChemQuest is a survival-themed chemistry quiz built with Qt. "
    "Answer each scenario before the countdown runs out; every cue you hear is "
    "synthesized on the fly, no sound files required."
)

INTRO_SLIDES: tuple[str, ...] = (
    "Year 2087...",
    "The world was devastated by chemical wars...",
    "You are one of the last survivors.",
    "Use your knowledge of CHEMISTRY to survive!",
)
