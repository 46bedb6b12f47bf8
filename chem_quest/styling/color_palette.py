"""Color palette for ChemQuest: a classic light look and a survival terminal look."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    CLASSIC = auto()
    TERMINAL = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    classic: str
    terminal: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.classic if theme == Theme.CLASSIC else self.terminal


class ColorPalette:
    """Centralized color definitions for the application."""

    # Text colors
    TEXT_PRIMARY = ThemeColors(
        classic="#1F2933",
        terminal="#D7FBE8"    # Pale phosphor
    )

    TEXT_MUTED = ThemeColors(
        classic="#616E7C",
        terminal="#7FA99B"
    )

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(
        classic="#FFFFFF",
        terminal="#0B1215"    # Near black
    )

    BACKGROUND_PANEL = ThemeColors(
        classic="#F5F7FA",
        terminal="#13201F"
    )

    # Accents
    ACCENT = ThemeColors(
        classic="#0B69A3",
        terminal="#22D3EE"    # Cyan
    )

    HEADLINE = ThemeColors(
        classic="#B44D12",
        terminal="#FBBF24"    # Hazard amber
    )

    # Answer feedback
    SUCCESS = ThemeColors(
        classic="#107C10",
        terminal="#34D399"
    )

    ERROR = ThemeColors(
        classic="#D13438",
        terminal="#F87171"
    )

    WARNING_BLINK_ON = ThemeColors(
        classic="#B91C1C",
        terminal="#B91C1C"
    )

    WARNING_BLINK_OFF = ThemeColors(
        classic="#EF4444",
        terminal="#EF4444"
    )

    # Borders and buttons
    BORDER = ThemeColors(
        classic="#CBD2D9",
        terminal="#1F4D46"
    )

    BUTTON_BG = ThemeColors(
        classic="#F5F7FA",
        terminal="#10302C"
    )

    BUTTON_HOVER_BG = ThemeColors(
        classic="#E4E7EB",
        terminal="#18453F"
    )
