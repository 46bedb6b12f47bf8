"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.TERMINAL) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Consolas', 'DejaVu Sans Mono', monospace;
                font-size: 14px;
            }}
            QLabel {{
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QSpinBox, QComboBox {{
                background-color: {ColorPalette.BACKGROUND_PANEL.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QProgressBar {{
                background-color: {ColorPalette.BACKGROUND_PANEL.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                max-height: 10px;
            }}
            QProgressBar::chunk {{
                background-color: {ColorPalette.ACCENT.get(theme)};
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_headline_style(font_size: int, theme: Theme = Theme.TERMINAL) -> str:
        return (
            f"font-size: {font_size}pt; font-weight: bold; "
            f"color: {ColorPalette.HEADLINE.get(theme)};"
        )

    @staticmethod
    def get_muted_label_style(font_size: int, theme: Theme = Theme.TERMINAL) -> str:
        return f"font-size: {font_size}pt; color: {ColorPalette.TEXT_MUTED.get(theme)};"

    @staticmethod
    def get_option_button_style(
        font_size: int, outcome: str | None = None, theme: Theme = Theme.TERMINAL
    ) -> str:
        """Style for an answer button; ``outcome`` is ``"correct"``, ``"wrong"`` or None."""
        base = f"font-size: {font_size}pt; text-align: left; padding: 10px 14px;"
        if outcome == "correct":
            color = ColorPalette.SUCCESS.get(theme)
        elif outcome == "wrong":
            color = ColorPalette.ERROR.get(theme)
        else:
            return base
        return base + f" border: 2px solid {color}; color: {color};"

    @staticmethod
    def get_feedback_style(font_size: int, correct: bool, theme: Theme = Theme.TERMINAL) -> str:
        color = ColorPalette.SUCCESS.get(theme) if correct else ColorPalette.ERROR.get(theme)
        return f"font-size: {font_size}pt; font-weight: bold; color: {color};"

    @staticmethod
    def get_timer_label_style(
        font_size: int, emphasized: bool, blink_state: bool = False, theme: Theme = Theme.TERMINAL
    ) -> str:
        base = f"padding: 2px 6px; border-radius: 4px; font-size: {font_size}pt;"
        if not emphasized:
            return base
        palette_entry = ColorPalette.WARNING_BLINK_ON if blink_state else ColorPalette.WARNING_BLINK_OFF
        return base + f" color: #fff; background-color: {palette_entry.get(theme)};"
