"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.DARK) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QLabel {{
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QPushButton#primaryButton {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                font-weight: bold;
            }}
            QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QListWidget, QTableWidget, QTextBrowser {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
            }}
            QListWidget::item:selected, QTableWidget::item:selected {{
                background-color: {ColorPalette.ACCENT_PRIMARY.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
            QTabBar::tab {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                padding: 6px 14px;
            }}
            QTabBar::tab:selected {{
                background-color: {ColorPalette.ACCENT_PRIMARY.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_timer_label_style(warning: bool, theme: Theme = Theme.DARK) -> str:
        color = ColorPalette.ERROR if warning else ColorPalette.TEXT_PRIMARY
        return f"font-size: 28pt; font-weight: bold; color: {color.get(theme)};"

    @staticmethod
    def get_super_badge_style(theme: Theme = Theme.DARK) -> str:
        return (
            f"color: {ColorPalette.SUPER_HIGHLIGHT.get(theme)}; "
            "font-weight: 800; letter-spacing: 2px;"
        )

    @staticmethod
    def get_result_style(success: bool, theme: Theme = Theme.DARK) -> str:
        color = ColorPalette.SUCCESS if success else ColorPalette.ERROR
        return f"font-size: 26pt; font-weight: 800; color: {color.get(theme)};"

    @staticmethod
    def get_overlay_card_style(theme: Theme = Theme.DARK) -> str:
        return f"""
            QFrame#overlayCard {{
                background-color: {ColorPalette.OVERLAY_CARD_BG.get(theme)};
                border-radius: 16px;
            }}
            QLabel {{
                color: {ColorPalette.TEXT_PRIMARY.get(Theme.DARK)};
                background: transparent;
            }}
        """
