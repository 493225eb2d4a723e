"""Color palette for ChallengeWheel supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the control window and overlays."""

    # Text colors
    TEXT_PRIMARY = ThemeColors(
        light="#111827",      # Near black
        dark="#F5F7FF"        # Ghost white
    )

    TEXT_SECONDARY = ThemeColors(
        light="#4B5563",      # Slate
        dark="#9CA3AF"        # Light slate
    )

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFFFF",      # White
        dark="#111827"        # Night blue
    )

    BACKGROUND_SECONDARY = ThemeColors(
        light="#F3F4F6",      # Light gray
        dark="#1F2937"        # Slightly lighter night
    )

    # Accent colors
    ACCENT_PRIMARY = ThemeColors(
        light="#7C3AED",      # Violet
        dark="#A78BFA"        # Lighter violet
    )

    SUPER_HIGHLIGHT = ThemeColors(
        light="#CA8A04",      # Dark gold
        dark="#FACC15"        # Gold
    )

    # Status colors
    SUCCESS = ThemeColors(
        light="#15803D",      # Green
        dark="#4ADE80"        # Light green
    )

    WARNING = ThemeColors(
        light="#D97706",      # Amber
        dark="#FBBF24"        # Light amber
    )

    ERROR = ThemeColors(
        light="#DC2626",      # Red
        dark="#F87171"        # Light red
    )

    # Border colors
    BORDER_PRIMARY = ThemeColors(
        light="#D1D5DB",      # Gray
        dark="#374151"        # Dark gray
    )

    # Button colors
    BUTTON_PRIMARY_BG = ThemeColors(
        light="#7C3AED",      # Violet
        dark="#8B5CF6"        # Lighter violet
    )

    BUTTON_PRIMARY_TEXT = ThemeColors(
        light="#FFFFFF",      # White
        dark="#FFFFFF"        # White
    )

    BUTTON_SECONDARY_BG = ThemeColors(
        light="#F3F4F6",      # Light gray
        dark="#374151"        # Dark gray
    )

    BUTTON_HOVER_BG = ThemeColors(
        light="#E5E7EB",      # Gray
        dark="#4B5563"        # Medium gray
    )

    # Overlay card; always drawn on top of game footage, so one value per theme
    OVERLAY_CARD_BG = ThemeColors(
        light="rgba(11, 17, 32, 220)",
        dark="rgba(11, 17, 32, 220)"
    )
