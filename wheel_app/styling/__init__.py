"""Styling module for the ChallengeWheel application."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
