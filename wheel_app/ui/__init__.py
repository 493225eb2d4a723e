"""Qt UI components for the ChallengeWheel control application."""

from .control_main_window import ControlMainWindow
from .desktop_overlay import DesktopOverlay
from .dialog_helpers import (
    confirm_delete_challenge,
    confirm_delete_donation,
    confirm_delete_wheel,
    confirm_reset_session,
    show_error,
    show_info,
    show_warning,
)
from .hotkey_bridge import GlobalHotkeyService
from .qt_scheduler import QtScheduler
from .sound_player import SoundPlayer

__all__ = [
    "ControlMainWindow",
    "DesktopOverlay",
    "GlobalHotkeyService",
    "QtScheduler",
    "SoundPlayer",
    "confirm_delete_challenge",
    "confirm_delete_donation",
    "confirm_delete_wheel",
    "confirm_reset_session",
    "show_error",
    "show_info",
    "show_warning",
]
