"""System-wide hotkeys via pynput, delivered to the Qt thread as a signal."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal
from pynput import keyboard

from wheel_app.core.hotkeys import build_hotkey_map

logger = logging.getLogger(__name__)


class GlobalHotkeyService(QObject):
    """Owns the pynput listener thread and re-emits actions on the UI thread.

    pynput invokes callbacks on its own thread; emitting a Qt signal from
    there queues the slot onto the receiver's thread.
    """

    action_triggered = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._listener: keyboard.GlobalHotKeys | None = None

    def register_all(self, bindings: dict[str, str]) -> bool:
        """Replace every registered hotkey with ``bindings``."""
        self.stop()
        try:
            hotkey_map = build_hotkey_map(bindings, self.action_triggered.emit)
        except ValueError as exc:
            logger.error("Hotkeys not registered: %s", exc)
            return False
        if not hotkey_map:
            logger.info("No hotkeys configured")
            return True

        self._listener = keyboard.GlobalHotKeys(hotkey_map)
        self._listener.daemon = True
        self._listener.start()
        logger.info("Hotkeys registered: %s", ", ".join(sorted(hotkey_map)))
        return True

    def rebind(self, bindings: dict[str, str]) -> bool:
        return self.register_all(bindings)

    def stop(self) -> None:
        if self._listener is None:
            return
        self._listener.stop()
        self._listener = None
        logger.info("Hotkeys unregistered")
