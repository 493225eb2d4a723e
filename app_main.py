"""Application entry point for ChallengeWheel."""

from __future__ import annotations

import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from wheel_app.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    HOST_ENV_VAR,
    PORT_ENV_VAR,
)
from wheel_app.core.presentation import PresentationBroadcaster
from wheel_app.core.services.challenge_engine import ChallengeEngine
from wheel_app.core.storage import MemoryStore, StorageError, open_default_store
from wheel_app.core.wheel_manager import WheelManager
from wheel_app.server.overlay_server import BrowserSourceChannel, start_overlay_server
from wheel_app.ui.control_main_window import ControlMainWindow
from wheel_app.ui.desktop_overlay import DesktopOverlay
from wheel_app.ui.dialog_helpers import show_warning
from wheel_app.ui.hotkey_bridge import GlobalHotkeyService
from wheel_app.ui.qt_scheduler import QtScheduler
from wheel_app.ui.sound_player import SoundPlayer
from wheel_app.utils.logging_config import configure_logging


def _resolve_server_address(logger: logging.Logger) -> tuple[str, int]:
    """Read host and port from the environment, falling back to the defaults."""
    host = os.getenv(HOST_ENV_VAR) or DEFAULT_HOST
    port_value = os.getenv(PORT_ENV_VAR)
    if not port_value:
        return host, DEFAULT_PORT
    try:
        port = int(port_value)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", PORT_ENV_VAR, port_value)
        return host, DEFAULT_PORT
    return host, port


def _load_manager(logger: logging.Logger) -> tuple[WheelManager, str | None]:
    """Load persisted data; an unreadable store falls back to memory for this run."""
    store = open_default_store()
    manager = WheelManager(store)
    try:
        manager.load()
        return manager, None
    except StorageError as exc:
        logger.error("Could not load data store, running without persistence: %s", exc)
        fallback = WheelManager(MemoryStore())
        fallback.load()
        return fallback, f"{exc}\n\nChanges made in this session will not be saved."


def main() -> None:
    """Initialize logging, load data, start the overlay server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting ChallengeWheel…")

    wheel_manager, load_problem = _load_manager(logger)

    app = QApplication(sys.argv)

    host, port = _resolve_server_address(logger)
    overlay_url = f"http://{host}:{port}/"

    broadcaster = PresentationBroadcaster()
    window: ControlMainWindow | None = None

    def notify(title: str, message: str) -> None:
        if window is not None:
            window.notify(title, message)

    engine = ChallengeEngine(
        wheel_manager,
        QtScheduler(app),
        broadcaster,
        notify=notify,
    )

    channel = BrowserSourceChannel()
    broadcaster.subscribe(channel)
    start_overlay_server(wheel_manager, channel, host=host, port=port)

    hotkey_service = GlobalHotkeyService(app)
    hotkey_service.register_all(wheel_manager.get_settings().hotkeys)

    overlay = DesktopOverlay()
    overlay.fade_completed.connect(overlay.hide)
    broadcaster.subscribe(overlay.post_message)

    sound_player = SoundPlayer(wheel_manager.get_settings, app)
    broadcaster.subscribe(sound_player.handle_message)

    window = ControlMainWindow(
        wheel_manager=wheel_manager,
        engine=engine,
        hotkey_service=hotkey_service,
        overlay_url=overlay_url,
    )
    window.add_companion_window(overlay)
    broadcaster.subscribe(window.post_message)

    def shutdown() -> None:
        engine.shutdown()
        hotkey_service.stop()
        logger.info("ChallengeWheel stopped")

    app.aboutToQuit.connect(shutdown)

    window.show()
    if load_problem:
        show_warning(window, "Data store unavailable", load_problem)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
