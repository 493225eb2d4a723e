"""Qt main window: wheel management, donation history and the live challenge."""

from __future__ import annotations

import logging

from PySide6.QtCore import Signal
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QTabWidget,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from wheel_app.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from wheel_app.constants.ui_constants import (
    OVERLAY_URL_TEMPLATE,
    TAB_DONATIONS,
    TAB_WHEELS,
    WINDOW_TITLE,
)
from wheel_app.core.markdown_renderer import renderer
from wheel_app.core.presentation import ACTION_HIDE_OVERLAY, ACTION_SHOW_RESULT, ACTION_SPIN
from wheel_app.core.services.challenge_engine import ChallengeEngine
from wheel_app.core.wheel_manager import WheelManager
from wheel_app.styling.styles import Styles
from wheel_app.ui.components.challenge_panel import ChallengePanel
from wheel_app.ui.components.donations_panel import DonationsPanel
from wheel_app.ui.components.wheel_panel import WheelPanel
from wheel_app.ui.dialog_helpers import show_info, show_warning
from wheel_app.ui.hotkey_bridge import GlobalHotkeyService
from wheel_app.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class ControlMainWindow(QMainWindow):
    """Main Qt window wiring the panels to the manager, engine and hotkeys."""

    message_posted = Signal(object)

    def __init__(
        self,
        wheel_manager: WheelManager,
        engine: ChallengeEngine,
        hotkey_service: GlobalHotkeyService,
        overlay_url: str,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(980, 720)

        self.wheel_manager = wheel_manager
        self.engine = engine
        self.hotkey_service = hotkey_service
        self.overlay_url = overlay_url
        self._companion_windows: list[QWidget] = []

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())

        self.message_posted.connect(self._handle_message)
        self.hotkey_service.action_triggered.connect(self._handle_hotkey)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_top_buttons(root_layout)

        self.tabs = QTabWidget(self)
        self.wheel_panel = WheelPanel(self.wheel_manager, on_spin=self._handle_spin, parent=self)
        self.donations_panel = DonationsPanel(self.wheel_manager, parent=self)
        self.tabs.addTab(self.wheel_panel, TAB_WHEELS)
        self.tabs.addTab(self.donations_panel, TAB_DONATIONS)
        self.tabs.currentChanged.connect(lambda _index: self.donations_panel.refresh())
        root_layout.addWidget(self.tabs, stretch=1)

        self.challenge_panel = ChallengePanel(self.engine, parent=self)
        root_layout.addWidget(self.challenge_panel)

        self.statusBar().addPermanentWidget(QLabel(OVERLAY_URL_TEMPLATE.format(url=self.overlay_url), self))

    def _build_top_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        layout.addLayout(button_row)

    def add_companion_window(self, window: QWidget) -> None:
        """Register a window (the desktop overlay) that closes together with this one."""
        self._companion_windows.append(window)

    # --- Presentation listener ---

    def post_message(self, message: dict) -> None:
        self.message_posted.emit(message)

    def _handle_message(self, message: dict) -> None:
        self.challenge_panel.handle_message(message)
        action = message.get("action")
        if action == ACTION_SPIN:
            self.wheel_panel.set_spin_enabled(False)
        elif action == ACTION_SHOW_RESULT:
            self.donations_panel.refresh()
        elif action == ACTION_HIDE_OVERLAY:
            self.wheel_panel.set_spin_enabled(True)

    def notify(self, title: str, message: str) -> None:
        show_warning(self, title, message)

    # --- Handlers ---

    def _handle_spin(self, wheel_id: str) -> None:
        self.engine.spin(wheel_id)

    def _handle_hotkey(self, action: str) -> None:
        self.engine.handle_hotkey(action)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(self.wheel_manager.get_settings(), self)
        while dialog.exec():
            new_settings = dialog.get_settings()
            try:
                self.wheel_manager.save_settings(new_settings)
            except ValueError as exc:
                show_warning(self, "Invalid settings", str(exc))
                continue
            if not self.hotkey_service.rebind(new_settings.hotkeys):
                show_warning(self, "Hotkeys", "Some hotkeys could not be registered. See the log for details.")
            break

    def _handle_help(self) -> None:
        dialog = QDialog(self)
        dialog.setWindowTitle(f"{APP_NAME} Help")
        dialog.resize(560, 520)
        layout = QVBoxLayout()
        dialog.setLayout(layout)
        browser = QTextBrowser(dialog)
        browser.setOpenExternalLinks(True)
        browser.setHtml(renderer.render_document(HELP_TEXT, title=f"{APP_NAME} Help"))
        layout.addWidget(browser)
        close_button = QPushButton("Close", dialog)
        close_button.clicked.connect(dialog.accept)
        layout.addWidget(close_button)
        dialog.exec()

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}\n\n"
            f"Overlay URL: {self.overlay_url}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def closeEvent(self, event: QCloseEvent) -> None:
        for window in self._companion_windows:
            window.close()
        super().closeEvent(event)
