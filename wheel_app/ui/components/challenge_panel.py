"""Component showing the running challenge with manual controls."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from wheel_app.constants.challenge_constants import WARNING_WINDOW_SECONDS
from wheel_app.constants.ui_constants import (
    COMPLETE_BUTTON,
    FAIL_BUTTON,
    NO_CHALLENGE_MESSAGE,
    PAUSE_BUTTON,
    PROGRESS_DOWN_BUTTON,
    PROGRESS_UP_BUTTON,
    RESUME_BUTTON,
)
from wheel_app.core.markdown_renderer import renderer
from wheel_app.core.presentation import (
    ACTION_HIDE_OVERLAY,
    ACTION_SHOW_RESULT,
    ACTION_SPIN,
    ACTION_UPDATE_CHALLENGE,
    RESULT_SUCCESS,
)
from wheel_app.core.services.challenge_engine import ChallengeEngine
from wheel_app.styling.styles import Styles


class ChallengePanel(QGroupBox):
    """Live view of the active challenge; mirrors what the overlays show."""

    def __init__(self, engine: ChallengeEngine, parent: QWidget | None = None) -> None:
        super().__init__("Current Challenge", parent)
        self.engine = engine
        self._build_ui()
        self._show_idle()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel(self)
        self.title_label.setTextFormat(Qt.RichText)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        self.title_label.setWordWrap(True)
        header_row.addWidget(self.title_label, stretch=1)

        self.super_label = QLabel("SUPER", self)
        self.super_label.setStyleSheet(Styles.get_super_badge_style())
        header_row.addWidget(self.super_label)
        layout.addLayout(header_row)

        status_row = QHBoxLayout()
        self.progress_label = QLabel(self)
        status_row.addWidget(self.progress_label)
        status_row.addStretch()
        self.time_label = QLabel(self)
        self.time_label.setStyleSheet(Styles.get_timer_label_style(False))
        status_row.addWidget(self.time_label)
        layout.addLayout(status_row)

        self.time_progress = QProgressBar(self)
        self.time_progress.setTextVisible(False)
        layout.addWidget(self.time_progress)

        button_row = QHBoxLayout()
        self.progress_down_button = QPushButton(PROGRESS_DOWN_BUTTON, self)
        self.progress_down_button.clicked.connect(lambda: self.engine.adjust_progress(-1))
        button_row.addWidget(self.progress_down_button)

        self.progress_up_button = QPushButton(PROGRESS_UP_BUTTON, self)
        self.progress_up_button.clicked.connect(lambda: self.engine.adjust_progress(1))
        button_row.addWidget(self.progress_up_button)

        self.pause_button = QPushButton(PAUSE_BUTTON, self)
        self.pause_button.clicked.connect(self.engine.toggle_pause)
        button_row.addWidget(self.pause_button)

        button_row.addStretch()

        self.complete_button = QPushButton(COMPLETE_BUTTON, self)
        self.complete_button.clicked.connect(self.engine.complete_challenge)
        button_row.addWidget(self.complete_button)

        self.fail_button = QPushButton(FAIL_BUTTON, self)
        self.fail_button.clicked.connect(self.engine.fail_challenge)
        button_row.addWidget(self.fail_button)

        layout.addLayout(button_row)

    def handle_message(self, message: dict) -> None:
        action = message.get("action")
        if action == ACTION_SPIN:
            selected = message["selectedChallenge"]
            self._set_title(selected, prefix="Spinning… ")
            self.super_label.setVisible(False)
            self._set_controls_enabled(False)
        elif action == ACTION_UPDATE_CHALLENGE:
            self._show_challenge(message["challenge"])
        elif action == ACTION_SHOW_RESULT:
            success = message.get("result") == RESULT_SUCCESS
            self.title_label.setText("Challenge completed!" if success else "Challenge failed!")
            self.progress_label.setText(
                "" if success else f"Donation: {float(message.get('donation', 0.0)):.2f}"
            )
            self._set_controls_enabled(False)
        elif action == ACTION_HIDE_OVERLAY:
            self._show_idle()

    def _show_idle(self) -> None:
        self.title_label.setText(NO_CHALLENGE_MESSAGE)
        self.super_label.setVisible(False)
        self.progress_label.setText("")
        self.time_label.setText("")
        self.time_progress.setRange(0, 1)
        self.time_progress.setValue(0)
        self._set_controls_enabled(False)

    def _show_challenge(self, challenge: dict) -> None:
        self._set_title(challenge)
        self.super_label.setVisible(bool(challenge.get("isSuper")))

        progress = challenge["progress"]
        target = challenge["target"]
        if challenge["type"] == "collect":
            text = f"Progress: {progress} / {target}"
        elif challenge["type"] == "max":
            text = f"Count: {progress} (max {target})"
        else:
            text = "Stay alive!"
        if challenge.get("isPaused"):
            text += "  (paused)"
        self.progress_label.setText(text)

        remaining = int(challenge["timeRemaining"])
        minutes, seconds = divmod(remaining, 60)
        self.time_label.setText(f"{minutes}:{seconds:02d}")
        self.time_label.setStyleSheet(Styles.get_timer_label_style(remaining <= WARNING_WINDOW_SECONDS))
        self.time_progress.setRange(0, max(1, int(challenge["timeLimit"])))
        self.time_progress.setValue(remaining)

        self.pause_button.setText(RESUME_BUTTON if challenge.get("isPaused") else PAUSE_BUTTON)
        self._set_controls_enabled(True)

    def _set_title(self, challenge: dict, prefix: str = "") -> None:
        self.title_label.setText(f"{prefix}{challenge['image']} {renderer.render_inline(challenge['title'])}")

    def _set_controls_enabled(self, enabled: bool) -> None:
        for button in (
            self.progress_down_button,
            self.progress_up_button,
            self.pause_button,
            self.complete_button,
            self.fail_button,
        ):
            button.setEnabled(enabled)
