"""Transparent always-on-top overlay window for direct screen capture."""

from __future__ import annotations

import logging
import random

from PySide6.QtCore import QEasingCurve, QPropertyAnimation, Qt, QTimer, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QFrame, QLabel, QStackedLayout, QVBoxLayout, QWidget

from wheel_app.constants.challenge_constants import WARNING_WINDOW_SECONDS
from wheel_app.constants.ui_constants import (
    OVERLAY_FADE_DURATION_MS,
    OVERLAY_WINDOW_TITLE,
    SPIN_REEL_FRAME_MS,
)
from wheel_app.core.presentation import (
    ACTION_HIDE_OVERLAY,
    ACTION_SHOW_RESULT,
    ACTION_SPIN,
    ACTION_UPDATE_CHALLENGE,
    RESULT_SUCCESS,
)
from wheel_app.styling.styles import Styles

logger = logging.getLogger(__name__)


class DesktopOverlay(QWidget):
    """Frameless click-through window showing the spin reel, HUD and result banner.

    ``post_message`` may be called from any thread; the message is queued to
    the UI thread through ``message_posted``.
    """

    message_posted = Signal(object)
    fade_completed = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle(OVERLAY_WINDOW_TITLE)
        self.setWindowFlags(
            Qt.FramelessWindowHint
            | Qt.WindowStaysOnTopHint
            | Qt.Tool
            | Qt.WindowTransparentForInput
        )
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WA_ShowWithoutActivating, True)

        self._reel_pool: list[dict] = []
        self._reel_selected: dict | None = None
        self._reel_frames_left = 0

        self._build_ui()
        self._place_on_screen()

        self._reel_timer = QTimer(self)
        self._reel_timer.setInterval(SPIN_REEL_FRAME_MS)
        self._reel_timer.timeout.connect(self._advance_reel)

        self._fade = QPropertyAnimation(self, b"windowOpacity", self)
        self._fade.setDuration(OVERLAY_FADE_DURATION_MS)
        self._fade.setEasingCurve(QEasingCurve.InOutQuad)
        self._fade.finished.connect(self._handle_fade_finished)
        self._fading_out = False

        self.message_posted.connect(self.handle_message)

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(layout)

        self.card = QFrame(self)
        self.card.setObjectName("overlayCard")
        self.card.setStyleSheet(Styles.get_overlay_card_style())
        self.stack = QStackedLayout()
        self.card.setLayout(self.stack)
        layout.addWidget(self.card)

        # Spin reel
        reel_page = QWidget(self.card)
        reel_layout = QVBoxLayout()
        reel_page.setLayout(reel_layout)
        self.reel_label = QLabel(reel_page)
        self.reel_label.setAlignment(Qt.AlignCenter)
        self.reel_label.setStyleSheet("font-size: 30pt; font-weight: bold;")
        reel_layout.addWidget(self.reel_label)
        self.reel_super_label = QLabel("SUPER CHALLENGE", reel_page)
        self.reel_super_label.setAlignment(Qt.AlignCenter)
        self.reel_super_label.setStyleSheet(Styles.get_super_badge_style())
        reel_layout.addWidget(self.reel_super_label)
        self.stack.addWidget(reel_page)

        # Live HUD
        hud_page = QWidget(self.card)
        hud_layout = QVBoxLayout()
        hud_page.setLayout(hud_layout)
        self.hud_super_label = QLabel("SUPER", hud_page)
        self.hud_super_label.setAlignment(Qt.AlignCenter)
        self.hud_super_label.setStyleSheet(Styles.get_super_badge_style())
        hud_layout.addWidget(self.hud_super_label)
        self.hud_title_label = QLabel(hud_page)
        self.hud_title_label.setAlignment(Qt.AlignCenter)
        self.hud_title_label.setStyleSheet(Styles.get_large_label_style())
        hud_layout.addWidget(self.hud_title_label)
        self.hud_progress_label = QLabel(hud_page)
        self.hud_progress_label.setAlignment(Qt.AlignCenter)
        hud_layout.addWidget(self.hud_progress_label)
        self.hud_time_label = QLabel(hud_page)
        self.hud_time_label.setAlignment(Qt.AlignCenter)
        hud_layout.addWidget(self.hud_time_label)
        self.stack.addWidget(hud_page)

        # Result banner
        result_page = QWidget(self.card)
        result_layout = QVBoxLayout()
        result_page.setLayout(result_layout)
        self.result_title_label = QLabel(result_page)
        self.result_title_label.setAlignment(Qt.AlignCenter)
        result_layout.addWidget(self.result_title_label)
        self.result_detail_label = QLabel(result_page)
        self.result_detail_label.setAlignment(Qt.AlignCenter)
        result_layout.addWidget(self.result_detail_label)
        self.stack.addWidget(result_page)

    def _place_on_screen(self) -> None:
        self.resize(520, 200)
        screen = QGuiApplication.primaryScreen()
        if screen is None:
            return
        geometry = screen.availableGeometry()
        self.move(geometry.center().x() - self.width() // 2, geometry.top() + 40)

    # --- Presentation listener ---

    def post_message(self, message: dict) -> None:
        self.message_posted.emit(message)

    def handle_message(self, message: dict) -> None:
        action = message.get("action")
        if action == ACTION_SPIN:
            self._start_reel(message)
        elif action == ACTION_UPDATE_CHALLENGE:
            self._show_hud(message["challenge"])
        elif action == ACTION_SHOW_RESULT:
            self._show_result(message)
        elif action == ACTION_HIDE_OVERLAY:
            self._fade_out()

    def _start_reel(self, message: dict) -> None:
        self._reel_pool = list(message.get("challenges") or [])
        self._reel_selected = message["selectedChallenge"]
        duration_ms = float(message["settings"]["animationDuration"]) * 1000
        self._reel_frames_left = max(1, int(duration_ms // SPIN_REEL_FRAME_MS))
        self.reel_super_label.setVisible(False)
        self.stack.setCurrentIndex(0)
        self._fade_in()
        self._reel_timer.start()

    def _advance_reel(self) -> None:
        self._reel_frames_left -= 1
        if self._reel_frames_left <= 0 or not self._reel_pool:
            self._reel_timer.stop()
            selected = self._reel_selected or {}
            self.reel_label.setText(f"{selected.get('image', '')} {selected.get('title', '')}")
            self.reel_super_label.setVisible(bool(selected.get("isSuper")))
            return
        entry = random.choice(self._reel_pool)
        self.reel_label.setText(f"{entry['image']} {entry['title']}")

    def _show_hud(self, challenge: dict) -> None:
        self._reel_timer.stop()
        self.hud_super_label.setVisible(bool(challenge.get("isSuper")))
        self.hud_title_label.setText(f"{challenge['image']} {challenge['title']}")
        if challenge["type"] == "collect":
            progress = f"{challenge['progress']} / {challenge['target']}"
        elif challenge["type"] == "max":
            progress = f"{challenge['progress']} / max {challenge['target']}"
        else:
            progress = ""
        if challenge.get("isPaused"):
            progress = f"{progress} (paused)".strip()
        self.hud_progress_label.setText(progress)
        remaining = int(challenge["timeRemaining"])
        minutes, seconds = divmod(remaining, 60)
        self.hud_time_label.setText(f"{minutes}:{seconds:02d}")
        self.hud_time_label.setStyleSheet(Styles.get_timer_label_style(remaining <= WARNING_WINDOW_SECONDS))
        self.stack.setCurrentIndex(1)
        self._fade_in()

    def _show_result(self, message: dict) -> None:
        success = message.get("result") == RESULT_SUCCESS
        self.result_title_label.setStyleSheet(Styles.get_result_style(success))
        if success:
            self.result_title_label.setText("Challenge completed!")
            self.result_detail_label.setText(message["challenge"]["title"])
        else:
            donation = float(message.get("donation", 0.0))
            session_amount = float((message.get("sessionStats") or {}).get("amount", 0.0))
            self.result_title_label.setText(f"Failed! Donate {donation:.2f}")
            self.result_detail_label.setText(f"Session total: {session_amount + donation:.2f}")
        self.stack.setCurrentIndex(2)
        self._fade_in()

    # --- Fading ---

    def _fade_in(self) -> None:
        if self.isVisible() and not self._fading_out:
            return
        self._fading_out = False
        self._fade.stop()
        if not self.isVisible():
            self.setWindowOpacity(0.0)
            self.show()
        self._fade.setStartValue(self.windowOpacity())
        self._fade.setEndValue(1.0)
        self._fade.start()

    def _fade_out(self) -> None:
        self._reel_timer.stop()
        if not self.isVisible():
            self.fade_completed.emit()
            return
        self._fading_out = True
        self._fade.stop()
        self._fade.setStartValue(self.windowOpacity())
        self._fade.setEndValue(0.0)
        self._fade.start()

    def _handle_fade_finished(self) -> None:
        if not self._fading_out:
            return
        self._fading_out = False
        logger.debug("Desktop overlay fade-out finished")
        self.fade_completed.emit()
