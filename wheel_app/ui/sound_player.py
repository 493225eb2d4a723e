"""Sound cues for spin, progress and time-warning events."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QObject, QUrl
from PySide6.QtMultimedia import QSoundEffect

from wheel_app.constants.challenge_constants import SOUNDS_DIRECTORY, SOUND_TYPES, WARNING_WINDOW_SECONDS
from wheel_app.core.models import Settings
from wheel_app.core.presentation import ACTION_HIDE_OVERLAY, ACTION_SPIN, ACTION_UPDATE_CHALLENGE

logger = logging.getLogger(__name__)


class SoundPlayer(QObject):
    """Plays ``<sound type>.wav`` files from the sounds directory when present.

    A sound type without a file (and the ``none`` type) is silent.
    """

    def __init__(self, get_settings: Callable[[], Settings], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._get_settings = get_settings
        self._effects: dict[str, QSoundEffect] = {}
        self._last_progress: int | None = None
        self._load_effects()

    def _load_effects(self) -> None:
        sounds_dir = Path(SOUNDS_DIRECTORY)
        if not sounds_dir.is_absolute():
            sounds_dir = Path(__file__).resolve().parents[2] / sounds_dir
        for sound_type in SOUND_TYPES:
            sound_path = sounds_dir / f"{sound_type}.wav"
            if not sound_path.exists():
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(sound_path)))
            effect.setVolume(0.6)
            self._effects[sound_type] = effect
        logger.info("Loaded %d sound effects from %s", len(self._effects), sounds_dir)

    def handle_message(self, message: dict) -> None:
        sounds = self._get_settings().sounds
        action = message.get("action")
        if action == ACTION_SPIN:
            self._last_progress = None
            self._play(sounds.spin_sound_type)
        elif action == ACTION_UPDATE_CHALLENGE:
            challenge = message["challenge"]
            progress = int(challenge["progress"])
            if self._last_progress is not None and progress != self._last_progress:
                self._play(sounds.progress_sound_type)
            self._last_progress = progress
            remaining = int(challenge["timeRemaining"])
            if 0 < remaining <= WARNING_WINDOW_SECONDS and not challenge.get("isPaused"):
                self._play(sounds.warning_sound_type)
        elif action == ACTION_HIDE_OVERLAY:
            self._last_progress = None

    def _play(self, sound_type: str) -> None:
        effect = self._effects.get(sound_type)
        if effect is not None:
            effect.play()
