"""Service for loading, validating and saving the global settings blob."""

from __future__ import annotations

import logging

from wheel_app.constants.challenge_constants import (
    DEFAULT_ANIMATION_DURATION,
    DEFAULT_DONATION_AMOUNT,
    DEFAULT_SUPER_CHANCE,
    SOUND_TYPES,
)
from wheel_app.constants.storage_constants import KEY_SETTINGS
from wheel_app.core.hotkeys import DEFAULT_HOTKEYS, HOTKEY_ACTIONS, build_hotkey_map
from wheel_app.core.models import Settings, SoundSettings
from wheel_app.core.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)


class SettingsService:
    """Holds the single Settings instance and writes it back wholesale."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._settings = default_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def load(self) -> Settings:
        raw = self._store.get(KEY_SETTINGS)
        self._settings = settings_from_dict(raw) if isinstance(raw, dict) else default_settings()
        return self._settings

    def save(self, settings: Settings) -> None:
        validate_settings(settings)
        self._settings = settings
        logger.info(
            "Settings saved (donation %.2f, super chance %d%%)",
            settings.donation_amount,
            settings.super_chance,
        )
        self._persist()

    def update_hotkeys(self, bindings: dict[str, str]) -> None:
        _validate_hotkeys(bindings)
        self._settings.hotkeys = dict(bindings)
        self._persist()

    def _persist(self) -> None:
        try:
            self._store.set(KEY_SETTINGS, self._settings.to_dict())
        except StorageError:
            logger.exception("Error saving settings")


def default_settings() -> Settings:
    return Settings(hotkeys=dict(DEFAULT_HOTKEYS))


def settings_from_dict(data: dict) -> Settings:
    """Build Settings from stored JSON, falling back to defaults field by field."""
    defaults = default_settings()
    sounds_raw = data.get("sounds") if isinstance(data.get("sounds"), dict) else {}
    hotkeys_raw = data.get("hotkeys") if isinstance(data.get("hotkeys"), dict) else {}

    hotkeys = dict(defaults.hotkeys)
    for action, combo in hotkeys_raw.items():
        if action in HOTKEY_ACTIONS and isinstance(combo, str):
            hotkeys[action] = combo

    return Settings(
        donation_amount=_coerce_float(data.get("donationAmount"), DEFAULT_DONATION_AMOUNT, minimum=0.0),
        super_chance=int(_coerce_float(data.get("superChance"), DEFAULT_SUPER_CHANCE, minimum=0.0, maximum=100.0)),
        animation_duration=_coerce_float(data.get("animationDuration"), DEFAULT_ANIMATION_DURATION, minimum=0.1),
        hotkeys=hotkeys,
        sounds=SoundSettings(
            spin_sound_type=_coerce_sound(sounds_raw.get("spinSoundType"), defaults.sounds.spin_sound_type),
            progress_sound_type=_coerce_sound(sounds_raw.get("progressSoundType"), defaults.sounds.progress_sound_type),
            warning_sound_type=_coerce_sound(sounds_raw.get("warningSoundType"), defaults.sounds.warning_sound_type),
        ),
    )


def validate_settings(settings: Settings) -> None:
    if settings.donation_amount < 0:
        raise ValueError("Donation amount cannot be negative.")
    if not 0 <= settings.super_chance <= 100:
        raise ValueError("Super chance must be between 0 and 100 percent.")
    if settings.animation_duration <= 0:
        raise ValueError("Animation duration must be positive.")
    _validate_hotkeys(settings.hotkeys)
    for sound_type in (
        settings.sounds.spin_sound_type,
        settings.sounds.progress_sound_type,
        settings.sounds.warning_sound_type,
    ):
        if sound_type not in SOUND_TYPES:
            raise ValueError(f"Unknown sound type {sound_type!r}.")


def _validate_hotkeys(bindings: dict[str, str]) -> None:
    unknown = set(bindings) - set(HOTKEY_ACTIONS)
    if unknown:
        raise ValueError(f"Unknown hotkey action(s): {', '.join(sorted(unknown))}.")
    # Raises ValueError for malformed or duplicated combos.
    build_hotkey_map(bindings, lambda _action: None)


def _coerce_float(
    value: object,
    default: float,
    minimum: float | None = None,
    maximum: float | None = None,
) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if minimum is not None and value < minimum:
        return default
    if maximum is not None and value > maximum:
        return default
    return float(value)


def _coerce_sound(value: object, default: str) -> str:
    return value if isinstance(value, str) and value in SOUND_TYPES else default
