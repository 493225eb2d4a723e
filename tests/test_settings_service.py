from __future__ import annotations

from dataclasses import replace

import pytest

from wheel_app.constants.challenge_constants import DEFAULT_DONATION_AMOUNT, DEFAULT_SUPER_CHANCE
from wheel_app.constants.storage_constants import KEY_SETTINGS
from wheel_app.core.hotkeys import DEFAULT_HOTKEYS, SPIN_WHEEL
from wheel_app.core.models import SoundSettings
from wheel_app.core.services.settings_service import SettingsService, default_settings, settings_from_dict


@pytest.fixture
def service(store) -> SettingsService:
    settings_service = SettingsService(store)
    settings_service.load()
    return settings_service


def test_defaults_when_nothing_stored(service):
    settings = service.settings
    assert settings.donation_amount == DEFAULT_DONATION_AMOUNT
    assert settings.super_chance == DEFAULT_SUPER_CHANCE
    assert settings.hotkeys == DEFAULT_HOTKEYS


def test_save_persists_camel_case_blob(service, store):
    service.save(replace(service.settings, donation_amount=7.5, super_chance=25))

    stored = store.get(KEY_SETTINGS)
    assert stored["donationAmount"] == 7.5
    assert stored["superChance"] == 25
    assert stored["animationDuration"] == 3.0
    assert stored["hotkeys"]["spinWheel"] == "F1"
    assert stored["sounds"] == {
        "spinSoundType": "ambient",
        "progressSoundType": "beep",
        "warningSoundType": "warning",
    }


def test_saved_settings_survive_reload(service, store):
    service.save(replace(service.settings, animation_duration=4.5))

    reloaded = SettingsService(store)
    reloaded.load()

    assert reloaded.settings.animation_duration == 4.5


@pytest.mark.parametrize(
    "changes",
    [
        {"donation_amount": -1.0},
        {"super_chance": 101},
        {"super_chance": -5},
        {"animation_duration": 0},
        {"hotkeys": {"teleport": "F9"}},
        {"hotkeys": {"spinWheel": "F1", "progressUp": "f1"}},
        {"hotkeys": {"spinWheel": "Ctrl+Shift"}},
        {"sounds": SoundSettings(spin_sound_type="airhorn")},
    ],
)
def test_invalid_settings_are_rejected(service, store, changes):
    with pytest.raises(ValueError):
        service.save(replace(service.settings, **changes))
    assert store.get(KEY_SETTINGS) is None


def test_update_hotkeys_replaces_only_bindings(service, store):
    bindings = dict(DEFAULT_HOTKEYS, **{SPIN_WHEEL: "Ctrl+Shift+S"})

    service.update_hotkeys(bindings)

    assert service.settings.hotkeys[SPIN_WHEEL] == "Ctrl+Shift+S"
    assert store.get(KEY_SETTINGS)["donationAmount"] == DEFAULT_DONATION_AMOUNT


def test_malformed_fields_fall_back_per_field():
    settings = settings_from_dict(
        {
            "donationAmount": "lots",
            "superChance": 40,
            "animationDuration": -2,
            "hotkeys": {"spinWheel": "F9", "unknown": "F10", "progressUp": 3},
            "sounds": {"spinSoundType": "beep", "warningSoundType": "kazoo"},
        }
    )

    assert settings.donation_amount == DEFAULT_DONATION_AMOUNT
    assert settings.super_chance == 40
    assert settings.animation_duration == default_settings().animation_duration
    assert settings.hotkeys["spinWheel"] == "F9"
    assert settings.hotkeys["progressUp"] == DEFAULT_HOTKEYS["progressUp"]
    assert "unknown" not in settings.hotkeys
    assert settings.sounds.spin_sound_type == "beep"
    assert settings.sounds.warning_sound_type == "warning"


def test_non_object_blob_loads_defaults(store):
    store.set(KEY_SETTINGS, ["not", "a", "dict"])
    service = SettingsService(store)

    assert service.load() == default_settings()
