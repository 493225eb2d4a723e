from __future__ import annotations

import pytest

from wheel_app.core.hotkeys import (
    CHALLENGE_FAILED,
    DEFAULT_HOTKEYS,
    HOTKEY_ACTIONS,
    PROGRESS_UP,
    SPIN_WHEEL,
    build_hotkey_map,
    to_pynput_combo,
)


@pytest.mark.parametrize(
    ("combo", "expected"),
    [
        ("F1", "<f1>"),
        ("Ctrl+Shift+F1", "<ctrl>+<shift>+<f1>"),
        ("CommandOrControl+Alt+S", "<ctrl>+<alt>+s"),
        ("shift + space", "<shift>+<space>"),
        ("Ctrl+ctrl+K", "<ctrl>+k"),
    ],
)
def test_to_pynput_combo(combo, expected):
    assert to_pynput_combo(combo) == expected


@pytest.mark.parametrize("combo", ["", "Ctrl+", "Ctrl+Shift", "A+B", "F25", "Hyper+Q"])
def test_invalid_combos_raise(combo):
    with pytest.raises(ValueError):
        to_pynput_combo(combo)


def test_default_map_reports_actions():
    triggered: list[str] = []

    hotkey_map = build_hotkey_map(DEFAULT_HOTKEYS, triggered.append)
    hotkey_map["<f1>"]()
    hotkey_map["<f4>"]()

    assert len(hotkey_map) == len(HOTKEY_ACTIONS)
    assert triggered == [SPIN_WHEEL, CHALLENGE_FAILED]


def test_empty_bindings_are_skipped():
    hotkey_map = build_hotkey_map({SPIN_WHEEL: "F6", PROGRESS_UP: "  "}, lambda _action: None)
    assert list(hotkey_map) == ["<f6>"]


def test_duplicate_combos_raise():
    with pytest.raises(ValueError):
        build_hotkey_map({SPIN_WHEEL: "Ctrl+K", PROGRESS_UP: "ctrl+k"}, lambda _action: None)
