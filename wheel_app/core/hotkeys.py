"""Hotkey actions and conversion of key-combo strings for global listeners.

Bindings are stored the way users type them ("F1", "Ctrl+Shift+S") and are
translated into the ``<ctrl>+<shift>+s`` notation understood by
``pynput.keyboard.GlobalHotKeys`` only when the listener is (re)built.
"""

from __future__ import annotations

from typing import Callable

SPIN_WHEEL = "spinWheel"
PROGRESS_UP = "progressUp"
PROGRESS_DOWN = "progressDown"
CHALLENGE_FAILED = "challengeFailed"
PAUSE_RESUME = "pauseResume"

HOTKEY_ACTIONS: tuple[str, ...] = (
    SPIN_WHEEL,
    PROGRESS_UP,
    PROGRESS_DOWN,
    CHALLENGE_FAILED,
    PAUSE_RESUME,
)

HOTKEY_LABELS: dict[str, str] = {
    SPIN_WHEEL: "Spin wheel",
    PROGRESS_UP: "Progress +1",
    PROGRESS_DOWN: "Progress -1",
    CHALLENGE_FAILED: "Challenge failed",
    PAUSE_RESUME: "Pause / resume",
}

DEFAULT_HOTKEYS: dict[str, str] = {
    SPIN_WHEEL: "F1",
    PROGRESS_UP: "F2",
    PROGRESS_DOWN: "F3",
    CHALLENGE_FAILED: "F4",
    PAUSE_RESUME: "F5",
}

_MODIFIERS = {
    "ctrl": "<ctrl>",
    "control": "<ctrl>",
    "cmdorctrl": "<ctrl>",
    "commandorcontrol": "<ctrl>",
    "shift": "<shift>",
    "alt": "<alt>",
    "option": "<alt>",
    "altgr": "<alt_gr>",
    "cmd": "<cmd>",
    "command": "<cmd>",
    "super": "<cmd>",
    "meta": "<cmd>",
}

_NAMED_KEYS = {
    "space": "<space>",
    "enter": "<enter>",
    "return": "<enter>",
    "tab": "<tab>",
    "esc": "<esc>",
    "escape": "<esc>",
    "up": "<up>",
    "down": "<down>",
    "left": "<left>",
    "right": "<right>",
    "home": "<home>",
    "end": "<end>",
    "pageup": "<page_up>",
    "pagedown": "<page_down>",
    "insert": "<insert>",
    "delete": "<delete>",
    "backspace": "<backspace>",
}


def to_pynput_combo(combo: str) -> str:
    """Translate an accelerator such as ``Ctrl+Shift+F1`` into pynput notation."""
    parts = [part.strip() for part in (combo or "").split("+")]
    if not parts or any(not part for part in parts):
        raise ValueError(f"Invalid hotkey {combo!r}.")

    modifiers: list[str] = []
    keys: list[str] = []
    for part in parts:
        lowered = part.lower()
        if lowered in _MODIFIERS:
            token = _MODIFIERS[lowered]
            if token not in modifiers:
                modifiers.append(token)
        else:
            keys.append(_translate_key(part))

    if len(keys) != 1:
        raise ValueError(f"Hotkey {combo!r} must contain exactly one non-modifier key.")
    return "+".join(modifiers + keys)


def build_hotkey_map(
    bindings: dict[str, str],
    on_action: Callable[[str], None],
) -> dict[str, Callable[[], None]]:
    """Return a pynput hotkey map that reports the logical action for each combo.

    Empty bindings are skipped. Two actions bound to the same combo raise
    ``ValueError``.
    """
    hotkey_map: dict[str, Callable[[], None]] = {}
    owners: dict[str, str] = {}
    for action in HOTKEY_ACTIONS:
        combo = (bindings.get(action) or "").strip()
        if not combo:
            continue
        translated = to_pynput_combo(combo)
        if translated in owners:
            raise ValueError(
                f"Hotkey {combo!r} is assigned to both {owners[translated]} and {action}."
            )
        owners[translated] = action
        hotkey_map[translated] = _make_callback(on_action, action)
    return hotkey_map


def _translate_key(part: str) -> str:
    lowered = part.lower()
    if lowered in _NAMED_KEYS:
        return _NAMED_KEYS[lowered]
    if lowered.startswith("f") and lowered[1:].isdigit() and 1 <= int(lowered[1:]) <= 24:
        return f"<{lowered}>"
    if len(part) == 1 and part.isprintable():
        return lowered
    raise ValueError(f"Unsupported key {part!r}.")


def _make_callback(on_action: Callable[[str], None], action: str) -> Callable[[], None]:
    def callback() -> None:
        on_action(action)

    return callback
