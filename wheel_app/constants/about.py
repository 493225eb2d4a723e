"""Static metadata describing ChallengeWheel."""

APP_NAME = "ChallengeWheel"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "ChallengeWheel is a donation-incentive companion for streamers built with Qt and FastAPI. "
    "Spin a wheel of challenges, play against the clock, and donate when you fail."
)

HELP_TEXT = """\
## Wheels

Create one or more **wheels** and fill each with challenges. The *active* wheel
is the one spun by the spin hotkey.

## Challenge types

- **Collect**: reach the target count before the time runs out.
- **Survive**: stay alive until the timer reaches zero. Progress is ignored.
- **Max**: do not exceed the target count. Going over fails the challenge.

## Hotkeys

| Action | Default |
| --- | --- |
| Spin wheel | F1 |
| Progress +1 | F2 |
| Progress -1 | F3 |
| Challenge failed | F4 |
| Pause / resume | F5 |

## Overlays

The desktop overlay sits on top of every window and can be captured directly.
For OBS, add a *Browser Source* pointing at the overlay URL shown in the
status bar.
"""
