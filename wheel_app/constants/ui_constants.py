"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "ChallengeWheel Control Center"
OVERLAY_WINDOW_TITLE: str = "ChallengeWheel Overlay"
OVERLAY_URL_TEMPLATE: str = "OBS browser source: {url}"

TAB_WHEELS: str = "Wheels"
TAB_DONATIONS: str = "Donations"

WHEEL_NEW_BUTTON: str = "New Wheel"
WHEEL_RENAME_BUTTON: str = "Rename"
WHEEL_DELETE_BUTTON: str = "Delete Wheel"
WHEEL_ACTIVATE_BUTTON: str = "Set Active"
CHALLENGE_ADD_BUTTON: str = "Add Challenge"
CHALLENGE_EDIT_BUTTON: str = "Edit Challenge"
CHALLENGE_DELETE_BUTTON: str = "Delete Challenge"
SPIN_BUTTON: str = "Spin Wheel"

PROGRESS_UP_BUTTON: str = "+1"
PROGRESS_DOWN_BUTTON: str = "-1"
PAUSE_BUTTON: str = "Pause"
RESUME_BUTTON: str = "Resume"
COMPLETE_BUTTON: str = "Completed"
FAIL_BUTTON: str = "Failed"

DONATION_DELETE_BUTTON: str = "Delete Entry"
SESSION_RESET_BUTTON: str = "Reset Session"
EXPORT_BUTTON: str = "Export CSV"
EXPORT_DIALOG_TITLE: str = "Export donation history"
EXPORT_FILE_FILTER: str = "CSV files (*.csv);;All files (*.*)"

NO_CHALLENGE_MESSAGE: str = "No challenge running. Spin the wheel to start one."
NO_WHEEL_SELECTED_MESSAGE: str = "Select a wheel first."
EMOJI_PRESETS: tuple[str, ...] = ("🪙", "⏰", "☠️", "🎯", "🔥", "💀", "🏆", "⚔️", "🧟", "🐉")

OVERLAY_FADE_DURATION_MS: int = 800
SPIN_REEL_FRAME_MS: int = 80
