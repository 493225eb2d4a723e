"""Challenge and timing constants shared across UI and core layers."""

MIN_TIME_LIMIT_SECONDS: int = 30
DEFAULT_TIME_LIMIT_SECONDS: int = 180
TICK_INTERVAL_SECONDS: float = 1.0

# Winner display (5 s) plus overlay fade-out (0.8 s) after the reel stops.
SPIN_PRESENTATION_PADDING_SECONDS: float = 5.8
RESULT_HOLD_SECONDS: float = 10.0
SPIN_REARM_DELAY_SECONDS: float = 1.0

SUPER_DONATION_MULTIPLIER: int = 2
WARNING_WINDOW_SECONDS: int = 10

DEFAULT_DONATION_AMOUNT: float = 5.00
DEFAULT_SUPER_CHANCE: int = 10
DEFAULT_ANIMATION_DURATION: float = 3.0

SOUND_TYPES: tuple[str, ...] = ("ambient", "beep", "warning", "click", "none")
DEFAULT_SPIN_SOUND: str = "ambient"
DEFAULT_PROGRESS_SOUND: str = "beep"
DEFAULT_WARNING_SOUND: str = "warning"
SOUNDS_DIRECTORY: str = "wheel_app/data/sounds"
