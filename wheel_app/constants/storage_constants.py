"""Storage keys and file locations for the persisted key-value store."""

from pathlib import Path

STORE_ENV_VAR: str = "CHALLENGE_WHEEL_STORE"
DEFAULT_STORE_PATH: Path = Path.home() / ".challenge_wheel" / "store.json"

KEY_WHEELS: str = "wheels"
KEY_LEGACY_CHALLENGES: str = "challenges"
KEY_SESSIONS: str = "sessions"
KEY_SETTINGS: str = "settings"
KEY_ACTIVE_WHEEL_ID: str = "activeWheelId"
KEY_SCHEMA_VERSION: str = "schemaVersion"
