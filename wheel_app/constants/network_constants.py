"""Network configuration constants for the overlay server."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8765
HOST_ENV_VAR: str = "CHALLENGE_WHEEL_HOST"
PORT_ENV_VAR: str = "CHALLENGE_WHEEL_PORT"
