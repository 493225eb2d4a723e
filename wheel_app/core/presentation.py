"""Messages pushed from the engine to overlay surfaces, and their fan-out.

Every message is a plain dict with an ``action`` discriminator so it can be
sent unchanged to Qt widgets and, as JSON, to the OBS browser source.
Delivery is fire-and-forget: a listener that raises is logged and skipped,
and the next per-second update brings it back in sync.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable

from wheel_app.core.models import ActiveChallenge, Challenge, DonationStats, Settings

logger = logging.getLogger(__name__)

ACTION_SPIN = "spin"
ACTION_UPDATE_CHALLENGE = "update-challenge"
ACTION_SHOW_RESULT = "show-result"
ACTION_HIDE_OVERLAY = "hide-overlay"

RESULT_SUCCESS = "success"
RESULT_FAILURE = "failure"

PresentationListener = Callable[[dict], None]


def spin_message(
    challenges: list[Challenge],
    selected: Challenge,
    is_super: bool,
    settings: Settings,
) -> dict[str, object]:
    selected_payload = selected.to_dict()
    selected_payload["isSuper"] = is_super
    return {
        "action": ACTION_SPIN,
        "challenges": [challenge.to_dict() for challenge in challenges],
        "selectedChallenge": selected_payload,
        "settings": settings.to_dict(),
    }


def update_message(instance: ActiveChallenge) -> dict[str, object]:
    return {"action": ACTION_UPDATE_CHALLENGE, "challenge": instance.snapshot()}


def result_message(
    result: str,
    instance: ActiveChallenge,
    donation: float | None = None,
    session_stats: DonationStats | None = None,
    total_stats: DonationStats | None = None,
) -> dict[str, object]:
    message: dict[str, object] = {
        "action": ACTION_SHOW_RESULT,
        "result": result,
        "challenge": instance.snapshot(),
    }
    if donation is not None:
        message["donation"] = donation
    if session_stats is not None:
        message["sessionStats"] = session_stats.to_dict()
    if total_stats is not None:
        message["totalStats"] = total_stats.to_dict()
    return message


def hide_message() -> dict[str, object]:
    return {"action": ACTION_HIDE_OVERLAY}


class PresentationBroadcaster:
    """Observer fan-out from the engine to any number of surfaces."""

    def __init__(self) -> None:
        self._listeners: list[PresentationListener] = []
        self._lock = Lock()

    def subscribe(self, listener: PresentationListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: PresentationListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, message: dict) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(message)
            except Exception:
                logger.exception("Presentation listener failed for %s", message.get("action"))
