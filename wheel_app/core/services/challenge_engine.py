"""State machine driving a challenge from spin to settled donation.

States::

    IDLE --spin--> SPINNING --(presentation delay)--> CHALLENGE_ACTIVE
    CHALLENGE_ACTIVE --complete/fail/timeout--> SHOWING_RESULT
    SHOWING_RESULT --(result hold, re-arm delay)--> IDLE

Only one active challenge exists at a time. The once-per-second countdown is
a single scheduled task owned by that instance: it is created in
``start_challenge`` and cancelled in ``_finish``, which every terminal path
goes through exactly once.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum, auto
import logging
import random
from typing import Callable

from wheel_app.constants.challenge_constants import (
    RESULT_HOLD_SECONDS,
    SPIN_PRESENTATION_PADDING_SECONDS,
    SPIN_REARM_DELAY_SECONDS,
    SUPER_DONATION_MULTIPLIER,
    TICK_INTERVAL_SECONDS,
)
from wheel_app.core import hotkeys
from wheel_app.core.models import ActiveChallenge, Challenge, ChallengeType, Donation
from wheel_app.core.presentation import (
    RESULT_FAILURE,
    RESULT_SUCCESS,
    PresentationBroadcaster,
    hide_message,
    result_message,
    spin_message,
    update_message,
)
from wheel_app.core.scheduling import ScheduledTask, Scheduler, cancel_task
from wheel_app.core.wheel_manager import WheelManager

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

ALREADY_ACTIVE_MESSAGE = "A challenge is already active! Finish it first."
EMPTY_WHEEL_MESSAGE = "This wheel has no challenges!"
NO_WHEEL_MESSAGE = "No wheel found. Please create or select a wheel first."


class EngineState(Enum):
    IDLE = auto()
    SPINNING = auto()
    CHALLENGE_ACTIVE = auto()
    SHOWING_RESULT = auto()


class ChallengeEngine:
    """Runs the spin → challenge → result lifecycle."""

    def __init__(
        self,
        manager: WheelManager,
        scheduler: Scheduler,
        broadcaster: PresentationBroadcaster,
        notify: Notifier | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._manager = manager
        self._scheduler = scheduler
        self._broadcaster = broadcaster
        self._notify = notify or (lambda _title, _message: None)
        self._rng = rng or random.Random()
        self._clock = clock

        self._state = EngineState.IDLE
        self._active: ActiveChallenge | None = None
        self._pending_spin: tuple[Challenge, bool] | None = None

        self._tick_task: ScheduledTask | None = None
        self._spin_task: ScheduledTask | None = None
        self._hide_task: ScheduledTask | None = None
        self._rearm_task: ScheduledTask | None = None

        self._hotkey_handlers: dict[str, Callable[[], object]] = {
            hotkeys.SPIN_WHEEL: self.spin_active_wheel,
            hotkeys.PROGRESS_UP: lambda: self.adjust_progress(1),
            hotkeys.PROGRESS_DOWN: lambda: self.adjust_progress(-1),
            hotkeys.CHALLENGE_FAILED: self.fail_challenge,
            hotkeys.PAUSE_RESUME: self.toggle_pause,
        }

    # --- Observability ---

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def active_challenge(self) -> ActiveChallenge | None:
        return self._active

    def is_active(self) -> bool:
        return self._active is not None

    # --- Spinning ---

    def spin(self, wheel_id: str | None = None) -> bool:
        """Draw a challenge from a wheel and start the spin presentation."""
        if self._state is not EngineState.IDLE:
            logger.info("Cannot spin wheel: engine is %s", self._state.name)
            self._notify("Challenge active", ALREADY_ACTIVE_MESSAGE)
            return False

        wheel = self._manager.get_wheel(wheel_id) if wheel_id else self._manager.get_active_wheel()
        if wheel is None:
            logger.error("Wheel not found: %s", wheel_id)
            self._notify("No wheel", NO_WHEEL_MESSAGE)
            return False
        if not wheel.challenges:
            logger.info("Cannot spin wheel %s: no challenges", wheel.id)
            self._notify("Empty wheel", EMPTY_WHEEL_MESSAGE)
            return False

        settings = self._manager.get_settings()
        selected = self._rng.choice(wheel.challenges)
        is_super = self._rng.random() * 100 < settings.super_chance

        self._state = EngineState.SPINNING
        self._pending_spin = (selected, is_super)
        logger.info(
            "Spinning wheel %s with %d challenges: selected %r%s",
            wheel.name,
            len(wheel.challenges),
            selected.title,
            " (SUPER!)" if is_super else "",
        )
        self._broadcaster.publish(spin_message(wheel.challenges, selected, is_super, settings))

        delay = settings.animation_duration + SPIN_PRESENTATION_PADDING_SECONDS
        self._spin_task = self._scheduler.call_later(delay, self._finish_spin)
        return True

    def spin_active_wheel(self) -> bool:
        return self.spin(None)

    def _finish_spin(self) -> None:
        self._spin_task = None
        pending, self._pending_spin = self._pending_spin, None
        if pending is None:
            return
        challenge, is_super = pending
        self.start_challenge(challenge, is_super=is_super)

    # --- Running ---

    def start_challenge(self, challenge: Challenge, is_super: bool = False) -> ActiveChallenge | None:
        if self._active is not None or self._state not in (EngineState.IDLE, EngineState.SPINNING):
            logger.warning("Cannot start %r: engine is %s", challenge.title, self._state.name)
            return None

        self._active = ActiveChallenge(
            challenge=challenge,
            start_time=self._clock(),
            time_remaining=challenge.time_limit,
            is_super=is_super,
        )
        self._state = EngineState.CHALLENGE_ACTIVE
        logger.info("Starting challenge: %s", challenge.title)
        self._tick_task = self._scheduler.call_every(TICK_INTERVAL_SECONDS, self._on_tick)
        self._publish_update()
        return self._active

    def _on_tick(self) -> None:
        instance = self._active
        if instance is None or instance.is_paused:
            return
        instance.time_remaining = max(0, instance.time_remaining - 1)
        self._publish_update()
        if instance.time_remaining <= 0:
            logger.info("Challenge timed out")
            self.fail_challenge()

    def adjust_progress(self, delta: int) -> None:
        instance = self._active
        if instance is None or instance.is_paused:
            return

        instance.progress = max(0, instance.progress + delta)
        challenge = instance.challenge
        logger.info(
            "Progress adjusted: %d / %d (%s)",
            instance.progress,
            challenge.target,
            challenge.type.value,
        )
        self._publish_update()

        if challenge.target <= 0:
            return
        if challenge.type is ChallengeType.MAX and instance.progress > challenge.target:
            logger.info("Max challenge failed - exceeded limit")
            self.fail_challenge()
        elif challenge.type is ChallengeType.COLLECT and instance.progress >= challenge.target:
            logger.info("Collect challenge completed by progress")
            self.complete_challenge()

    def toggle_pause(self) -> bool | None:
        """Flip the pause flag; returns the new value, or None without a challenge."""
        instance = self._active
        if instance is None:
            return None
        instance.is_paused = not instance.is_paused
        logger.info("Challenge paused: %s", instance.is_paused)
        self._publish_update()
        return instance.is_paused

    # --- Resolution ---

    def complete_challenge(self) -> bool:
        instance = self._finish()
        if instance is None:
            return False
        logger.info("Challenge completed successfully")
        self._broadcaster.publish(
            result_message(
                RESULT_SUCCESS,
                instance,
                session_stats=self._manager.get_session_stats(),
                total_stats=self._manager.get_total_stats(),
            )
        )
        self._schedule_reset()
        return True

    def fail_challenge(self) -> Donation | None:
        instance = self._finish()
        if instance is None:
            return None

        # Overlay shows the totals from before this donation was booked.
        session_stats = self._manager.get_session_stats()
        total_stats = self._manager.get_total_stats()

        base_amount = self._manager.get_settings().donation_amount
        amount = base_amount * SUPER_DONATION_MULTIPLIER if instance.is_super else base_amount
        donation = self._manager.add_donation(instance.challenge.title, amount)
        logger.info("Challenge failed, donation %.2f", donation.amount)

        self._broadcaster.publish(
            result_message(
                RESULT_FAILURE,
                instance,
                donation=donation.amount,
                session_stats=session_stats,
                total_stats=total_stats,
            )
        )
        self._schedule_reset()
        return donation

    def _finish(self) -> ActiveChallenge | None:
        """Detach the active instance and stop its countdown."""
        instance = self._active
        if instance is None:
            return None
        cancel_task(self._tick_task)
        self._tick_task = None
        self._active = None
        self._state = EngineState.SHOWING_RESULT
        return instance

    def _schedule_reset(self) -> None:
        logger.info("Challenge ended")
        self._hide_task = self._scheduler.call_later(RESULT_HOLD_SECONDS, self._hide_overlay)

    def _hide_overlay(self) -> None:
        self._hide_task = None
        self._broadcaster.publish(hide_message())
        self._rearm_task = self._scheduler.call_later(SPIN_REARM_DELAY_SECONDS, self._rearm)

    def _rearm(self) -> None:
        self._rearm_task = None
        self._state = EngineState.IDLE
        logger.info("Results state reset - ready for next spin")

    # --- Misc ---

    def handle_hotkey(self, action: str) -> None:
        handler = self._hotkey_handlers.get(action)
        if handler is None:
            logger.warning("Unknown hotkey action: %s", action)
            return
        logger.info("Hotkey pressed: %s", action)
        handler()

    def shutdown(self) -> None:
        """Cancel every pending timer; in-memory challenge state is dropped."""
        for task in (self._tick_task, self._spin_task, self._hide_task, self._rearm_task):
            cancel_task(task)
        self._tick_task = self._spin_task = self._hide_task = self._rearm_task = None
        self._active = None
        self._pending_spin = None
        self._state = EngineState.IDLE

    def _publish_update(self) -> None:
        if self._active is not None:
            self._broadcaster.publish(update_message(self._active))
