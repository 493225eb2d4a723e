"""Timer abstraction used by the challenge engine.

The engine never talks to Qt directly: it asks a ``Scheduler`` for one-shot
and repeating callbacks and keeps the returned ``ScheduledTask`` so it can
cancel it. The Qt event loop provides the production implementation
(``wheel_app.ui.qt_scheduler``); tests drive a manual clock instead.
"""

from __future__ import annotations

from typing import Callable


class ScheduledTask:
    """Handle for a pending callback."""

    def cancel(self) -> None:
        raise NotImplementedError

    @property
    def active(self) -> bool:
        raise NotImplementedError


class Scheduler:
    """Creates cancellable delayed and repeating callbacks on the UI thread."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError


def cancel_task(task: ScheduledTask | None) -> None:
    """Cancel ``task`` if it is still pending."""
    if task is not None and task.active:
        task.cancel()
