"""Scheduler implementation backed by ``QTimer`` on the Qt event loop."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer

from wheel_app.core.scheduling import ScheduledTask, Scheduler


class QtScheduledTask(ScheduledTask):
    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer

    def cancel(self) -> None:
        self._release()

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def _release(self) -> None:
        # The C++ timer must not be touched after deleteLater().
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler(Scheduler):
    """Runs engine callbacks on the thread that owns ``parent`` (the UI thread)."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = self._make_timer(delay_seconds, single_shot=True)
        task = QtScheduledTask(timer)

        def fire() -> None:
            task._release()
            callback()

        timer.timeout.connect(fire)
        timer.start()
        return task

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = self._make_timer(interval_seconds, single_shot=False)
        timer.timeout.connect(callback)
        timer.start()
        return QtScheduledTask(timer)

    def _make_timer(self, seconds: float, single_shot: bool) -> QTimer:
        timer = QTimer(self._parent)
        timer.setSingleShot(single_shot)
        timer.setInterval(max(0, int(seconds * 1000)))
        return timer
