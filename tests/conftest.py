from __future__ import annotations

from datetime import datetime, timedelta
import random
from typing import Callable

import pytest

from wheel_app.core.models import ChallengeDraft, ChallengeType
from wheel_app.core.presentation import PresentationBroadcaster
from wheel_app.core.scheduling import ScheduledTask, Scheduler
from wheel_app.core.services.challenge_engine import ChallengeEngine
from wheel_app.core.storage import MemoryStore
from wheel_app.core.wheel_manager import WheelManager


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class ManualTask(ScheduledTask):
    def __init__(self, due: float, interval: float | None, callback: Callable[[], None]) -> None:
        self.due = due
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.fired


class ManualScheduler(Scheduler):
    """Deterministic scheduler; time only passes through ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.tasks: list[ManualTask] = []

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ManualTask(self.now + delay_seconds, None, callback)
        self.tasks.append(task)
        return task

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ManualTask(self.now + interval_seconds, interval_seconds, callback)
        self.tasks.append(task)
        return task

    def active_tasks(self) -> list[ManualTask]:
        return [task for task in self.tasks if task.active]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds + 1e-9
        while True:
            due = [task for task in self.active_tasks() if task.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.due)
            self.now = max(self.now, task.due)
            if task.interval is None:
                task.fired = True
            else:
                task.due += task.interval
            task.callback()
        self.now = target


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 14, 20, 0, 0))


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def manager(store, clock) -> WheelManager:
    wheel_manager = WheelManager(store, clock=clock)
    wheel_manager.load()
    return wheel_manager


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def messages() -> list[dict]:
    return []


@pytest.fixture
def broadcaster(messages) -> PresentationBroadcaster:
    channel = PresentationBroadcaster()
    channel.subscribe(messages.append)
    return channel


@pytest.fixture
def notices() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def engine(manager, scheduler, broadcaster, notices, clock) -> ChallengeEngine:
    return ChallengeEngine(
        manager,
        scheduler,
        broadcaster,
        notify=lambda title, message: notices.append((title, message)),
        rng=random.Random(1234),
        clock=clock,
    )


def _make_draft(
    title: str = "Collect 5 gems",
    challenge_type: ChallengeType = ChallengeType.COLLECT,
    target: int = 5,
    time_limit: int = 60,
    image: str = "💎",
) -> ChallengeDraft:
    return ChallengeDraft(title=title, image=image, type=challenge_type, target=target, time_limit=time_limit)


@pytest.fixture
def make_draft() -> Callable[..., ChallengeDraft]:
    return _make_draft
