"""Shared fixtures: a manual clock standing in for the event loop's timers."""

import pytest

from app.services.notifications import ToastCenter


class FakeTimer:
    def __init__(self, when: float, callback, seq: int):
        self.when = when
        self.callback = callback
        self.seq = seq
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Timer scheduler driven by ``advance`` instead of wall-clock time."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay, callback):
        timer = FakeTimer(self.now + delay, callback, len(self.timers))
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float):
        target = self.now + seconds
        while True:
            due = [
                t for t in self.timers
                if not t.cancelled and not t.fired and t.when <= target
            ]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self.now = timer.when
            timer.fired = True
            timer.callback()
        self.now = target

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]


class BrokenScheduler:
    """Scheduler whose loop is already gone."""

    def call_later(self, delay, callback):
        raise RuntimeError("Event loop is closed")


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def center(scheduler: FakeScheduler) -> ToastCenter:
    return ToastCenter(scheduler=scheduler, default_duration_ms=5000, error_duration_ms=7000)


@pytest.fixture
def broken_scheduler() -> BrokenScheduler:
    return BrokenScheduler()
