"""Shared fixtures for the pomodoro core tests."""

import datetime
import logging

import pytest

from pomodoro_calendar.controller import PomodoroController
from pomodoro_calendar.counter import DailyCounter
from pomodoro_calendar.errors import HistoryStoreError
from pomodoro_calendar.timer_engine import TimerEngine


class FakeClock:
    def __init__(self, day: datetime.date):
        self.day = day

    def __call__(self) -> datetime.date:
        return self.day


class MemoryStore:
    """In-memory stand-in for HistoryStore that can be told to fail."""

    def __init__(self, initial: dict[str, int] | None = None):
        self.data = dict(initial or {})
        self.saves: list[dict[str, int]] = []
        self.fail_load = False
        self.fail_save = False

    def load(self) -> dict[str, int]:
        if self.fail_load:
            raise HistoryStoreError("boom")
        return dict(self.data)

    def save(self, counts: dict[str, int]) -> None:
        if self.fail_save:
            raise HistoryStoreError("disk full")
        self.data = dict(counts)
        self.saves.append(dict(counts))


class RecordingSound:
    def __init__(self):
        self.played: list[str] = []

    def play_work_end_sound(self) -> None:
        self.played.append("work_end")

    def play_break_end_sound(self) -> None:
        self.played.append("break_end")


class FakeScheduler:
    """Collects ``after``-style jobs; tests fire them explicitly."""

    def __init__(self):
        self.jobs: dict[int, tuple[int, object]] = {}
        self._next_id = 0

    def schedule(self, delay_ms: int, callback) -> int:
        self._next_id += 1
        self.jobs[self._next_id] = (delay_ms, callback)
        return self._next_id

    def cancel(self, job_id: int) -> None:
        self.jobs.pop(job_id, None)

    def pending(self, delay_ms: int | None = None) -> list[int]:
        return [j for j, (d, _) in self.jobs.items() if delay_ms is None or d == delay_ms]

    def fire(self, job_id: int) -> None:
        _, callback = self.jobs.pop(job_id)
        callback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime.date(2024, 3, 15))


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sound() -> RecordingSound:
    return RecordingSound()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("PomodoroCalendar.tests")


@pytest.fixture
def counter(store, clock, logger) -> DailyCounter:
    c = DailyCounter(store, logger, today=clock)
    c.load()
    return c


@pytest.fixture
def controller(counter, sound, scheduler, clock, logger) -> PomodoroController:
    return PomodoroController(
        engine=TimerEngine(),
        counter=counter,
        sound=sound,
        schedule=scheduler.schedule,
        cancel=scheduler.cancel,
        logger=logger,
        today=clock,
    )
