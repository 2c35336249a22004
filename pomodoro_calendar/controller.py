import datetime
import logging
from typing import Any, Callable, Mapping

from .audio import SoundPlayer
from .calendar_view import CalendarCell, build_month_grid, shift_month
from .config import LOGGER_NAME, TICK_INTERVAL_MS, GRACE_DELAY_MS
from .counter import DailyCounter
from .timer_engine import Effect, Mode, TimerEngine, TimerState

Schedule = Callable[[int, Callable[[], None]], Any]
Cancel = Callable[[Any], None]


class PomodoroController:
    """Owns the timer, the daily counter and the calendar month on display.

    Every entry point (user commands, ticks, the grace follow-up) is expected
    to run on one event loop, e.g. through ``root.after``; nothing here is
    re-entrant.
    """

    def __init__(
        self,
        engine: TimerEngine,
        counter: DailyCounter,
        sound: SoundPlayer,
        schedule: Schedule,
        cancel: Cancel | None = None,
        logger: logging.Logger | None = None,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.engine = engine
        self.counter = counter
        self.sound = sound
        self._schedule = schedule
        self._cancel = cancel
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._today = today

        now = today()
        self._year = now.year
        self._month = now.month

        self._tick_job = None
        self._grace_job = None
        self._listeners: list[Callable[[], None]] = []

    # Read side
    @property
    def state(self) -> TimerState:
        return self.engine.state

    @property
    def displayed_month(self) -> tuple[int, int]:
        return self._year, self._month

    def today_count(self) -> int:
        return self.counter.today_count()

    def history(self) -> Mapping[str, int]:
        return self.counter.snapshot()

    def month_grid(self) -> list[CalendarCell]:
        return build_month_grid(self.history(), self._year, self._month, self._today())

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    # Commands
    def select_mode(self, mode: Mode) -> None:
        self._drop_grace()
        self.engine.select_mode(mode)
        self._logger.info(f"Mode selected mode={mode.name}")
        self._notify()

    def start(self) -> None:
        if self.state.is_running:
            return
        self.engine.start()
        self._logger.info(f"Timer started mode={self.state.mode.name} remaining={self.state.remaining_sec}")
        self._notify()

    def stop(self) -> None:
        if not self.state.is_running:
            return
        self._drop_grace()
        self.engine.stop()
        self._logger.info(f"Timer stopped mode={self.state.mode.name} remaining={self.state.remaining_sec}")
        self._notify()

    def reset(self) -> None:
        self._drop_grace()
        self.engine.reset()
        self._logger.info(f"Timer reset mode={self.state.mode.name}")
        self._notify()

    def navigate_month(self, delta: int) -> None:
        self._year, self._month = shift_month(self._year, self._month, delta)
        self._notify()

    def go_to_today(self) -> None:
        now = self._today()
        self._year, self._month = now.year, now.month
        self._notify()

    # Tick driver
    def start_ticking(self) -> None:
        if self._tick_job is None:
            self._tick_job = self._schedule(TICK_INTERVAL_MS, self._on_tick)

    def shutdown(self) -> None:
        for job in (self._tick_job, self._grace_job):
            if job is not None and self._cancel is not None:
                try:
                    self._cancel(job)
                except Exception:
                    self._logger.exception("Cancel of scheduled job failed")
        self._tick_job = None
        self._grace_job = None

    def _on_tick(self) -> None:
        self._tick_job = self._schedule(TICK_INTERVAL_MS, self._on_tick)
        self.tick()

    def tick(self) -> None:
        before = self.state
        effects = self.engine.tick()
        self._run_effects(effects)
        if self.state != before or effects:
            self._notify()

    def _run_effects(self, effects: list[Effect]) -> None:
        count = None
        for effect in effects:
            if effect is Effect.RECORD_COMPLETION:
                count = self.counter.record_completion()
            elif effect is Effect.PLAY_WORK_END_SOUND:
                self.sound.play_work_end_sound()
            elif effect is Effect.PLAY_BREAK_END_SOUND:
                self.sound.play_break_end_sound()
                self._logger.info("Break finished, back to work (stopped)")
            elif effect is Effect.SCHEDULE_BREAK:
                if count is None:
                    count = self.counter.today_count()
                self._grace_job = self._schedule(
                    GRACE_DELAY_MS, lambda c=count: self._finish_grace(c)
                )

    def _finish_grace(self, today_count: int) -> None:
        self._grace_job = None
        if self.engine.begin_break(today_count):
            self._logger.info(f"Break auto-started mode={self.state.mode.name} count={today_count}")
            self._notify()

    def _drop_grace(self) -> None:
        if not self.engine.awaiting_break:
            return
        self._logger.info("Pending break cancelled by user command")
        if self._grace_job is not None and self._cancel is not None:
            try:
                self._cancel(self._grace_job)
            except Exception:
                self._logger.exception("Cancel of grace follow-up failed")
        self._grace_job = None

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                self._logger.exception("State listener failed")
