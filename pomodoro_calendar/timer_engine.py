import enum
from dataclasses import dataclass, replace

from .config import (
    WORK_DURATION_SEC,
    SHORT_BREAK_DURATION_SEC,
    LONG_BREAK_DURATION_SEC,
    LONG_BREAK_EVERY,
)


class Mode(enum.Enum):
    WORK = ("Pomodoro", WORK_DURATION_SEC)
    SHORT_BREAK = ("Short Break", SHORT_BREAK_DURATION_SEC)
    LONG_BREAK = ("Long Break", LONG_BREAK_DURATION_SEC)

    def __init__(self, label: str, duration: int):
        self.label = label
        self.duration = duration


class Effect(enum.Enum):
    RECORD_COMPLETION = "record_completion"
    PLAY_WORK_END_SOUND = "play_work_end_sound"
    PLAY_BREAK_END_SOUND = "play_break_end_sound"
    SCHEDULE_BREAK = "schedule_break"


@dataclass(frozen=True)
class TimerState:
    mode: Mode
    remaining_sec: int
    is_running: bool

    @classmethod
    def fresh(cls, mode: Mode) -> "TimerState":
        return cls(mode=mode, remaining_sec=mode.duration, is_running=False)


def next_break_mode(today_count: int) -> Mode:
    if today_count > 0 and today_count % LONG_BREAK_EVERY == 0:
        return Mode.LONG_BREAK
    return Mode.SHORT_BREAK


class TimerEngine:
    """Countdown state machine over Mode x {running, stopped}.

    Transitions only mutate state. Anything with an outside effect (recording
    a completion, playing a chime, scheduling the post-work grace follow-up)
    is returned from ``tick()`` as a list of ``Effect`` for the host to run
    after the new state is committed.
    """

    def __init__(self, mode: Mode = Mode.WORK):
        self._state = TimerState.fresh(mode)
        self._awaiting_break = False

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def awaiting_break(self) -> bool:
        return self._awaiting_break

    def select_mode(self, mode: Mode) -> None:
        self._awaiting_break = False
        self._state = TimerState.fresh(mode)

    def start(self) -> None:
        if self._state.is_running:
            return
        self._state = replace(self._state, is_running=True)

    def stop(self) -> None:
        if not self._state.is_running:
            return
        self._awaiting_break = False
        self._state = replace(self._state, is_running=False)

    def reset(self) -> None:
        self._awaiting_break = False
        self._state = TimerState.fresh(self._state.mode)

    def tick(self) -> list[Effect]:
        st = self._state
        if not st.is_running or self._awaiting_break:
            return []

        if st.remaining_sec > 0:
            self._state = replace(st, remaining_sec=st.remaining_sec - 1)
            return []

        if st.mode is Mode.WORK:
            # Stays "running" at 00:00 until begin_break() lands.
            self._awaiting_break = True
            return [
                Effect.RECORD_COMPLETION,
                Effect.PLAY_WORK_END_SOUND,
                Effect.SCHEDULE_BREAK,
            ]

        self.select_mode(Mode.WORK)
        return [Effect.PLAY_BREAK_END_SOUND]

    def begin_break(self, today_count: int) -> bool:
        if not self._awaiting_break:
            return False
        self._awaiting_break = False
        self._state = replace(TimerState.fresh(next_break_mode(today_count)), is_running=True)
        return True
