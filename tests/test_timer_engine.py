"""Tests for the timer state machine."""

import pytest

from pomodoro_calendar.timer_engine import (
    Effect,
    Mode,
    TimerEngine,
    TimerState,
    next_break_mode,
)


def run_to_zero(engine: TimerEngine) -> None:
    for _ in range(engine.state.remaining_sec):
        assert engine.tick() == []


def test_modes_have_positive_fixed_durations():
    for mode in Mode:
        assert mode.duration > 0
    assert Mode.WORK.duration == 25 * 60
    assert Mode.SHORT_BREAK.duration == 5 * 60
    assert Mode.LONG_BREAK.duration == 15 * 60


def test_initial_state_is_stopped_work():
    engine = TimerEngine()
    assert engine.state == TimerState(Mode.WORK, Mode.WORK.duration, False)


@pytest.mark.parametrize("mode", list(Mode))
def test_select_mode_resets_remaining_and_stops(mode):
    engine = TimerEngine()
    engine.start()
    engine.tick()
    engine.select_mode(mode)
    assert engine.state.mode is mode
    assert engine.state.remaining_sec == mode.duration
    assert engine.state.is_running is False


def test_start_and_stop_are_idempotent():
    engine = TimerEngine()
    engine.start()
    first = engine.state
    engine.start()
    assert engine.state is first

    engine.stop()
    stopped = engine.state
    engine.stop()
    assert engine.state is stopped
    assert stopped.is_running is False


def test_tick_without_running_does_nothing():
    engine = TimerEngine()
    assert engine.tick() == []
    assert engine.state.remaining_sec == Mode.WORK.duration


def test_tick_decrements_by_one_second():
    engine = TimerEngine()
    engine.start()
    engine.tick()
    engine.tick()
    assert engine.state.remaining_sec == Mode.WORK.duration - 2


def test_reset_restores_full_duration_and_stops():
    engine = TimerEngine()
    engine.select_mode(Mode.SHORT_BREAK)
    engine.start()
    for _ in range(10):
        engine.tick()
    engine.reset()
    assert engine.state == TimerState.fresh(Mode.SHORT_BREAK)


def test_work_completion_needs_one_tick_after_zero():
    engine = TimerEngine()
    engine.start()
    for _ in range(Mode.WORK.duration - 1):
        engine.tick()
    assert engine.state.remaining_sec == 1

    assert engine.tick() == []
    assert engine.state.remaining_sec == 0

    effects = engine.tick()
    assert effects == [
        Effect.RECORD_COMPLETION,
        Effect.PLAY_WORK_END_SOUND,
        Effect.SCHEDULE_BREAK,
    ]
    assert engine.awaiting_break is True


def test_ticks_during_grace_delay_have_no_effect():
    engine = TimerEngine()
    engine.start()
    run_to_zero(engine)
    engine.tick()
    assert engine.tick() == []
    assert engine.tick() == []
    assert engine.state.mode is Mode.WORK
    assert engine.state.remaining_sec == 0


@pytest.mark.parametrize(
    "count, expected",
    [
        (1, Mode.SHORT_BREAK),
        (3, Mode.SHORT_BREAK),
        (4, Mode.LONG_BREAK),
        (5, Mode.SHORT_BREAK),
        (8, Mode.LONG_BREAK),
        (0, Mode.SHORT_BREAK),
    ],
)
def test_next_break_mode_uses_multiple_of_four(count, expected):
    assert next_break_mode(count) is expected


def test_begin_break_starts_the_break_immediately():
    engine = TimerEngine()
    engine.start()
    run_to_zero(engine)
    engine.tick()

    assert engine.begin_break(4) is True
    assert engine.state == TimerState(Mode.LONG_BREAK, Mode.LONG_BREAK.duration, True)
    assert engine.awaiting_break is False


def test_begin_break_is_ignored_after_user_cancels():
    engine = TimerEngine()
    engine.start()
    run_to_zero(engine)
    engine.tick()
    engine.stop()

    assert engine.begin_break(1) is False
    assert engine.state.mode is Mode.WORK
    assert engine.state.is_running is False


def test_begin_break_without_pending_completion_is_noop():
    engine = TimerEngine()
    assert engine.begin_break(4) is False
    assert engine.state == TimerState.fresh(Mode.WORK)


@pytest.mark.parametrize("mode", [Mode.SHORT_BREAK, Mode.LONG_BREAK])
def test_break_completion_returns_to_stopped_work(mode):
    engine = TimerEngine()
    engine.select_mode(mode)
    engine.start()
    run_to_zero(engine)

    effects = engine.tick()

    assert effects == [Effect.PLAY_BREAK_END_SOUND]
    assert engine.state == TimerState.fresh(Mode.WORK)
