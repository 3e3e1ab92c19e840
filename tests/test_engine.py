"""Tests for the FocusDesk timer engine.

Covers: state transitions, countdown, the one-shot completion event,
auto-advance between WORK and BREAK, mode selection, tick-source
cancellation, invalid modes, and custom durations.
"""

import pytest

from focusdesk.timer.engine import (
    TimerEngine, TimerState, TimerSnapshot, Mode, InvalidModeError,
    DEFAULT_DURATIONS, COMPLETION_MESSAGES, MIN_DURATION,
)

from helpers import SignalCollector, complete_session


# ═══════════════════════════════════════════════════════════════════════════
#  STATE TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestStateTransitions:

    def test_initial_state_is_idle_work(self, engine):
        assert engine.state == TimerState.IDLE_WORK
        assert engine.mode == Mode.WORK
        assert engine.remaining == 1500
        assert engine.total_duration == 1500
        assert not engine.is_running

    def test_initial_mode_can_be_break(self, break_engine):
        assert break_engine.state == TimerState.IDLE_BREAK
        assert break_engine.remaining == 300

    def test_start_transitions_to_running(self, engine):
        engine.start()
        assert engine.state == TimerState.RUNNING_WORK
        assert engine.is_running

    def test_start_in_break_runs_break(self, break_engine):
        break_engine.start()
        assert break_engine.state == TimerState.RUNNING_BREAK

    def test_pause_keeps_remaining(self, engine):
        engine.start()
        for _ in range(10):
            engine.tick()
        engine.pause()
        assert engine.state == TimerState.IDLE_WORK
        assert engine.remaining == 1490

    def test_start_after_pause_resumes_countdown(self, engine):
        engine.start()
        engine.tick()
        engine.pause()
        engine.start()
        assert engine.state == TimerState.RUNNING_WORK
        assert engine.remaining == 1499

    def test_start_is_noop_when_already_running(self, engine):
        c = SignalCollector()
        engine.start()
        engine.state_changed.connect(c)
        engine.start()
        assert len(c) == 0
        assert engine.state == TimerState.RUNNING_WORK

    def test_pause_is_noop_when_idle(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)
        engine.pause()
        assert len(c) == 0
        assert engine.state == TimerState.IDLE_WORK

    def test_start_is_noop_at_zero(self, engine):
        engine._remaining = 0
        engine.start()
        assert not engine.is_running
        assert not engine._qt_timer.isActive()

    def test_reset_restores_full_duration(self, engine):
        engine.start()
        for _ in range(42):
            engine.tick()
        engine.reset()
        snap = engine.current_state()
        assert snap.remaining_seconds == snap.total_seconds == 1500
        assert snap.running is False

    def test_reset_keeps_current_mode(self, break_engine):
        break_engine.start()
        break_engine.tick()
        break_engine.reset()
        assert break_engine.state == TimerState.IDLE_BREAK
        assert break_engine.remaining == 300

    def test_state_changed_signal_fires_on_transitions(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)

        engine.start()
        assert c.last == TimerState.RUNNING_WORK

        engine.pause()
        assert c.last == TimerState.IDLE_WORK

        engine.select_mode(Mode.BREAK)
        assert c.last == TimerState.IDLE_BREAK


# ═══════════════════════════════════════════════════════════════════════════
#  MODE SELECTION
# ═══════════════════════════════════════════════════════════════════════════


class TestSelectMode:

    @pytest.mark.parametrize("prepare", [
        lambda e: None,
        lambda e: e.start(),
        lambda e: (e.start(), e.tick(), e.pause()),
        lambda e: e.select_mode(Mode.BREAK),
    ])
    def test_select_break_from_any_state(self, engine, prepare):
        prepare(engine)
        engine.select_mode(Mode.BREAK)
        assert engine.current_state() == TimerSnapshot(
            mode=Mode.BREAK, remaining_seconds=300, total_seconds=300, running=False,
        )

    def test_select_work_while_running_break(self, break_engine):
        break_engine.start()
        break_engine._remaining = 100
        assert break_engine.state == TimerState.RUNNING_BREAK

        break_engine.select_mode(Mode.WORK)

        assert break_engine.state == TimerState.IDLE_WORK
        assert break_engine.remaining == 1500
        assert not break_engine.is_running

    def test_select_mode_cancels_tick_source(self, engine):
        engine.start()
        assert engine._qt_timer.isActive()
        engine.select_mode(Mode.BREAK)
        assert not engine._qt_timer.isActive()

    def test_select_mode_accepts_string_values(self, engine):
        engine.select_mode("break")
        assert engine.mode == Mode.BREAK
        engine.select_mode(" WORK ")
        assert engine.mode == Mode.WORK

    @pytest.mark.parametrize("bad", ["long_break", "", None, 3, TimerState.IDLE_WORK])
    def test_invalid_mode_raises_and_leaves_state(self, engine, bad):
        engine.start()
        engine.tick()
        before = engine.current_state()

        with pytest.raises(InvalidModeError):
            engine.select_mode(bad)

        assert engine.current_state() == before
        assert engine._qt_timer.isActive()

    def test_invalid_mode_error_is_value_error(self):
        assert issubclass(InvalidModeError, ValueError)


# ═══════════════════════════════════════════════════════════════════════════
#  TICK / COUNTDOWN
# ═══════════════════════════════════════════════════════════════════════════


class TestCountdown:

    def test_tick_decrements_remaining(self, engine):
        engine.start()
        engine.tick()
        assert engine.remaining == 1499

    def test_ticked_signal_emits_remaining(self, engine):
        c = SignalCollector()
        engine.ticked.connect(c)
        engine.start()
        engine.tick()
        assert c.items == [1499]

    def test_tick_ignored_while_idle(self, engine):
        engine.tick()
        assert engine.remaining == 1500

    def test_stray_tick_after_pause_does_not_mutate(self, engine):
        engine.start()
        engine.tick()
        engine.pause()
        engine.tick()  # late callback from the old schedule
        assert engine.remaining == 1499

    def test_stray_tick_after_reset_does_not_mutate(self, engine):
        engine.start()
        engine.tick()
        engine.reset()
        engine.tick()
        assert engine.remaining == 1500

    def test_remaining_monotonic_and_non_negative(self, engine):
        engine.set_duration(Mode.WORK, 90)
        engine.start()
        seen = []
        while engine.mode == Mode.WORK:
            engine.tick()
            seen.append(engine.remaining)
        work_values = seen[:-1] if seen[-1] != 0 else seen
        assert all(a > b for a, b in zip(work_values, work_values[1:]))
        assert min(seen) >= 0

    def test_progress_starts_at_zero(self, engine):
        assert engine.progress == 0.0

    def test_progress_at_halfway(self, engine):
        engine.set_duration(Mode.WORK, 100)
        engine.start()
        for _ in range(50):
            engine.tick()
        assert engine.progress == pytest.approx(0.5)

    def test_snapshot_progress_bounds(self):
        assert TimerSnapshot(Mode.WORK, 1500, 1500, False).progress == 0.0
        assert TimerSnapshot(Mode.WORK, 0, 1500, False).progress == 1.0
        assert TimerSnapshot(Mode.WORK, 0, 0, False).progress == 0.0


# ═══════════════════════════════════════════════════════════════════════════
#  COMPLETION EVENT
# ═══════════════════════════════════════════════════════════════════════════


class TestCompletion:

    def test_full_work_session_fires_once_and_advances(self, engine):
        c = SignalCollector()
        engine.session_completed.connect(c)

        engine.start()
        for _ in range(1500):
            engine.tick()

        assert c.items == [(25, Mode.WORK)]
        assert engine.state == TimerState.IDLE_BREAK
        assert engine.remaining == 300

    def test_full_break_session_advances_to_work(self, break_engine):
        c = SignalCollector()
        break_engine.session_completed.connect(c)

        break_engine.start()
        for _ in range(300):
            break_engine.tick()

        assert c.items == [(5, Mode.BREAK)]
        assert break_engine.state == TimerState.IDLE_WORK
        assert break_engine.remaining == 1500

    def test_no_duplicate_events_after_completion(self, engine):
        c = SignalCollector()
        engine.session_completed.connect(c)
        complete_session(engine)
        for _ in range(20):
            engine.tick()
        assert len(c) == 1

    def test_no_event_on_extra_ticks_at_zero(self, engine):
        c = SignalCollector()
        engine.session_completed.connect(c)
        engine.start()
        engine._remaining = 0
        engine.tick()
        engine.tick()
        assert len(c) == 0

    def test_completion_cancels_tick_source(self, engine):
        complete_session(engine)
        assert not engine._qt_timer.isActive()
        assert not engine.is_running

    def test_engine_is_idle_while_completion_is_delivered(self, engine):
        seen = []
        engine.session_completed.connect(
            lambda minutes, mode: seen.append(engine.is_running)
        )
        complete_session(engine)
        assert seen == [False]

    def test_notification_follows_completion(self, engine):
        order = []
        engine.session_completed.connect(lambda m, mode: order.append("complete"))
        engine.notification.connect(lambda msg: order.append(msg))

        complete_session(engine)
        assert order == ["complete", COMPLETION_MESSAGES[Mode.WORK]]

        order.clear()
        complete_session(engine)
        assert order == ["complete", COMPLETION_MESSAGES[Mode.BREAK]]

    def test_cycle_alternates_indefinitely(self, engine):
        c = SignalCollector()
        engine.session_completed.connect(c)
        for _ in range(3):
            complete_session(engine)
            complete_session(engine)
        assert [mode for _, mode in c.items] == [Mode.WORK, Mode.BREAK] * 3

    def test_start_after_auto_advance_runs_next_mode(self, engine):
        complete_session(engine)
        engine.start()
        assert engine.state == TimerState.RUNNING_BREAK

    def test_reported_duration_is_nominal(self, engine):
        c = SignalCollector()
        engine.session_completed.connect(c)
        engine.start()
        for _ in range(600):
            engine.tick()
        engine.pause()
        engine.start()
        engine._remaining = 1
        engine.tick()
        assert c.last == (25, Mode.WORK)


# ═══════════════════════════════════════════════════════════════════════════
#  TICK SOURCE
# ═══════════════════════════════════════════════════════════════════════════


class TestTickSource:

    def test_timer_active_only_while_running(self, engine):
        assert not engine._qt_timer.isActive()
        engine.start()
        assert engine._qt_timer.isActive()
        engine.pause()
        assert not engine._qt_timer.isActive()
        engine.start()
        engine.reset()
        assert not engine._qt_timer.isActive()

    def test_one_second_interval(self, engine):
        assert engine._qt_timer.interval() == 1000

    def test_qtimer_drives_tick(self, engine):
        from PyQt6.QtTest import QTest

        engine._qt_timer.setInterval(5)
        engine.start()
        QTest.qWait(100)
        engine.pause()
        assert engine.remaining < 1500
        frozen = engine.remaining
        QTest.qWait(50)
        assert engine.remaining == frozen


# ═══════════════════════════════════════════════════════════════════════════
#  DURATIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestDurations:

    def test_defaults(self):
        assert DEFAULT_DURATIONS == {Mode.WORK: 1500, Mode.BREAK: 300}

    def test_custom_durations(self, qapp):
        eng = TimerEngine(durations={Mode.WORK: 3000, "break": 600})
        assert eng.remaining == 3000
        assert eng.duration_for("break") == 600

    def test_minimum_duration_enforced(self, engine):
        engine.set_duration(Mode.WORK, 5)
        assert engine.duration_for(Mode.WORK) == MIN_DURATION
        assert engine.remaining == MIN_DURATION

    def test_set_duration_while_running_waits(self, engine):
        engine.start()
        engine.tick()
        engine.set_duration(Mode.WORK, 600)
        assert engine.remaining == 1499
        engine.reset()
        assert engine.remaining == 600

    def test_same_duration_keeps_paused_countdown(self, engine):
        c = SignalCollector()
        engine.start()
        engine.tick()
        engine.pause()
        engine.state_changed.connect(c)
        engine.set_duration(Mode.WORK, 1500)
        assert engine.remaining == 1499
        assert len(c) == 0

    def test_custom_work_duration_reports_minutes(self, qapp):
        eng = TimerEngine(durations={Mode.WORK: 50 * 60})
        c = SignalCollector()
        eng.session_completed.connect(c)
        complete_session(eng)
        assert c.last == (50, Mode.WORK)
