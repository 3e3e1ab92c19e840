"""Focus timer state machine for FocusDesk.

States
------
IDLE_WORK       Work countdown loaded, not running.
RUNNING_WORK    Work countdown ticking.
IDLE_BREAK      Break countdown loaded, not running.
RUNNING_BREAK   Break countdown ticking.

Transitions
-----------
IDLE_* → RUNNING_*                 (start)
RUNNING_* → IDLE_*                 (pause, remaining time kept)
Any → IDLE_<mode>                  (reset, full countdown)
Any → IDLE_<m>                     (select_mode(m), full countdown)
RUNNING_WORK → IDLE_BREAK          (countdown reaches 0)
RUNNING_BREAK → IDLE_WORK          (countdown reaches 0)

The machine never terminates; it cycles WORK → BREAK → WORK for as long
as the owning process lives.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


# ── enums ─────────────────────────────────────────────────────────────────


class Mode(Enum):
    WORK = "work"
    BREAK = "break"


class TimerState(Enum):
    IDLE_WORK = "idle_work"
    RUNNING_WORK = "running_work"
    IDLE_BREAK = "idle_break"
    RUNNING_BREAK = "running_break"


class InvalidModeError(ValueError):
    """Raised by ``select_mode`` for anything that is not a :class:`Mode`."""


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATIONS: dict[Mode, int] = {
    Mode.WORK: 25 * 60,
    Mode.BREAK: 5 * 60,
}

MIN_DURATION = 60
TICK_INTERVAL_MS = 1000

NEXT_MODE: dict[Mode, Mode] = {
    Mode.WORK: Mode.BREAK,
    Mode.BREAK: Mode.WORK,
}

COMPLETION_MESSAGES: dict[Mode, str] = {
    Mode.WORK: "Session complete! Take a break.",
    Mode.BREAK: "Break over! Time to focus.",
}

_STATES: dict[tuple[Mode, bool], TimerState] = {
    (Mode.WORK, False): TimerState.IDLE_WORK,
    (Mode.WORK, True): TimerState.RUNNING_WORK,
    (Mode.BREAK, False): TimerState.IDLE_BREAK,
    (Mode.BREAK, True): TimerState.RUNNING_BREAK,
}


def coerce_mode(value: Mode | str) -> Mode:
    """Accept a :class:`Mode` or its string value (``"work"``/``"break"``)."""
    if isinstance(value, Mode):
        return value
    if isinstance(value, str):
        try:
            return Mode(value.strip().lower())
        except ValueError:
            pass
    raise InvalidModeError(f"unknown timer mode: {value!r}")


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the engine returned by ``current_state()``."""

    mode: Mode
    remaining_seconds: int
    total_seconds: int
    running: bool

    @property
    def state(self) -> TimerState:
        return _STATES[(self.mode, self.running)]

    @property
    def progress(self) -> float:
        """0.0 → 1.0 progress through the current countdown."""
        if self.total_seconds <= 0:
            return 0.0
        elapsed = self.total_seconds - self.remaining_seconds
        return max(0.0, min(1.0, elapsed / self.total_seconds))


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based WORK/BREAK countdown with a one-shot completion event.

    Signals
    -------
    ticked(remaining_seconds: int)
        Emitted after every decrement while running.
    state_changed(new_state: TimerState)
        Emitted on every transition (and on reset/select_mode even when
        the state name does not change, so views refresh the clock).
    session_completed(duration_minutes: int, mode: Mode)
        Emitted exactly once when a countdown reaches zero.  The
        duration is the nominal one for the mode, not wall-clock time.
    notification(message: str)
        Non-blocking user notice accompanying the auto-advance.
    """

    ticked = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(int, object)
    notification = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        initial_mode: Mode | str = Mode.WORK,
        durations: dict[Mode, int] | None = None,
    ) -> None:
        super().__init__(parent)

        self._durations: dict[Mode, int] = dict(DEFAULT_DURATIONS)
        for mode, seconds in (durations or {}).items():
            self._durations[coerce_mode(mode)] = max(MIN_DURATION, int(seconds))

        self._mode: Mode = coerce_mode(initial_mode)
        self._total: int = self._durations[self._mode]
        self._remaining: int = self._total
        self._running: bool = False

        # Single tick source; only _schedule() may start it.
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return _STATES[(self._mode, self._running)]

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def total_duration(self) -> int:
        return self._total

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def progress(self) -> float:
        return self.current_state().progress

    def duration_for(self, mode: Mode | str) -> int:
        return self._durations[coerce_mode(mode)]

    def set_duration(self, mode: Mode | str, seconds: int) -> None:
        """Override a mode's duration (minimum 60 s).

        Applies immediately when that mode is loaded and idle; otherwise
        it takes effect the next time the mode is loaded.  Setting the
        current value again is a no-op, so a paused countdown survives.
        """
        mode = coerce_mode(mode)
        seconds = max(MIN_DURATION, int(seconds))
        if self._durations[mode] == seconds:
            return
        self._durations[mode] = seconds
        if not self._running and self._mode == mode:
            self._load(mode)
            self.state_changed.emit(self.state)

    def current_state(self) -> TimerSnapshot:
        return TimerSnapshot(
            mode=self._mode,
            remaining_seconds=self._remaining,
            total_seconds=self._total,
            running=self._running,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin (or continue) counting down.  No-op if running or at 0."""
        if self._running or self._remaining <= 0:
            return
        self._running = True
        self._schedule()
        self.state_changed.emit(self.state)

    def pause(self) -> None:
        """Stop counting down, keeping the remaining time."""
        if not self._running:
            return
        self._cancel()
        self._running = False
        self.state_changed.emit(self.state)

    def reset(self) -> None:
        """Reload the full countdown for the current mode, idle."""
        self._cancel()
        self._load(self._mode)
        self.state_changed.emit(self.state)

    def select_mode(self, mode: Mode | str) -> None:
        """Switch to *mode* idle with a full countdown.

        A running countdown is cancelled, not carried over.
        """
        new_mode = coerce_mode(mode)  # raises before any state change
        self._cancel()
        self._load(new_mode)
        self.state_changed.emit(self.state)

    def tick(self) -> None:
        """Apply one second of countdown.

        Ignored unless running, so a stray callback after pause/reset
        cannot touch ``remaining``.
        """
        if not self._running or self._remaining <= 0:
            return
        self._remaining -= 1
        self.ticked.emit(self._remaining)
        if self._remaining == 0:
            self._finish_session()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _schedule(self) -> None:
        self._cancel()
        self._qt_timer.start()

    def _cancel(self) -> None:
        self._qt_timer.stop()

    def _load(self, mode: Mode) -> None:
        self._running = False
        self._mode = mode
        self._total = self._durations[mode]
        self._remaining = self._total

    def _finish_session(self) -> None:
        self._cancel()
        self._running = False
        completed_mode = self._mode
        minutes = self._total // 60

        self.session_completed.emit(minutes, completed_mode)

        # ── auto-advance to the other mode, idle ──────────────────────
        self._load(NEXT_MODE[completed_mode])
        self.state_changed.emit(self.state)
        self.notification.emit(COMPLETION_MESSAGES[completed_mode])
