"""Timer package."""

from .engine import (
    TimerEngine,
    TimerSnapshot,
    TimerState,
    Mode,
    InvalidModeError,
    DEFAULT_DURATIONS,
    COMPLETION_MESSAGES,
)
from .recorder import SessionRecorder, PersistenceError

__all__ = [
    "TimerEngine",
    "TimerSnapshot",
    "TimerState",
    "Mode",
    "InvalidModeError",
    "DEFAULT_DURATIONS",
    "COMPLETION_MESSAGES",
    "SessionRecorder",
    "PersistenceError",
]
