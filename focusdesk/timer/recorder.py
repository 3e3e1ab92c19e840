"""Persists finished timer sessions.

The recorder is the only consumer of ``TimerEngine.session_completed``
that writes to storage.  A failed write is logged and reported through
``record_failed``; it never reaches back into the engine, so the timer
keeps cycling even when the database is unavailable.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from ..database.store import StoreError, create_focus_session
from .engine import Mode, TimerEngine

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """A completed session could not be written to the store."""


class SessionRecorder(QObject):
    """Writes ``{duration, type}`` rows for every completed countdown.

    Signals
    -------
    recorded(record_id: int)
        The session was stored.
    record_failed(message: str)
        The session could not be stored; the message is user-facing.
    """

    recorded = pyqtSignal(int)
    record_failed = pyqtSignal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)

    def attach(self, engine: TimerEngine) -> None:
        """Record every completion of *engine*.

        A parentless recorder is adopted by the engine so it lives as
        long as the engine does.
        """
        if self.parent() is None:
            self.setParent(engine)
        engine.session_completed.connect(self.record)

    def record(self, duration_minutes: int, mode: Mode) -> None:
        try:
            record_id = self._persist(duration_minutes, mode)
        except PersistenceError as exc:
            logger.warning("Focus session not saved: %s", exc)
            self.record_failed.emit("Focus session could not be saved.")
            return
        logger.info(
            "Recorded %s session of %d min (id=%s)",
            mode.value, duration_minutes, record_id,
        )
        self.recorded.emit(record_id)

    def _persist(self, duration_minutes: int, mode: Mode) -> int:
        try:
            return create_focus_session(duration_minutes, mode.value)
        except StoreError as exc:
            raise PersistenceError(
                f"{mode.value} session ({duration_minutes} min): {exc}"
            ) from exc
