"""Focus timer card: the Focus tab.

Layout (top → bottom):
    - Mode selector (Work / Break)
    - ProgressRing (large, centred)
    - Reset + Start/Pause buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QSizePolicy,
    QButtonGroup,
)

from ..timer.engine import TimerEngine, TimerState, Mode
from .progress_ring import ProgressRing, format_clock


STATE_LABELS: dict[TimerState, str] = {
    TimerState.IDLE_WORK:     "READY TO FOCUS",
    TimerState.RUNNING_WORK:  "FOCUS TIME",
    TimerState.IDLE_BREAK:    "BREAK READY",
    TimerState.RUNNING_BREAK: "ON A BREAK",
}


class TimerWidget(QWidget):
    """Renders the engine's countdown and dispatches timer commands."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── mode selector ────────────────────────────────────────────
        mode_row = QHBoxLayout()
        mode_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._work_btn = QPushButton("Work", card)
        self._break_btn = QPushButton("Break", card)
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        for btn in (self._work_btn, self._break_btn):
            btn.setCheckable(True)
            btn.setObjectName("secondaryButton")
            self._mode_group.addButton(btn)
            mode_row.addWidget(btn)
        layout.addLayout(mode_row)

        # ── progress ring ────────────────────────────────────────────
        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(320, 320)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._work_btn.clicked.connect(lambda: self._engine.select_mode(Mode.WORK))
        self._break_btn.clicked.connect(lambda: self._engine.select_mode(Mode.BREAK))

        self._engine.ticked.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle(self) -> None:
        """Start when idle, pause when running."""
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_state_changed(self, state: TimerState) -> None:
        self._start_pause_btn.setText("Pause" if self._engine.is_running else "Start")

        is_work = self._engine.mode == Mode.WORK
        self._work_btn.setChecked(is_work)
        self._break_btn.setChecked(not is_work)

        self._ring.set_state_label(STATE_LABELS[state])
        self._ring.apply_state(state)
        self._refresh_display(self._engine.remaining)

    def _refresh_display(self, remaining: int) -> None:
        self._ring.set_time_text(format_clock(remaining))
        self._ring.set_percent(self._engine.progress)
