"""Main application window for FocusDesk."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QTabWidget, QStatusBar,
)

from .api.assistant import Assistant
from .settings import Settings, load_settings
from .timer.engine import TimerEngine, TimerState, Mode
from .timer.recorder import SessionRecorder
from .ui.chat_panel import ChatPanel
from .ui.dashboard import Dashboard
from .ui.lecture_panel import LecturePanel
from .ui.notice_toast import NoticeToast
from .ui.progress_ring import format_clock
from .ui.styles import build_stylesheet
from .ui.task_board import TaskBoard
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)

_STATUS_TEXT: dict[TimerState, str] = {
    TimerState.IDLE_WORK:     "Ready to focus",
    TimerState.RUNNING_WORK:  "Focusing",
    TimerState.IDLE_BREAK:    "Break ready",
    TimerState.RUNNING_BREAK: "On a break",
}


class FocusDeskApp(QMainWindow):
    """Main application window: Focus / Tasks / Lectures / Assistant tabs."""

    def __init__(
        self,
        settings: Settings | None = None,
        assistant: Assistant | None = None,
    ) -> None:
        super().__init__()
        self._settings: Settings = settings or load_settings()
        self.setWindowTitle("FocusDesk")
        self.setMinimumSize(720, 640)
        self.resize(self._settings.window_width, self._settings.window_height)
        self.setStyleSheet(build_stylesheet())

        # ── engine + recorder ─────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self,
            durations={
                Mode.WORK: self._settings.work_duration,
                Mode.BREAK: self._settings.break_duration,
            },
        )
        self._recorder = SessionRecorder(self)
        self._recorder.attach(self._timer_engine)

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)

        self._tabs = QTabWidget(central)
        root_layout.addWidget(self._tabs)

        self._dashboard = Dashboard(self._tabs)
        self._tabs.addTab(self._dashboard, "Dashboard")

        self._timer_widget = TimerWidget(self._timer_engine, self._tabs)
        self._tabs.addTab(self._timer_widget, "Focus")

        self._task_board = TaskBoard(self._tabs)
        self._tabs.addTab(self._task_board, "Tasks")

        self._lecture_panel = LecturePanel(self._tabs)
        self._tabs.addTab(self._lecture_panel, "Lectures")

        self._chat_panel = ChatPanel(
            assistant or Assistant.from_settings(self._settings), self._tabs,
        )
        self._tabs.addTab(self._chat_panel, "Assistant")

        # Toast overlays the tab content
        self._toast = NoticeToast(central)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready to focus!")

        # ── wire signals ──────────────────────────────────────────────
        self._timer_engine.state_changed.connect(self._on_state_changed)
        self._timer_engine.ticked.connect(self._on_tick)
        self._timer_engine.notification.connect(self._on_notification)
        self._recorder.record_failed.connect(self._on_error)
        self._task_board.error.connect(self._on_error)
        self._lecture_panel.error.connect(self._on_error)
        self._dashboard.error.connect(self._on_error)
        self._recorder.recorded.connect(lambda _id: self._dashboard.refresh())
        self._tabs.currentChanged.connect(self._on_tab_changed)

        self._build_menu_bar()
        self._setup_shortcuts()

        self._dashboard.refresh()
        self._task_board.refresh()
        self._lecture_panel.refresh()

    # ── accessors (used by the entry point and tests) ─────────────────

    @property
    def timer_engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def recorder(self) -> SessionRecorder:
        return self._recorder

    @property
    def toast(self) -> NoticeToast:
        return self._toast

    @property
    def dashboard(self) -> Dashboard:
        return self._dashboard

    @property
    def settings(self) -> Settings:
        return self._settings

    # ── menu + settings ───────────────────────────────────────────────

    def _build_menu_bar(self) -> None:
        prefs_action = QAction("Preferences…", self)
        prefs_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self._open_settings)

        quit_action = QAction("Quit FocusDesk", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)

        app_menu = self.menuBar().addMenu("FocusDesk")
        app_menu.addAction(prefs_action)
        app_menu.addSeparator()
        app_menu.addAction(quit_action)

    def _open_settings(self) -> None:
        """Open the preferences dialog and apply any changes."""
        from .ui.settings_dialog import SettingsDialog

        SettingsDialog(self._settings, parent=self).exec()
        self.apply_settings()

    def apply_settings(self) -> None:
        """Push the current Settings into the timer.

        A running countdown keeps its length; the new durations apply
        the next time a mode is loaded.
        """
        s = self._settings
        self._timer_engine.set_duration(Mode.WORK, s.work_duration)
        self._timer_engine.set_duration(Mode.BREAK, s.break_duration)

    # ── shortcuts ─────────────────────────────────────────────────────

    def _setup_shortcuts(self) -> None:
        QShortcut(QKeySequence(Qt.Key.Key_Space), self, activated=self._on_space)
        QShortcut(QKeySequence("Ctrl+R"), self, activated=self._timer_engine.reset)

    def _on_space(self) -> None:
        """Space toggles the timer while the Focus tab is showing."""
        if self._tabs.currentWidget() is self._timer_widget:
            self._timer_widget.toggle()

    # ── slots ─────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        if not self._timer_engine.is_running:
            self.setWindowTitle("FocusDesk")
        remaining = format_clock(self._timer_engine.remaining)
        self._status_bar.showMessage(f"{_STATUS_TEXT[state]} · {remaining}")

    def _on_tick(self, remaining: int) -> None:
        if self._timer_engine.is_running:
            state = self._timer_engine.state
            self.setWindowTitle(f"{format_clock(remaining)} · FocusDesk")
            self._status_bar.showMessage(f"{_STATUS_TEXT[state]} · {format_clock(remaining)}")

    def _on_notification(self, message: str) -> None:
        self.setWindowTitle("FocusDesk")
        if self._settings.notifications_enabled:
            self._toast.show_message(message)
        self._status_bar.showMessage(message, 5000)

    def _on_error(self, message: str) -> None:
        self._toast.show_error(message)
        self._status_bar.showMessage(message, 8000)

    def _on_tab_changed(self, index: int) -> None:
        widget = self._tabs.widget(index)
        if widget is self._dashboard:
            self._dashboard.refresh()
        elif widget is self._task_board:
            self._task_board.refresh()
        elif widget is self._lecture_panel:
            self._lecture_panel.refresh()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer_engine.pause()
        super().closeEvent(event)
