"""Dashboard: the at-a-glance overview tab.

Sections
--------
1. **Stat cards**: total, pending and completed tasks, lecture attendance
2. **Focus this week**: QPainter bar chart of focus minutes per day
3. **Upcoming lectures**: the next three lectures on or after today
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from PyQt6.QtCore import Qt, QRect, pyqtSignal
from PyQt6.QtGui import QPainter, QColor, QPen, QFont
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QGridLayout,
)

from ..database import store
from ..database.store import StoreError
from .styles import PALETTE

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 3


# ═══════════════════════════════════════════════════════════════════════════
#  DATA
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class DashboardStats:
    """Snapshot of everything the dashboard shows."""

    total_tasks: int = 0
    pending_tasks: int = 0
    completed_tasks: int = 0
    attendance_percent: int = 0
    weekly: list[tuple[str, int, bool]] = field(default_factory=list)
    weekly_total_minutes: int = 0
    upcoming: list[dict] = field(default_factory=list)


def load_dashboard(today: date | None = None) -> DashboardStats:
    """Collect dashboard figures from the store.

    Attendance is present lectures over all lectures, rounded to a whole
    percent (0 with no lectures).  Raises ``StoreError`` if any query fails.
    """
    today = today or date.today()
    tasks = store.list_tasks()
    lectures = store.list_lectures()
    focus = store.analytics(today=today)["focus_stats"]

    stats = DashboardStats()
    stats.total_tasks = len(tasks)
    stats.completed_tasks = sum(1 for t in tasks if t.get("status") == "done")
    stats.pending_tasks = stats.total_tasks - stats.completed_tasks

    if lectures:
        present = sum(1 for l in lectures if l.get("attendance_status") == "present")
        stats.attendance_percent = round(present * 100 / len(lectures))

    for day, minutes in focus.items():
        d = date.fromisoformat(day)
        stats.weekly.append((d.strftime("%a"), minutes, d == today))
    stats.weekly_total_minutes = sum(focus.values())

    # Undated lectures sort after dated ones
    ahead = [l for l in lectures if not l.get("date") or l["date"] >= today.isoformat()]
    ahead.sort(key=lambda l: (l.get("date") is None, l.get("date") or "", l["id"]))
    stats.upcoming = ahead[:UPCOMING_LIMIT]
    return stats


# ═══════════════════════════════════════════════════════════════════════════
#  WEEKLY BAR CHART
# ═══════════════════════════════════════════════════════════════════════════


class WeeklyBarChart(QWidget):
    """Focus minutes per day for the last 7 days, today highlighted."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._data: list[tuple[str, int, bool]] = []
        self.setMinimumHeight(180)

    @property
    def data(self) -> list[tuple[str, int, bool]]:
        return list(self._data)

    def set_data(self, data: list[tuple[str, int, bool]]) -> None:
        """data: list of (label, minutes, is_today) tuples."""
        self._data = data
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        if not self._data:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w, h = self.width(), self.height()
        left, right, top, bottom = 8, 8, 20, 28
        chart_w = w - left - right
        chart_h = h - top - bottom
        max_val = max((v for _, v, _ in self._data), default=1) or 1

        grid_pen = QPen(QColor(PALETTE["border"]))
        grid_pen.setStyle(Qt.PenStyle.DotLine)
        grid_pen.setWidthF(0.5)
        painter.setPen(grid_pen)
        for frac in (0.25, 0.50, 0.75):
            y = int(top + chart_h * (1.0 - frac))
            painter.drawLine(left, y, w - right, y)

        small_font = QFont()
        small_font.setPixelSize(9)
        painter.setFont(small_font)
        painter.setPen(QColor(PALETTE["text_muted"]))
        painter.drawText(
            QRect(left, 2, 60, 16),
            Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
            f"{max_val} min",
        )

        spacing = chart_w / len(self._data)
        bar_width = int(spacing * 0.55)
        label_font = QFont()
        label_font.setPixelSize(11)

        for i, (label, value, is_today) in enumerate(self._data):
            cx = int(left + spacing * (i + 0.5))
            bar_x = cx - bar_width // 2
            bar_h = int((value / max_val) * chart_h) if value > 0 else 0

            if bar_h > 0:
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QColor(PALETTE["accent2" if is_today else "accent"]))
                painter.drawRoundedRect(bar_x, top + chart_h - bar_h, bar_width, bar_h, 4, 4)

            painter.setPen(QColor(PALETTE["text" if is_today else "text_muted"]))
            painter.setFont(label_font)
            painter.drawText(
                QRect(cx - 20, top + chart_h + 4, 40, 20),
                Qt.AlignmentFlag.AlignCenter,
                label,
            )

        painter.end()


# ═══════════════════════════════════════════════════════════════════════════
#  STAT CARD
# ═══════════════════════════════════════════════════════════════════════════


class StatCard(QFrame):
    """A small value-over-title card."""

    def __init__(self, title: str, value: str = "0", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(2)

        self._value_lbl = QLabel(value, self)
        self._value_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._value_lbl.setStyleSheet("font-size: 22px; font-weight: 700; background: transparent;")

        title_lbl = QLabel(title, self)
        title_lbl.setObjectName("muted")
        title_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout.addWidget(self._value_lbl)
        layout.addWidget(title_lbl)

    @property
    def value(self) -> str:
        return self._value_lbl.text()

    def set_value(self, value: str) -> None:
        self._value_lbl.setText(value)


# ═══════════════════════════════════════════════════════════════════════════
#  DASHBOARD
# ═══════════════════════════════════════════════════════════════════════════


class Dashboard(QWidget):
    """Overview tab: stat cards, weekly focus chart, upcoming lectures."""

    error = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._stats = DashboardStats()
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 8, 0, 0)
        root.setSpacing(14)

        self._date_lbl = QLabel("", self)
        self._date_lbl.setObjectName("muted")
        root.addWidget(self._date_lbl)

        grid = QGridLayout()
        grid.setSpacing(10)
        self._card_total = StatCard("Total Tasks", parent=self)
        self._card_pending = StatCard("Tasks Pending", parent=self)
        self._card_done = StatCard("Tasks Completed", parent=self)
        self._card_attendance = StatCard("Lecture Attendance", "0%", parent=self)
        for col, card in enumerate(
            (self._card_total, self._card_pending, self._card_done, self._card_attendance)
        ):
            grid.addWidget(card, 0, col)
        root.addLayout(grid)

        lower = QHBoxLayout()
        lower.setSpacing(12)

        chart_card = QFrame(self)
        chart_card.setObjectName("card")
        chart_layout = QVBoxLayout(chart_card)
        header = QHBoxLayout()
        title = QLabel("Focus this week", chart_card)
        title.setObjectName("columnTitle")
        self._weekly_total_lbl = QLabel("", chart_card)
        self._weekly_total_lbl.setObjectName("muted")
        header.addWidget(title)
        header.addStretch()
        header.addWidget(self._weekly_total_lbl)
        chart_layout.addLayout(header)
        self._chart = WeeklyBarChart(chart_card)
        chart_layout.addWidget(self._chart)
        lower.addWidget(chart_card, 2)

        upcoming_card = QFrame(self)
        upcoming_card.setObjectName("card")
        self._upcoming_layout = QVBoxLayout(upcoming_card)
        up_title = QLabel("Upcoming Lectures", upcoming_card)
        up_title.setObjectName("columnTitle")
        self._upcoming_layout.addWidget(up_title)
        self._upcoming_labels: list[QLabel] = []
        lower.addWidget(upcoming_card, 1)

        root.addLayout(lower)
        root.addStretch()

    # ── public API ────────────────────────────────────────────────────

    @property
    def stats(self) -> DashboardStats:
        return self._stats

    @property
    def upcoming_text(self) -> list[str]:
        return [lbl.text() for lbl in self._upcoming_labels]

    def refresh(self) -> None:
        """Pull fresh figures from the store and update every section."""
        try:
            stats = load_dashboard()
        except StoreError as exc:
            logger.warning("Could not load dashboard: %s", exc)
            self.error.emit("Could not load dashboard.")
            return
        self._stats = stats

        self._date_lbl.setText(date.today().strftime("%B %d, %Y"))
        self._card_total.set_value(str(stats.total_tasks))
        self._card_pending.set_value(str(stats.pending_tasks))
        self._card_done.set_value(str(stats.completed_tasks))
        self._card_attendance.set_value(f"{stats.attendance_percent}%")

        self._chart.set_data(stats.weekly)
        self._weekly_total_lbl.setText(f"{stats.weekly_total_minutes} min total")

        for lbl in self._upcoming_labels:
            self._upcoming_layout.removeWidget(lbl)
            lbl.deleteLater()
        self._upcoming_labels = []
        if not stats.upcoming:
            self._add_upcoming("No lectures scheduled.")
        for lecture in stats.upcoming:
            text = lecture.get("subject") or ""
            if lecture.get("topic"):
                text += f": {lecture['topic']}"
            if lecture.get("date"):
                text += f" ({lecture['date']})"
            self._add_upcoming(text)

    def _add_upcoming(self, text: str) -> None:
        lbl = QLabel(text, self)
        lbl.setWordWrap(True)
        lbl.setStyleSheet("background: transparent;")
        self._upcoming_layout.addWidget(lbl)
        self._upcoming_labels.append(lbl)
