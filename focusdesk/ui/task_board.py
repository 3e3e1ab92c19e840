"""Task board: the Tasks tab.

Shows tasks either as a three-column kanban (To Do / In Progress /
Completed) or as a single list.  Each card carries a status selector;
changing it patches the task in the store and re-renders.
"""

from __future__ import annotations

import logging
from datetime import date

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QPushButton,
    QComboBox, QLineEdit, QScrollArea,
)

from ..database import store
from ..database.store import StoreError
from .styles import PALETTE, PRIORITY_COLORS

logger = logging.getLogger(__name__)

STATUS_COLUMNS: tuple[tuple[str, str], ...] = (
    ("todo", "To Do"),
    ("in-progress", "In Progress"),
    ("done", "Completed"),
)
PRIORITIES = ("low", "medium", "high")
VIEW_MODES = ("kanban", "list")


def is_overdue(due_date: str | None, today: date | None = None) -> bool:
    """True when *due_date* (YYYY-MM-DD) is strictly before today."""
    if not due_date:
        return False
    try:
        due = date.fromisoformat(due_date)
    except ValueError:
        return False
    return due < (today or date.today())


class TaskCard(QFrame):
    """One task: title, priority, due date and a status selector."""

    status_change_requested = pyqtSignal(int, str)

    def __init__(self, task: dict, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")
        self._task_id = task["id"]

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(6)

        title = QLabel(task.get("title") or "Untitled", self)
        title.setWordWrap(True)
        title.setStyleSheet("font-weight: 600; background: transparent;")
        layout.addWidget(title)

        if task.get("description"):
            desc = QLabel(task["description"], self)
            desc.setObjectName("muted")
            desc.setWordWrap(True)
            layout.addWidget(desc)

        meta = QHBoxLayout()
        priority = task.get("priority") or "medium"
        self._priority_label = QLabel(priority.upper(), self)
        self._priority_label.setStyleSheet(
            f"font-size: 11px; font-weight: 700; background: transparent;"
            f"color: {PRIORITY_COLORS.get(priority, PALETTE['text_muted'])};"
        )
        meta.addWidget(self._priority_label)
        meta.addStretch()

        due = task.get("due_date")
        self.overdue = is_overdue(due)
        if due:
            due_label = QLabel(("Overdue: " if self.overdue else "Due ") + due, self)
            color = PALETTE["danger"] if self.overdue else PALETTE["text_muted"]
            due_label.setStyleSheet(f"font-size: 11px; color: {color}; background: transparent;")
            meta.addWidget(due_label)
        layout.addLayout(meta)

        self.status_combo = QComboBox(self)
        for key, label in STATUS_COLUMNS:
            self.status_combo.addItem(label, key)
        index = self.status_combo.findData(task.get("status") or "todo")
        self.status_combo.setCurrentIndex(max(0, index))
        self.status_combo.currentIndexChanged.connect(self._on_status_index)
        layout.addWidget(self.status_combo)

    @property
    def task_id(self) -> int:
        return self._task_id

    def _on_status_index(self, index: int) -> None:
        self.status_change_requested.emit(self._task_id, self.status_combo.itemData(index))


class TaskBoard(QWidget):
    """Kanban/list view over ``store.list_tasks()`` with an add form."""

    error = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._view_mode: str = "kanban"
        self._tasks: list[dict] = []
        self._cards: dict[int, TaskCard] = {}
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 8, 0, 0)
        root.setSpacing(10)

        # ── add form ─────────────────────────────────────────────────
        form = QHBoxLayout()
        self._title_input = QLineEdit(self)
        self._title_input.setPlaceholderText("New task title")
        self._title_input.returnPressed.connect(self.add_task)
        self._priority_combo = QComboBox(self)
        for p in PRIORITIES:
            self._priority_combo.addItem(p.capitalize(), p)
        self._priority_combo.setCurrentIndex(PRIORITIES.index("medium"))
        self._due_input = QLineEdit(self)
        self._due_input.setPlaceholderText("Due (YYYY-MM-DD)")
        self._due_input.setMaximumWidth(160)
        add_btn = QPushButton("Add Task", self)
        add_btn.clicked.connect(self.add_task)

        form.addWidget(self._title_input, 1)
        form.addWidget(self._priority_combo)
        form.addWidget(self._due_input)
        form.addWidget(add_btn)
        root.addLayout(form)

        # ── view toggle ──────────────────────────────────────────────
        toggle = QHBoxLayout()
        toggle.addStretch()
        self._view_btn = QPushButton("List view", self)
        self._view_btn.setObjectName("secondaryButton")
        self._view_btn.clicked.connect(self.toggle_view_mode)
        toggle.addWidget(self._view_btn)
        root.addLayout(toggle)

        # ── scrollable content ───────────────────────────────────────
        self._scroll = QScrollArea(self)
        self._scroll.setWidgetResizable(True)
        root.addWidget(self._scroll, 1)
        self._content: QWidget | None = None

    # ── public API ────────────────────────────────────────────────────

    @property
    def view_mode(self) -> str:
        return self._view_mode

    @property
    def tasks(self) -> list[dict]:
        return list(self._tasks)

    def card_for(self, task_id: int) -> TaskCard | None:
        return self._cards.get(task_id)

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"unknown view mode: {mode!r}")
        self._view_mode = mode
        self._view_btn.setText("List view" if mode == "kanban" else "Kanban view")
        self._render()

    def toggle_view_mode(self) -> None:
        self.set_view_mode("list" if self._view_mode == "kanban" else "kanban")

    def refresh(self) -> None:
        """Reload tasks from the store and re-render."""
        try:
            self._tasks = store.list_tasks()
        except StoreError as exc:
            logger.warning("Could not load tasks: %s", exc)
            self.error.emit("Could not load tasks.")
            return
        self._render()

    def add_task(self) -> None:
        title = self._title_input.text().strip()
        if not title:
            return
        fields = {
            "title": title,
            "priority": self._priority_combo.currentData(),
            "status": "todo",
            "due_date": self._due_input.text().strip() or None,
        }
        try:
            store.create_task(fields)
        except StoreError as exc:
            logger.warning("Could not create task: %s", exc)
            self.error.emit("Could not create task.")
            return
        self._title_input.clear()
        self._due_input.clear()
        self.refresh()

    def set_status(self, task_id: int, status: str) -> None:
        try:
            found = store.update_task(task_id, {"status": status})
        except StoreError as exc:
            logger.warning("Could not update task %s: %s", task_id, exc)
            self.error.emit("Could not update task.")
            return
        if not found:
            self.error.emit("That task no longer exists.")
        self.refresh()

    # ── rendering ─────────────────────────────────────────────────────

    def _render(self) -> None:
        self._cards.clear()
        content = QWidget()
        if self._view_mode == "kanban":
            self._render_kanban(content)
        else:
            self._render_list(content)
        # A card may be mid-signal (status change), so defer its deletion.
        old = self._scroll.takeWidget()
        if old is not None:
            old.deleteLater()
        self._scroll.setWidget(content)
        self._content = content

    def _render_kanban(self, content: QWidget) -> None:
        columns = QHBoxLayout(content)
        columns.setSpacing(12)
        for key, label in STATUS_COLUMNS:
            column_tasks = [t for t in self._tasks if (t.get("status") or "todo") == key]
            col = QVBoxLayout()
            col.setSpacing(8)
            header = QLabel(f"{label} ({len(column_tasks)})", content)
            header.setObjectName("columnTitle")
            col.addWidget(header)
            for task in column_tasks:
                col.addWidget(self._make_card(task, content))
            col.addStretch()
            columns.addLayout(col, 1)

    def _render_list(self, content: QWidget) -> None:
        rows = QVBoxLayout(content)
        rows.setSpacing(8)
        if not self._tasks:
            empty = QLabel("No tasks yet.", content)
            empty.setObjectName("muted")
            empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
            rows.addWidget(empty)
        for task in self._tasks:
            rows.addWidget(self._make_card(task, content))
        rows.addStretch()

    def _make_card(self, task: dict, parent: QWidget) -> TaskCard:
        card = TaskCard(task, parent)
        card.status_change_requested.connect(self.set_status)
        self._cards[card.task_id] = card
        return card
