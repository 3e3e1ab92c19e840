"""Lecture tracker: the Lectures tab.

Lists lectures (newest first) with Present / Absent buttons that patch
``attendance_status``, plus a small form to schedule a new lecture.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QPushButton,
    QLineEdit, QScrollArea, QSizePolicy,
)

from ..database import store
from ..database.store import StoreError
from .styles import PALETTE

logger = logging.getLogger(__name__)

ATTENDANCE_COLORS: dict[str, str] = {
    "present": PALETTE["success"],
    "absent": PALETTE["danger"],
}


def attendance_rate(lectures: list[dict]) -> float | None:
    """Share of marked lectures that were attended, or None if none marked."""
    marked = [l for l in lectures if l.get("attendance_status") in ATTENDANCE_COLORS]
    if not marked:
        return None
    present = sum(1 for l in marked if l["attendance_status"] == "present")
    return present / len(marked)


class LecturePanel(QWidget):
    """Lecture list with attendance marking."""

    error = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._lectures: list[dict] = []
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 8, 0, 0)
        root.setSpacing(10)

        form = QHBoxLayout()
        self._subject_input = QLineEdit(self)
        self._subject_input.setPlaceholderText("Subject")
        self._topic_input = QLineEdit(self)
        self._topic_input.setPlaceholderText("Topic")
        self._date_input = QLineEdit(self)
        self._date_input.setPlaceholderText("Date (YYYY-MM-DD)")
        self._date_input.setMaximumWidth(170)
        add_btn = QPushButton("Add Lecture", self)
        add_btn.clicked.connect(self.add_lecture)
        form.addWidget(self._subject_input, 1)
        form.addWidget(self._topic_input, 1)
        form.addWidget(self._date_input)
        form.addWidget(add_btn)
        root.addLayout(form)

        self._summary = QLabel("", self)
        self._summary.setObjectName("muted")
        root.addWidget(self._summary)

        self._scroll = QScrollArea(self)
        self._scroll.setWidgetResizable(True)
        root.addWidget(self._scroll, 1)

    # ── public API ────────────────────────────────────────────────────

    @property
    def lectures(self) -> list[dict]:
        return list(self._lectures)

    @property
    def summary_text(self) -> str:
        return self._summary.text()

    def refresh(self) -> None:
        try:
            self._lectures = store.list_lectures()
        except StoreError as exc:
            logger.warning("Could not load lectures: %s", exc)
            self.error.emit("Could not load lectures.")
            return
        self._render()

    def add_lecture(self) -> None:
        subject = self._subject_input.text().strip()
        if not subject:
            return
        fields = {
            "subject": subject,
            "topic": self._topic_input.text().strip() or None,
            "date": self._date_input.text().strip() or None,
        }
        try:
            store.create_lecture(fields)
        except StoreError as exc:
            logger.warning("Could not create lecture: %s", exc)
            self.error.emit("Could not create lecture.")
            return
        for field in (self._subject_input, self._topic_input, self._date_input):
            field.clear()
        self.refresh()

    def mark_attendance(self, lecture_id: int, status: str) -> None:
        try:
            found = store.update_lecture(lecture_id, {"attendance_status": status})
        except StoreError as exc:
            logger.warning("Could not mark lecture %s: %s", lecture_id, exc)
            self.error.emit("Could not update attendance.")
            return
        if not found:
            self.error.emit("That lecture no longer exists.")
        self.refresh()

    # ── rendering ─────────────────────────────────────────────────────

    def _render(self) -> None:
        rate = attendance_rate(self._lectures)
        if rate is None:
            self._summary.setText(f"{len(self._lectures)} lectures")
        else:
            self._summary.setText(
                f"{len(self._lectures)} lectures · {rate:.0%} attendance"
            )

        content = QWidget()
        rows = QVBoxLayout(content)
        rows.setSpacing(8)
        if not self._lectures:
            empty = QLabel("No lectures scheduled.", content)
            empty.setObjectName("muted")
            empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
            rows.addWidget(empty)
        for lecture in self._lectures:
            rows.addWidget(self._make_row(lecture, content))
        rows.addStretch()

        old = self._scroll.takeWidget()
        if old is not None:
            old.deleteLater()
        self._scroll.setWidget(content)

    def _make_row(self, lecture: dict, parent: QWidget) -> QFrame:
        frame = QFrame(parent)
        frame.setObjectName("card")
        row = QHBoxLayout(frame)
        row.setContentsMargins(12, 8, 12, 8)

        text = lecture.get("subject") or ""
        if lecture.get("topic"):
            text += f": {lecture['topic']}"
        label = QLabel(text, frame)
        label.setStyleSheet("background: transparent;")
        label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        row.addWidget(label)

        date_label = QLabel(lecture.get("date") or "", frame)
        date_label.setObjectName("muted")
        row.addWidget(date_label)

        status = lecture.get("attendance_status")
        if status:
            badge = QLabel(status.capitalize(), frame)
            color = ATTENDANCE_COLORS.get(status, PALETTE["text_muted"])
            badge.setStyleSheet(f"color: {color}; font-weight: 700; background: transparent;")
            row.addWidget(badge)

        lecture_id = lecture["id"]
        for value in ("present", "absent"):
            btn = QPushButton(value.capitalize(), frame)
            btn.setObjectName("secondaryButton")
            btn.clicked.connect(
                lambda _checked=False, v=value: self.mark_attendance(lecture_id, v)
            )
            row.addWidget(btn)
        return frame
