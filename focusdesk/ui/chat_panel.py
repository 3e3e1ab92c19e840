"""Assistant chat: the Assistant tab.

Messages are sent on a ``QThreadPool`` worker so the network round-trip
never blocks the event loop (and therefore never delays timer ticks).
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QPushButton, QTextEdit,
)

from ..api.assistant import Assistant, AssistantError

logger = logging.getLogger(__name__)

GREETING = "Hello! I'm your FocusDesk assistant. How can I help you plan today?"
FAILURE_TEXT = "Sorry, I'm having trouble connecting right now."


class _ReplySignals(QObject):
    finished = pyqtSignal(str)
    failed = pyqtSignal(str)


class _ReplyJob(QRunnable):
    def __init__(self, assistant: Assistant, message: str, context: dict) -> None:
        super().__init__()
        self.signals = _ReplySignals()
        self._assistant = assistant
        self._message = message
        self._context = context

    def run(self) -> None:
        try:
            text = self._assistant.reply(self._message, self._context)
        except AssistantError as exc:
            logger.warning("Assistant reply failed: %s", exc)
            self.signals.failed.emit(str(exc))
            return
        self.signals.finished.emit(text)


class ChatPanel(QWidget):
    """Transcript plus an input line wired to an :class:`Assistant`."""

    def __init__(
        self,
        assistant: Assistant,
        parent: QWidget | None = None,
        *,
        pool: QThreadPool | None = None,
    ) -> None:
        super().__init__(parent)
        self._assistant = assistant
        self._pool = pool or QThreadPool.globalInstance()
        self._messages: list[tuple[str, str]] = []
        self._pending: _ReplyJob | None = None
        self._build_ui()
        self._append("ai", GREETING)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)

        self._transcript = QTextEdit(self)
        self._transcript.setReadOnly(True)
        layout.addWidget(self._transcript, 1)

        row = QHBoxLayout()
        self._input = QLineEdit(self)
        self._input.setPlaceholderText("Ask about your schedule, tasks or focus...")
        self._input.returnPressed.connect(self.send)
        self._send_btn = QPushButton("Send", self)
        self._send_btn.clicked.connect(self.send)
        row.addWidget(self._input, 1)
        row.addWidget(self._send_btn)
        layout.addLayout(row)

    # ── public API ────────────────────────────────────────────────────

    @property
    def messages(self) -> list[tuple[str, str]]:
        return list(self._messages)

    @property
    def is_waiting(self) -> bool:
        return self._pending is not None

    def send(self, context: dict | None = None) -> None:
        text = self._input.text().strip()
        if not text or self._pending is not None:
            return
        self._input.clear()
        self._append("user", text)
        self._set_waiting(True)

        job = _ReplyJob(self._assistant, text, context if isinstance(context, dict) else {})
        job.signals.finished.connect(self._on_reply)
        job.signals.failed.connect(self._on_failure)
        self._pending = job
        self._pool.start(job)

    # ── slots ─────────────────────────────────────────────────────────

    def _on_reply(self, text: str) -> None:
        self._append("ai", text)
        self._set_waiting(False)

    def _on_failure(self, _message: str) -> None:
        self._append("ai", FAILURE_TEXT)
        self._set_waiting(False)

    # ── internal ──────────────────────────────────────────────────────

    def _set_waiting(self, waiting: bool) -> None:
        if not waiting:
            self._pending = None
        self._send_btn.setEnabled(not waiting)
        self._send_btn.setText("..." if waiting else "Send")

    def _append(self, role: str, text: str) -> None:
        self._messages.append((role, text))
        who = "You" if role == "user" else "Assistant"
        self._transcript.append(f"<b>{who}:</b> {text.replace('<', '&lt;')}")
