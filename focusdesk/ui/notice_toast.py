"""Floating notice shown when a countdown finishes.

Replaces a modal alert: the toast fades in over the window, holds, and
fades out on its own, so nothing waits on the user.

Usage::

    toast = NoticeToast(parent_widget)
    engine.notification.connect(toast.show_message)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer, QPropertyAnimation, QEasingCurve
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QGraphicsOpacityEffect,
)

from .styles import PALETTE, hex_to_rgba


class NoticeToast(QWidget):
    """A notice that fades in, holds, then fades out."""

    DISPLAY_MS = 3500
    FADE_IN_MS = 300
    FADE_OUT_MS = 900

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setFixedWidth(340)
        self.hide()

        self._build_ui()

        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)
        self._opacity.setOpacity(0.0)

        self._fade_anim = QPropertyAnimation(self._opacity, b"opacity", self)

        self._dismiss_timer = QTimer(self)
        self._dismiss_timer.setSingleShot(True)
        self._dismiss_timer.timeout.connect(self._fade_out)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 12, 20, 12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._message_label = QLabel("", self)
        self._message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message_label.setWordWrap(True)
        layout.addWidget(self._message_label)

        self._apply_styles(PALETTE["success"])

    def _apply_styles(self, color: str) -> None:
        self.setStyleSheet(
            "NoticeToast {"
            f"  background-color: {hex_to_rgba(PALETTE['bg_secondary'], 220)};"
            f"  border: 1px solid {hex_to_rgba(color, 110)};"
            "  border-radius: 12px;"
            "}"
        )
        self._message_label.setStyleSheet(
            f"font-size: 16px; font-weight: 700; color: {color};"
            "background: transparent; border: none;"
        )

    # ── public API ───────────────────────────────────────────────────────

    @property
    def message(self) -> str:
        return self._message_label.text()

    def show_message(self, text: str) -> None:
        self._show(text, PALETTE["success"])

    def show_error(self, text: str) -> None:
        self._show(text, PALETTE["danger"])

    # ── internal ─────────────────────────────────────────────────────────

    def _show(self, text: str, color: str) -> None:
        self._apply_styles(color)
        self._message_label.setText(text)
        self.adjustSize()
        self._position()
        self.show()
        self.raise_()

        self._fade_anim.stop()
        try:
            self._fade_anim.finished.disconnect()
        except TypeError:
            pass
        self._fade_anim.setDuration(self.FADE_IN_MS)
        self._fade_anim.setStartValue(0.0)
        self._fade_anim.setEndValue(1.0)
        self._fade_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._fade_anim.start()

        self._dismiss_timer.start(self.DISPLAY_MS)

    def _fade_out(self) -> None:
        self._fade_anim.stop()
        try:
            self._fade_anim.finished.disconnect()
        except TypeError:
            pass
        self._fade_anim.setDuration(self.FADE_OUT_MS)
        self._fade_anim.setStartValue(1.0)
        self._fade_anim.setEndValue(0.0)
        self._fade_anim.setEasingCurve(QEasingCurve.Type.InCubic)
        self._fade_anim.finished.connect(self.hide)
        self._fade_anim.start()

    def _position(self) -> None:
        """Centre horizontally near the top of the parent widget."""
        if self.parent():
            pw = self.parent().width()
            self.move((pw - self.width()) // 2, 60)
