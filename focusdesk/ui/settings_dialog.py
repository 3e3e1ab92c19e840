"""Preferences dialog for FocusDesk.

A modal dialog for timer durations and completion notices.  Changes are
saved to disk as they are made; the caller applies them to the running
app once the dialog closes.
"""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QCheckBox, QPushButton, QWidget,
)

from ..settings import Settings, save_settings


class SettingsDialog(QDialog):
    """Modal dialog for user preferences."""

    def __init__(self, settings: Settings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._settings = settings
        self._build_ui()
        self._populate()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        title = QLabel("Timer", self)
        title.setStyleSheet("font-size: 15px; font-weight: 700;")
        root.addWidget(title)

        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._work_spin = QSpinBox(self)
        self._work_spin.setRange(1, 120)
        self._work_spin.setSuffix(" min")
        form.addRow("Work duration:", self._work_spin)

        self._break_spin = QSpinBox(self)
        self._break_spin.setRange(1, 60)
        self._break_spin.setSuffix(" min")
        form.addRow("Break duration:", self._break_spin)

        self._notif_cb = QCheckBox("Show a notice when a countdown ends", self)
        form.addRow("", self._notif_cb)
        root.addLayout(form)

        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close", self)
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    def _populate(self) -> None:
        s = self._settings
        self._work_spin.setValue(s.work_duration // 60)
        self._break_spin.setValue(s.break_duration // 60)
        self._notif_cb.setChecked(s.notifications_enabled)
        # Connect after populating so loading values does not write to disk
        self._work_spin.valueChanged.connect(self._on_changed)
        self._break_spin.valueChanged.connect(self._on_changed)
        self._notif_cb.toggled.connect(self._on_changed)

    def _on_changed(self) -> None:
        self._settings.work_duration = self._work_spin.value() * 60
        self._settings.break_duration = self._break_spin.value() * 60
        self._settings.notifications_enabled = self._notif_cb.isChecked()
        save_settings(self._settings)

    @property
    def settings(self) -> Settings:
        return self._settings
