"""Shared pytest fixtures for FocusDesk tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from focusdesk.database.db import configure_engine, init_db
from focusdesk.timer.engine import TimerEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def engine(qapp):
    """Fresh TimerEngine with default 25/5 minute durations."""
    return TimerEngine(parent=None)


@pytest.fixture
def break_engine(qapp):
    """Fresh TimerEngine that starts in BREAK mode."""
    return TimerEngine(parent=None, initial_mode="break")
