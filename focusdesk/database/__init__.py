"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import Task, Lecture, Project, FocusSession, InternshipLog
from .store import StoreError

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "Task",
    "Lecture",
    "Project",
    "FocusSession",
    "InternshipLog",
    "StoreError",
]
