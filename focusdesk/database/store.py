"""CRUD operations over the FocusDesk tables.

Every function opens its own short-lived session via ``get_session()``
and returns plain dicts, so callers (Flask handlers, Qt widgets, the
session recorder) never hold ORM objects across sessions.

Patches use merge semantics: only the keys present in ``fields`` are
written, and keys that are not editable columns are ignored.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Iterable

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from .db import get_session
from .models import Task, Lecture, Project, FocusSession, InternshipLog

logger = logging.getLogger(__name__)

ANALYTICS_DAYS = 7


class StoreError(RuntimeError):
    """A database operation failed; wraps the underlying SQLAlchemy error."""


def _pick(fields: dict[str, Any] | None, allowed: Iterable[str]) -> dict[str, Any]:
    fields = fields or {}
    return {k: fields[k] for k in allowed if k in fields}


def _list(model, *order_by) -> list[dict]:
    try:
        with get_session() as db:
            rows = db.query(model).order_by(*order_by).all()
            return [row.to_dict() for row in rows]
    except SQLAlchemyError as exc:
        logger.error("Listing %s failed: %s", model.__tablename__, exc)
        raise StoreError(f"could not list {model.__tablename__}") from exc


def _create(model, values: dict[str, Any]) -> int:
    try:
        with get_session() as db:
            record = model(**values)
            db.add(record)
            db.flush()
            new_id = record.id
    except SQLAlchemyError as exc:
        logger.error("Insert into %s failed: %s", model.__tablename__, exc)
        raise StoreError(f"could not create {model.__tablename__} record") from exc
    logger.debug("Created %s id=%s", model.__tablename__, new_id)
    return new_id


def _patch(model, record_id: int, fields: dict[str, Any] | None) -> bool:
    values = _pick(fields, model.EDITABLE)
    try:
        with get_session() as db:
            record = db.get(model, record_id)
            if record is None:
                return False
            for key, value in values.items():
                setattr(record, key, value)
    except SQLAlchemyError as exc:
        logger.error("Update of %s id=%s failed: %s", model.__tablename__, record_id, exc)
        raise StoreError(f"could not update {model.__tablename__} record") from exc
    return True


# ── tasks ─────────────────────────────────────────────────────────────────


def list_tasks() -> list[dict]:
    """All tasks, newest first."""
    return _list(Task, Task.created_at.desc(), Task.id.desc())


def create_task(fields: dict[str, Any]) -> int:
    return _create(Task, _pick(fields, Task.EDITABLE))


def update_task(task_id: int, fields: dict[str, Any]) -> bool:
    """Merge *fields* into the task.  False if it does not exist."""
    return _patch(Task, task_id, fields)


# ── lectures ──────────────────────────────────────────────────────────────


def list_lectures() -> list[dict]:
    return _list(Lecture, Lecture.date.desc(), Lecture.id.desc())


def create_lecture(fields: dict[str, Any]) -> int:
    return _create(Lecture, _pick(fields, Lecture.EDITABLE))


def update_lecture(lecture_id: int, fields: dict[str, Any]) -> bool:
    return _patch(Lecture, lecture_id, fields)


# ── projects ──────────────────────────────────────────────────────────────


def list_projects() -> list[dict]:
    return _list(Project, Project.id)


def create_project(fields: dict[str, Any]) -> int:
    return _create(Project, _pick(fields, Project.EDITABLE))


# ── internship logs ───────────────────────────────────────────────────────


def list_internship_logs() -> list[dict]:
    return _list(InternshipLog, InternshipLog.date.desc(), InternshipLog.id.desc())


def create_internship_log(fields: dict[str, Any]) -> int:
    return _create(InternshipLog, _pick(fields, InternshipLog.EDITABLE))


# ── focus sessions ────────────────────────────────────────────────────────


def list_focus_sessions() -> list[dict]:
    return _list(FocusSession, FocusSession.date.desc(), FocusSession.id.desc())


def create_focus_session(duration: int | None, session_type: str | None) -> int:
    return _create(
        FocusSession,
        {"duration": duration, "session_type": session_type},
    )


# ── analytics ─────────────────────────────────────────────────────────────


def analytics(today: date | None = None) -> dict[str, dict]:
    """Task counts per status and focus minutes per day.

    ``focus_stats`` always holds the ``ANALYTICS_DAYS`` days ending at
    *today*, oldest first, with zero for days without sessions.
    """
    today = today or date.today()
    first_day = today - timedelta(days=ANALYTICS_DAYS - 1)
    day_col = func.date(FocusSession.date)

    try:
        with get_session() as db:
            status_rows = (
                db.query(Task.status, func.count(Task.id))
                .group_by(Task.status)
                .all()
            )
            focus_rows = (
                db.query(day_col, func.sum(FocusSession.duration))
                .filter(day_col >= first_day.isoformat())
                .filter(day_col <= today.isoformat())
                .group_by(day_col)
                .all()
            )
    except SQLAlchemyError as exc:
        logger.error("Analytics query failed: %s", exc)
        raise StoreError("could not compute analytics") from exc

    task_stats: dict[str, int] = {}
    for status, count in status_rows:
        key = status if status is not None else "unknown"
        task_stats[key] = task_stats.get(key, 0) + count
    totals = {str(day): int(total or 0) for day, total in focus_rows}

    focus_stats: dict[str, int] = {}
    for offset in range(ANALYTICS_DAYS):
        key = (first_day + timedelta(days=offset)).isoformat()
        focus_stats[key] = totals.get(key, 0)

    return {"task_stats": task_stats, "focus_stats": focus_stats}
