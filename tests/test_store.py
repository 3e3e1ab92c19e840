"""Tests for the CRUD store: create/list/patch per entity and analytics."""

from datetime import date, datetime, timedelta

import pytest

from focusdesk.database import store
from focusdesk.database.db import get_session
from focusdesk.database.models import FocusSession, Task
from focusdesk.database.store import StoreError


# ═══════════════════════════════════════════════════════════════════════════
#  TASKS
# ═══════════════════════════════════════════════════════════════════════════


class TestTasks:

    def test_create_returns_increasing_ids(self):
        a = store.create_task({"title": "Read chapter 3"})
        b = store.create_task({"title": "Write summary"})
        assert isinstance(a, int)
        assert b > a

    def test_defaults_applied(self):
        store.create_task({"title": "Plain"})
        task = store.list_tasks()[0]
        assert task["priority"] == "medium"
        assert task["status"] == "todo"
        assert task["created_at"]

    def test_list_newest_first(self):
        first = store.create_task({"title": "first"})
        second = store.create_task({"title": "second"})
        ids = [t["id"] for t in store.list_tasks()]
        assert ids == [second, first]

    def test_unknown_fields_ignored(self):
        task_id = store.create_task({"title": "x", "id": 999, "bogus": 1})
        assert task_id != 999
        assert "bogus" not in store.list_tasks()[0]

    def test_patch_only_overwrites_supplied_fields(self):
        task_id = store.create_task({
            "title": "ML assignment", "priority": "high",
            "status": "todo", "due_date": "2026-01-10",
        })
        assert store.update_task(task_id, {"status": "in-progress"}) is True

        task = store.list_tasks()[0]
        assert task["status"] == "in-progress"
        assert task["priority"] == "high"
        assert task["title"] == "ML assignment"
        assert task["due_date"] == "2026-01-10"

    def test_patch_missing_task_returns_false(self):
        assert store.update_task(12345, {"status": "done"}) is False

    def test_patch_with_empty_fields_is_success(self):
        task_id = store.create_task({"title": "t"})
        assert store.update_task(task_id, {}) is True

    def test_missing_title_raises_store_error(self):
        with pytest.raises(StoreError):
            store.create_task({"description": "no title"})


# ═══════════════════════════════════════════════════════════════════════════
#  LECTURES / PROJECTS / INTERNSHIP
# ═══════════════════════════════════════════════════════════════════════════


class TestLectures:

    def test_create_and_list_by_date_desc(self):
        store.create_lecture({"subject": "Statistics", "date": "2026-03-01"})
        store.create_lecture({"subject": "Linear Algebra", "date": "2026-03-05"})
        subjects = [l["subject"] for l in store.list_lectures()]
        assert subjects == ["Linear Algebra", "Statistics"]

    def test_new_lecture_not_completed_or_marked(self):
        store.create_lecture({"subject": "DBMS"})
        lecture = store.list_lectures()[0]
        assert lecture["completed"] is False
        assert lecture["attendance_status"] is None

    def test_mark_attendance(self):
        lecture_id = store.create_lecture({"subject": "DBMS", "topic": "Joins"})
        assert store.update_lecture(lecture_id, {"attendance_status": "present"})
        lecture = store.list_lectures()[0]
        assert lecture["attendance_status"] == "present"
        assert lecture["topic"] == "Joins"

    def test_patch_missing_lecture(self):
        assert store.update_lecture(7, {"attendance_status": "absent"}) is False


class TestProjects:

    def test_create_and_list(self):
        store.create_project({"name": "Portfolio", "progress": 40})
        projects = store.list_projects()
        assert projects[0]["name"] == "Portfolio"
        assert projects[0]["progress"] == 40
        assert projects[0]["status"] == "active"


class TestInternshipLogs:

    def test_create_and_list(self):
        store.create_internship_log({"title": "Data cleaning", "hours": 3.5, "date": "2026-02-02"})
        logs = store.list_internship_logs()
        assert logs[0]["title"] == "Data cleaning"
        assert logs[0]["hours"] == 3.5


# ═══════════════════════════════════════════════════════════════════════════
#  FOCUS SESSIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestFocusSessions:

    def test_create_and_list(self):
        new_id = store.create_focus_session(25, "work")
        rows = store.list_focus_sessions()
        assert rows[0]["id"] == new_id
        assert rows[0]["duration"] == 25
        assert rows[0]["type"] == "work"
        assert rows[0]["date"]


# ═══════════════════════════════════════════════════════════════════════════
#  ANALYTICS
# ═══════════════════════════════════════════════════════════════════════════


def _add_session(day: date, minutes: int, kind: str = "work") -> None:
    with get_session() as db:
        db.add(FocusSession(
            duration=minutes,
            session_type=kind,
            date=datetime.combine(day, datetime.min.time()) + timedelta(hours=10),
        ))


class TestAnalytics:

    def test_empty_store(self):
        result = store.analytics(today=date(2026, 5, 10))
        assert result["task_stats"] == {}
        assert list(result["focus_stats"]) == [
            "2026-05-04", "2026-05-05", "2026-05-06", "2026-05-07",
            "2026-05-08", "2026-05-09", "2026-05-10",
        ]
        assert set(result["focus_stats"].values()) == {0}

    def test_task_counts_by_status(self):
        for status in ("todo", "todo", "done", "in-progress"):
            store.create_task({"title": "t", "status": status})
        stats = store.analytics()["task_stats"]
        assert stats == {"todo": 2, "done": 1, "in-progress": 1}

    def test_insert_without_status_gets_todo(self):
        with get_session() as db:
            db.add(Task(title="legacy", status=None))
        assert store.analytics()["task_stats"] == {"todo": 1}

    def test_null_status_counted_as_unknown(self):
        cleared = store.create_task({"title": "cleared"})
        store.create_task({"title": "kept"})
        store.update_task(cleared, {"status": None})
        assert store.analytics()["task_stats"] == {"unknown": 1, "todo": 1}

    def test_focus_minutes_summed_per_day(self):
        today = date(2026, 5, 10)
        _add_session(today, 25)
        _add_session(today, 5, "break")
        _add_session(today - timedelta(days=2), 25)

        focus = store.analytics(today=today)["focus_stats"]
        assert focus["2026-05-10"] == 30
        assert focus["2026-05-08"] == 25
        assert focus["2026-05-09"] == 0

    def test_sessions_outside_window_excluded(self):
        today = date(2026, 5, 10)
        _add_session(today - timedelta(days=7), 25)
        _add_session(today + timedelta(days=1), 25)
        focus = store.analytics(today=today)["focus_stats"]
        assert sum(focus.values()) == 0
        assert len(focus) == 7
