"""SQLAlchemy ORM models for FocusDesk."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, Float
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Task(Base):
    """A to-do item shown on the kanban board."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(10), nullable=True, default="medium")   # low | medium | high
    status = Column(String(20), nullable=True, default="todo")       # todo | in-progress | done
    due_date = Column(String(10), nullable=True)                     # YYYY-MM-DD
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    EDITABLE = ("title", "description", "priority", "status", "due_date")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "due_date": self.due_date,
            "created_at": self.created_at.isoformat(sep=" ") if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Task id={self.id} status={self.status} title={self.title!r}>"


class Lecture(Base):
    """A scheduled lecture and whether it was attended."""

    __tablename__ = "lectures"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subject = Column(String(255), nullable=False)
    topic = Column(String(255), nullable=True)
    attendance_status = Column(String(20), nullable=True)   # present | absent
    date = Column(String(10), nullable=True)
    completed = Column(Boolean, nullable=False, default=False)

    EDITABLE = ("subject", "topic", "attendance_status", "date", "completed")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "subject": self.subject,
            "topic": self.topic,
            "attendance_status": self.attendance_status,
            "date": self.date,
            "completed": bool(self.completed),
        }

    def __repr__(self) -> str:
        return (
            f"<Lecture id={self.id} subject={self.subject!r} "
            f"attendance={self.attendance_status}>"
        )


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    progress = Column(Integer, nullable=False, default=0)    # 0-100
    status = Column(String(20), nullable=False, default="active")

    EDITABLE = ("name", "description", "progress", "status")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "progress": self.progress,
            "status": self.status,
        }

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r} progress={self.progress}>"


class FocusSession(Base):
    """One completed WORK or BREAK countdown."""

    __tablename__ = "focus_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    duration = Column(Integer, nullable=True)                         # minutes
    session_type = Column("type", String(10), nullable=True)          # work | break
    date = Column(DateTime, nullable=False, default=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "duration": self.duration,
            "type": self.session_type,
            "date": self.date.isoformat(sep=" ") if self.date else None,
        }

    def __repr__(self) -> str:
        return (
            f"<FocusSession id={self.id} type={self.session_type} "
            f"duration={self.duration}m>"
        )


class InternshipLog(Base):
    """Hours logged against internship work."""

    __tablename__ = "internship_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(String(10), nullable=True)
    hours = Column(Float, nullable=True)

    EDITABLE = ("title", "description", "date", "hours")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "hours": self.hours,
        }

    def __repr__(self) -> str:
        return f"<InternshipLog id={self.id} title={self.title!r} hours={self.hours}>"
