"""UI package."""

from .timer_widget import TimerWidget
from .progress_ring import ProgressRing
from .notice_toast import NoticeToast
from .task_board import TaskBoard
from .lecture_panel import LecturePanel
from .chat_panel import ChatPanel
from .dashboard import Dashboard
from .settings_dialog import SettingsDialog

__all__ = [
    "TimerWidget",
    "ProgressRing",
    "NoticeToast",
    "TaskBoard",
    "LecturePanel",
    "ChatPanel",
    "Dashboard",
    "SettingsDialog",
]
