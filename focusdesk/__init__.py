"""FocusDesk: tasks, lectures, focus timer and an AI assistant in one window."""

__version__ = "0.1.0"
