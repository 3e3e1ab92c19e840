"""Shared test helpers for FocusDesk."""

from focusdesk.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def complete_session(engine: TimerEngine) -> None:
    """Fast-complete the current countdown by jumping to the last tick."""
    engine.start()
    engine._remaining = 1
    engine.tick()


class FakeAssistant:
    """Stands in for ``focusdesk.api.assistant.Assistant``."""

    def __init__(self, reply="Sounds like a plan.", error=None):
        self._reply = reply
        self._error = error
        self.calls: list = []

    def reply(self, message, context=None):
        self.calls.append((message, context))
        if self._error is not None:
            raise self._error
        return self._reply
