"""REST backend and AI passthrough."""

from .assistant import Assistant, AssistantError
from .server import create_app

__all__ = ["Assistant", "AssistantError", "create_app"]
