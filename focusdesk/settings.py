"""Application settings with JSON persistence.

Settings are stored at:
    ~/.focusdesk/settings.json

Set ``FOCUSDESK_HOME`` to keep settings and the database somewhere
else.  Secrets (the Gemini API key) never live here; they come from the
environment or a ``.env`` file.

Usage::

    settings = load_settings()
    settings.work_duration = 50 * 60
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)

APP_HOME = Path(os.environ.get("FOCUSDESK_HOME", Path.home() / ".focusdesk"))
SETTINGS_PATH = APP_HOME / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = 25 * 60           # seconds
    break_duration: int = 5 * 60
    notifications_enabled: bool = True

    # ── storage ───────────────────────────────────────────────────────
    database_url: str = ""                 # empty → sqlite file in APP_HOME

    # ── REST API ──────────────────────────────────────────────────────
    api_host: str = "127.0.0.1"
    api_port: int = 3000

    # ── assistant ─────────────────────────────────────────────────────
    ai_model: str = "gemini-2.5-flash"

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 980
    window_height: int = 760


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", SETTINGS_PATH)
        return Settings()
    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    return Settings(**filtered)


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_HOME.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
