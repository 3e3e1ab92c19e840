"""Tests for settings persistence."""

import json

import pytest

from focusdesk import settings as settings_module
from focusdesk.settings import Settings, load_settings, save_settings


@pytest.fixture
def settings_home(tmp_path, monkeypatch):
    monkeypatch.setattr(settings_module, "APP_HOME", tmp_path)
    monkeypatch.setattr(settings_module, "SETTINGS_PATH", tmp_path / "settings.json")
    return tmp_path


def test_defaults():
    s = Settings()
    assert s.work_duration == 1500
    assert s.break_duration == 300
    assert s.api_port == 3000
    assert s.notifications_enabled is True


def test_missing_file_gives_defaults(settings_home):
    assert load_settings() == Settings()


def test_save_then_load(settings_home):
    save_settings(Settings(work_duration=3000, notifications_enabled=False))
    loaded = load_settings()
    assert loaded.work_duration == 3000
    assert loaded.notifications_enabled is False
    assert loaded.break_duration == 300


def test_unknown_keys_ignored(settings_home):
    (settings_home / "settings.json").write_text(
        json.dumps({"break_duration": 600, "theme": "dark"}), encoding="utf-8",
    )
    assert load_settings() == Settings(break_duration=600)


def test_corrupt_file_falls_back(settings_home, caplog):
    (settings_home / "settings.json").write_text("{not json", encoding="utf-8")
    assert load_settings() == Settings()
    assert "unreadable" in caplog.text


def test_non_object_file_falls_back(settings_home):
    (settings_home / "settings.json").write_text("[1, 2]", encoding="utf-8")
    assert load_settings() == Settings()
