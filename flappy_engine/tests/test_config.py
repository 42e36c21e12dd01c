"""
Tests for environment settings.
"""

import os

from flappy_engine.config import Settings


def test_defaults(monkeypatch):
    for key in list(os.environ):
        if key.startswith("FLAPPY_"):
            monkeypatch.delenv(key)

    s = Settings.from_env()

    assert s.log_level == "INFO"
    assert s.log_format == "json"
    assert s.metrics_enabled is False
    assert s.max_ticks == 100000
    assert s.event_log_path() == os.path.join("/tmp/flappy-logs", "session-events.log")


def test_from_env(monkeypatch):
    monkeypatch.setenv("FLAPPY_LOG_LEVEL", "debug")
    monkeypatch.setenv("FLAPPY_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("FLAPPY_LOG_DIR", "/var/flappy")
    monkeypatch.setenv("FLAPPY_METRICS_ENABLED", "true")
    monkeypatch.setenv("FLAPPY_MAX_TICKS", "500")

    s = Settings.from_env()

    assert s.log_level == "DEBUG"
    assert s.log_format == "text"
    assert s.metrics_enabled is True
    assert s.max_ticks == 500
    assert s.event_log_path("run.log") == os.path.join("/var/flappy", "run.log")


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("FLAPPY_METRICS_PORT", "not-a-port")
    monkeypatch.setenv("FLAPPY_MAX_TICKS", "-3")

    s = Settings.from_env()

    assert s.metrics_port == 8080
    assert s.max_ticks == 100000
