"""
Runtime settings read from the environment.

Environment Variables:
    FLAPPY_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    FLAPPY_LOG_FORMAT: Log format (json, text) - default: json
    FLAPPY_LOG_DIR: Directory for recorded event logs - default: /tmp/flappy-logs
    FLAPPY_METRICS_ENABLED: Start the Prometheus endpoint (true/false) - default: false
    FLAPPY_METRICS_PORT: HTTP port for /metrics - default: 8080
    FLAPPY_MAX_TICKS: Tick cap for headless sessions - default: 100000

Game constants are not configurable, see core.constants.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(key: str, default: bool = False) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_int(key: str, default: int) -> int:
    val = os.getenv(key)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = "json"
    log_dir: str = "/tmp/flappy-logs"
    metrics_enabled: bool = False
    metrics_port: int = 8080
    max_ticks: int = 100000

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            log_level=os.getenv("FLAPPY_LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("FLAPPY_LOG_FORMAT", "json").lower(),
            log_dir=os.getenv("FLAPPY_LOG_DIR", "/tmp/flappy-logs"),
            metrics_enabled=_env_bool("FLAPPY_METRICS_ENABLED"),
            metrics_port=_env_int("FLAPPY_METRICS_PORT", 8080),
            max_ticks=_env_int("FLAPPY_MAX_TICKS", 100000),
        )

    def event_log_path(self, name: Optional[str] = None) -> str:
        return os.path.join(self.log_dir, name or "session-events.log")
