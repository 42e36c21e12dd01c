"""
Prometheus metrics for the game engine.

Exposes session and event counters via an optional HTTP /metrics endpoint.

Usage:
    from flappy_engine.metrics import start_metrics_server, track_event

    start_metrics_server(enabled=True, port=8080)
    track_event("Tick")
"""

import logging
import threading
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

EVENTS_TOTAL: "Counter" = None  # type: ignore
SESSIONS_TOTAL: "Counter" = None  # type: ignore
SESSION_DURATION: "Histogram" = None  # type: ignore
REPLAY_DURATION: "Histogram" = None  # type: ignore

_metrics_initialized = False
_metrics_lock = threading.Lock()


def init_metrics() -> None:
    """
    Initialize Prometheus metrics (call once at startup).

    Until this is called every track_* helper is a no-op.
    """
    global EVENTS_TOTAL, SESSIONS_TOTAL, SESSION_DURATION, REPLAY_DURATION
    global _metrics_initialized

    with _metrics_lock:
        if _metrics_initialized:
            return

        EVENTS_TOTAL = Counter(
            "flappy_events_total",
            "Total number of events applied to game state",
            labelnames=["event_type"],
        )

        # outcome: started, ignored, ended, truncated
        SESSIONS_TOTAL = Counter(
            "flappy_sessions_total",
            "Session lifecycle transitions",
            labelnames=["outcome"],
        )

        SESSION_DURATION = Histogram(
            "flappy_session_duration_seconds",
            "Wall-clock time spent folding one session",
            buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0),
        )

        REPLAY_DURATION = Histogram(
            "flappy_replay_duration_seconds",
            "Duration of event log replay operations in seconds",
            buckets=(0.01, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0),
        )

        _metrics_initialized = True
        logger.info("Prometheus metrics initialized")


def start_metrics_server(enabled: bool, port: int) -> None:
    """
    Start Prometheus metrics HTTP server in background thread.

    Args:
        enabled: Whether to start metrics server (FLAPPY_METRICS_ENABLED)
        port: HTTP port for /metrics endpoint (FLAPPY_METRICS_PORT)
    """
    if not enabled:
        logger.info("Metrics server disabled (FLAPPY_METRICS_ENABLED=false)")
        return

    init_metrics()

    try:
        start_http_server(port, addr="0.0.0.0")
        logger.info(f"Metrics server started on http://0.0.0.0:{port}/metrics")
    except OSError as e:
        logger.error(f"Failed to start metrics server: {e}")


def track_event(event_type: str) -> None:
    if EVENTS_TOTAL is not None:
        EVENTS_TOTAL.labels(event_type=event_type).inc()


def track_session(outcome: str) -> None:
    if SESSIONS_TOTAL is not None:
        SESSIONS_TOTAL.labels(outcome=outcome).inc()


@contextmanager
def track_duration(histogram_name: str) -> Generator[None, None, None]:
    """
    Time a block against SESSION_DURATION or REPLAY_DURATION.

    Usage:
        with track_duration("replay"):
            replay(store)
    """
    histogram = {"session": SESSION_DURATION, "replay": REPLAY_DURATION}.get(histogram_name)
    if histogram is None:
        yield
        return

    with histogram.time():
        yield
