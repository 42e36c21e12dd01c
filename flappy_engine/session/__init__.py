"""
Event stream composition and session lifecycle.
"""

from .queue import EventQueue
from .sources import KeyEvent, tick_events, input_events, parse_input_script, load_input_script
from .composer import compose, fold_states
from .session import Session, SessionManager, SessionResult, RenderSink, GhostRenderSink

__all__ = [
    "EventQueue",
    "KeyEvent",
    "tick_events",
    "input_events",
    "parse_input_script",
    "load_input_script",
    "compose",
    "fold_states",
    "Session",
    "SessionManager",
    "SessionResult",
    "RenderSink",
    "GhostRenderSink",
]
