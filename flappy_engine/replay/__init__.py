"""
Replays.

- ghost: replay a recorded bird path on the tick clock
- runner: rebuild game states from a recorded event log
"""

from .ghost import CancellationToken, GhostReplay, GhostTimeline, build_timeline
from .runner import ReplayResult, replay

__all__ = [
    "CancellationToken",
    "GhostReplay",
    "GhostTimeline",
    "build_timeline",
    "ReplayResult",
    "replay",
]
