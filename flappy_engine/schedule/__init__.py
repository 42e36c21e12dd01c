"""
Obstacle schedule: timed pipe spawns parsed from a flat CSV description.
"""

from .parser import load_schedule, parse_pipe_line, parse_schedule, spawn_events, to_number

__all__ = [
    "load_schedule",
    "parse_pipe_line",
    "parse_schedule",
    "spawn_events",
    "to_number",
]
