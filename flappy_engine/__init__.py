"""
Deterministic Flappy Engine

Event-sourced, tick-based game engine: pure reducers folded over a
priority-ordered stream of tick, spawn and input events.
"""

__version__ = "0.1.0"
