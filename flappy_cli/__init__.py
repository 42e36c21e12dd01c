"""
Flappy CLI - headless driver for the deterministic game engine

Commands:
- flappy run - Play one session from a schedule and an input script
- flappy ghost - Play several sessions back to back with ghost replays
- flappy replay - Rebuild states from a recorded event log
- flappy log tail/verify - Event log operations
"""

__version__ = "0.1.0"
