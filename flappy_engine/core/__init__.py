"""
Core deterministic game primitives.

This module provides the foundational abstractions of the fold:
- State: Bird, Pipe and GameState value types
- Event: Immutable transform records
- Reducer: Pure tick/jump/spawn transitions
- RNG: Stateless knockback generator
- Canonical: Deterministic serialization
- Clock: Fixed-step time source
"""

from .events import Event, TICK, PIPE_SPAWNED, JUMP, PRIORITY
from .state import Bird, Pipe, GameState
from .pipes import PipeEvaluationResult, PipeTotals, process_pipe, aggregate_pipe_results
from .reducer import Reducer, tick, jump, spawn_pipe, default_reducer
from .rng import hash_seed, scale, random_velocity
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .clock import DeterministicClock
from .ids import stable_id, session_id
from .errors import (
    InvalidTransitionError,
    IntegrityError,
    EventStoreError,
    ScheduleError,
)

__all__ = [
    "Event",
    "TICK",
    "PIPE_SPAWNED",
    "JUMP",
    "PRIORITY",
    "Bird",
    "Pipe",
    "GameState",
    "PipeEvaluationResult",
    "PipeTotals",
    "process_pipe",
    "aggregate_pipe_results",
    "Reducer",
    "tick",
    "jump",
    "spawn_pipe",
    "default_reducer",
    "hash_seed",
    "scale",
    "random_velocity",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "DeterministicClock",
    "stable_id",
    "session_id",
    "InvalidTransitionError",
    "IntegrityError",
    "EventStoreError",
    "ScheduleError",
]
