"""
Deterministic state snapshot utilities.

Same state always produces the same bytes, so two runs of the same events
can be compared hash by hash.
"""

import hashlib
from typing import Iterable

from .core.canonical import canonical_json_bytes
from .core.state import GameState


def serialize_state(state: GameState) -> bytes:
    """Serialize state to canonical JSON bytes."""
    return canonical_json_bytes(state.to_dict())


def compute_state_hash(state: GameState) -> str:
    """
    Compute SHA-256 hash of state.

    Returns:
        Hex string (64 characters)
    """
    return hashlib.sha256(serialize_state(state)).hexdigest()


class SequenceHasher:
    """
    Running hash of a state sequence, usable as a render sink.

    Order-sensitive: the same states in another order hash differently.
    """

    def __init__(self) -> None:
        self._h = hashlib.sha256()
        self.count = 0

    def __call__(self, state: GameState) -> None:
        self._h.update(serialize_state(state))
        self._h.update(b"\n")
        self.count += 1

    def hexdigest(self) -> str:
        return self._h.hexdigest()


def compute_sequence_hash(states: Iterable[GameState]) -> str:
    """Hash of a whole state sequence."""
    hasher = SequenceHasher()
    for state in states:
        hasher(state)
    return hasher.hexdigest()
