"""
Event model for the game fold.

Events are immutable records of state transforms. Each one names the reducer
that applies it (type), when it became due (ts, ms from session start) and
what it carries (payload).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

TICK = "Tick"
PIPE_SPAWNED = "PipeSpawned"
JUMP = "Jump"

# Lower value wins when two events are due at the same instant.
PRIORITY: Dict[str, int] = {
    TICK: 0,
    PIPE_SPAWNED: 1,
    JUMP: 2,
}


@dataclass(frozen=True)
class Event:
    """
    Immutable event record.

    Fields:
        type: Event type (Tick, PipeSpawned, Jump)
        session_id: Session the event belongs to
        ts: Due time in ms from session start
        payload: Event-specific data
        meta: Metadata (source, input key, etc.)
        seq: Sequence number (assigned by EventStore)
    """
    type: str
    session_id: str
    ts: float
    payload: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)
    seq: Optional[int] = None

    @property
    def priority(self) -> int:
        return PRIORITY.get(self.type, len(PRIORITY))

    def require_seq(self) -> int:
        """
        Get sequence number or raise error if not assigned.

        Raises:
            ValueError: If seq is None
        """
        if self.seq is None:
            raise ValueError("Event.seq is required but None")
        return self.seq

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "session_id": self.session_id,
            "seq": self.seq,
            "ts": self.ts,
            "payload": self.payload,
            "meta": self.meta,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Event":
        return Event(
            type=data["type"],
            session_id=data["session_id"],
            ts=data["ts"],
            payload=data.get("payload", {}),
            meta=data.get("meta", {}),
            seq=data.get("seq"),
        )
