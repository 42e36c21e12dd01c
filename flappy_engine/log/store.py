"""
EventStore abstract interface.

Defines contract for event storage implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional

from ..core.events import Event


@dataclass(frozen=True)
class AppendResult:
    """
    Result of an append.

    Fields:
        event: Event as stored (seq assigned)
        seq: Assigned sequence number
        event_hash: Hash of this record
        prev_hash: Hash of the record before it
    """

    event: Event
    seq: int
    event_hash: str
    prev_hash: str


class EventStore(ABC):
    """
    Abstract event storage interface.

    All implementations must guarantee:
    - Append-only (no updates, no deletes)
    - Sequential ordering (events indexed by seq)
    - Durability (fsync or equivalent)
    """

    @abstractmethod
    def append(self, event: Event) -> AppendResult:
        """
        Append event to log.

        Args:
            event: Event to append (seq will be assigned)

        Raises:
            EventStoreError: If append fails
        """
        ...

    @abstractmethod
    def read(self, session_id: Optional[str] = None, from_seq: int = 0) -> Iterator[Event]:
        """
        Read events from log.

        Args:
            session_id: Filter by session (None = all)
            from_seq: Start from this sequence number (inclusive)

        Yields:
            Events in sequence order
        """
        ...

    def get_last_hash(self) -> Optional[str]:
        """
        Return last event hash if available.

        Implementations may override. Default returns None.
        """
        return None
