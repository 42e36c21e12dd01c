"""
File-based event store using append-only JSONL format.

Each line is a hash chain record with prev_hash, event_hash, and event data.
"""

import json
import os
from typing import Iterator, Optional, Tuple

from ..core.canonical import canonical_json_str
from ..core.errors import EventStoreError
from ..core.events import Event
from .integrity import ZERO_HASH, chain_record, require_intact_chain
from .store import AppendResult, EventStore

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None


class FileEventStore(EventStore):
    """
    File-based append-only event store.

    Storage format: JSONL (newline-delimited JSON)
    Each line: {"prev_hash": "...", "event_hash": "...", "event": {...}}

    Guarantees:
    - Append-only (no mutations)
    - Fsync after each append (durability)
    - Hash chain integrity
    """

    def __init__(self, path: str) -> None:
        """
        Initialize file event store.

        Args:
            path: Path to JSONL file
        """
        self.path = path

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        if not os.path.exists(path):
            with open(path, "wb") as f:
                f.write(b"")

    def _last_seq_and_hash(self, f) -> Tuple[int, str]:
        """
        Read last sequence number and hash from log.

        Returns:
            (last_seq, last_hash) tuple
            (-1, ZERO_HASH) if log is empty
        """
        last_seq = -1
        last_hash = ZERO_HASH

        f.seek(0)
        for line in f:
            if not line.strip():
                continue
            rec = json.loads(line)
            last_seq = rec["event"]["seq"]
            last_hash = rec["event_hash"]

        return last_seq, last_hash

    def append(self, event: Event) -> AppendResult:
        """
        Append event to log with hash chain.

        Args:
            event: Event to append (seq will be assigned)

        Raises:
            EventStoreError: If append fails
        """
        try:
            with open(self.path, "a+b") as f:
                if fcntl:
                    fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    last_seq, last_hash = self._last_seq_and_hash(f)

                    e2 = Event(
                        type=event.type,
                        session_id=event.session_id,
                        seq=last_seq + 1,
                        ts=event.ts,
                        payload=event.payload,
                        meta=event.meta,
                    )
                    rec = chain_record(last_hash, e2)
                    line = canonical_json_str(rec) + "\n"

                    f.seek(0, os.SEEK_END)
                    f.write(line.encode("utf-8"))
                    f.flush()
                    os.fsync(f.fileno())
                finally:
                    if fcntl:
                        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except OSError as ex:
            raise EventStoreError(str(ex)) from ex

        return AppendResult(
            event=e2,
            seq=e2.require_seq(),
            event_hash=rec["event_hash"],
            prev_hash=last_hash,
        )

    def read(self, session_id: Optional[str] = None, from_seq: int = 0) -> Iterator[Event]:
        """
        Read events from log.

        Args:
            session_id: Filter by session (None = all)
            from_seq: Start from this sequence (inclusive)

        Yields:
            Events in sequence order
        """
        with open(self.path, "rb") as f:
            for line in f:
                if not line.strip():
                    continue

                ev = Event.from_dict(json.loads(line)["event"])

                if ev.require_seq() < from_seq:
                    continue
                if session_id is not None and ev.session_id != session_id:
                    continue

                yield ev

    def get_last_hash(self) -> Optional[str]:
        with open(self.path, "rb") as f:
            _, last_hash = self._last_seq_and_hash(f)
        return last_hash

    def verify(self) -> int:
        """
        Verify the hash chain of this log.

        Raises:
            IntegrityError: If any record was edited, dropped or reordered
        """
        return require_intact_chain(self.path)
