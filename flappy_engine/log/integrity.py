"""
Hash chain integrity.

Each logged event carries the hash of the previous one, so any edit to a
recorded session is detectable before it is replayed.
"""

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.canonical import canonical_json_bytes
from ..core.errors import IntegrityError
from ..core.events import Event

ZERO_HASH = "0" * 64


def hash_event(prev_hash: str, event: Event) -> str:
    """
    Compute hash of event chained to previous hash.

    Hash input: prev_hash + canonical_json(event_data)

    Args:
        prev_hash: Hash of previous event (or ZERO_HASH for genesis)
        event: Event to hash (seq included once assigned)

    Returns:
        SHA-256 hash as hex string
    """
    b = prev_hash.encode("utf-8") + canonical_json_bytes(event.to_dict())
    return hashlib.sha256(b).hexdigest()


def chain_record(prev_hash: str, event: Event) -> Dict[str, Any]:
    """
    Create hash chain record for storage.

    Returns:
        Dict with prev_hash, event_hash and event, ready for JSONL
    """
    return {
        "prev_hash": prev_hash,
        "event_hash": hash_event(prev_hash, event),
        "event": event.to_dict(),
    }


@dataclass
class ChainVerificationResult:
    valid: bool
    checked: int = 0
    error: Optional[str] = None
    mismatch_seq: Optional[int] = None
    expected: Optional[str] = None
    actual: Optional[str] = None


def verify_chain(log_path: str) -> ChainVerificationResult:
    """
    Walk a JSONL log and recompute every link of the chain.

    Checks:
    - prev_hash of each record equals event_hash of the record before it
    - event_hash equals hash_event(prev_hash, event)
    """
    prev_hash = ZERO_HASH
    checked = 0

    with open(log_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            rec = json.loads(line)
            event = Event.from_dict(rec.get("event", {}))

            if rec.get("prev_hash") != prev_hash:
                return ChainVerificationResult(
                    valid=False,
                    checked=checked,
                    error="prev_hash mismatch",
                    mismatch_seq=event.seq,
                    expected=prev_hash,
                    actual=rec.get("prev_hash"),
                )
            computed_hash = hash_event(prev_hash, event)
            if rec.get("event_hash") != computed_hash:
                return ChainVerificationResult(
                    valid=False,
                    checked=checked,
                    error="event_hash mismatch",
                    mismatch_seq=event.seq,
                    expected=computed_hash,
                    actual=rec.get("event_hash"),
                )

            prev_hash = computed_hash
            checked += 1

    return ChainVerificationResult(valid=True, checked=checked)


def require_intact_chain(log_path: str) -> int:
    """
    Verify a log and fail loudly on the first broken link.

    Returns:
        Number of records checked

    Raises:
        IntegrityError: If the chain is broken
        FileNotFoundError: If the log does not exist
    """
    result = verify_chain(log_path)
    if not result.valid:
        raise IntegrityError(f"{result.error} at seq {result.mismatch_seq}")
    return result.checked
