"""
Stable identifier generation.

Session ids are derived from their inputs, never from randomness, so a
replayed run logs under the same id as the live one.
"""

import hashlib


def stable_id(*parts: str) -> str:
    """
    Generate stable ID derived from inputs (no randomness).

    Args:
        *parts: String parts to combine into ID

    Returns:
        SHA-256 hash as hex string

    Example:
        stable_id("session", "1") -> "6b51..."
    """
    raw = "|".join(parts).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def session_id(index: int, prefix: str = "session", salt: str = "") -> str:
    """
    Short stable id for the index-th session of a run.

    salt separates runs sharing one event log (typically the log's last
    hash when the run starts).
    """
    parts = (prefix, str(index), salt) if salt else (prefix, str(index))
    return f"{prefix}-{index}-{stable_id(*parts)[:8]}"
