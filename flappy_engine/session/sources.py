"""
Event sources feeding a session.

- tick_events: the fixed-rate clock, one Tick every TICK_RATE_MS, forever
- input_events: key-down events filtered down to the jump key
- load_input_script: key-down events recorded in a text file
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from ..core.clock import DeterministicClock
from ..core.constants import JUMP_KEY
from ..core.events import JUMP, TICK, Event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyEvent:
    """A raw key-down at ts ms from session start."""
    ts: float
    key: str = JUMP_KEY


def tick_events(session_id: str, clock: Optional[DeterministicClock] = None) -> Iterator[Event]:
    """
    Fixed-rate tick source. The first tick is due one step after start.

    The clock never stalls; callers bound the stream themselves.
    """
    clock = clock or DeterministicClock()
    while True:
        clock = clock.tick()
        yield Event(type=TICK, session_id=session_id, ts=clock.now())


def input_events(keys: Iterable[KeyEvent], session_id: str) -> List[Event]:
    """
    Keep only jump key-downs and turn each into a Jump event.

    A key-down without a usable timestamp is dropped.
    """
    events = []
    for k in keys:
        if k.key != JUMP_KEY:
            continue
        if math.isnan(k.ts):
            logger.warning("Dropping key-down with NaN timestamp")
            continue
        events.append(Event(type=JUMP, session_id=session_id, ts=k.ts, meta={"key": k.key}))
    return events


def parse_input_script(contents: str) -> List[KeyEvent]:
    """
    Parse key-down lines of the form "ts_ms[,key]".

    Blank lines and lines starting with # are ignored. The key defaults to
    the jump key.

    Raises:
        ValueError: If a timestamp is not a finite number
    """
    keys = []
    for lineno, raw in enumerate(contents.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        ts_str, _, key = line.partition(",")
        try:
            ts = float(ts_str)
        except ValueError as ex:
            raise ValueError(f"line {lineno}: invalid timestamp {ts_str!r}") from ex
        if not math.isfinite(ts):
            raise ValueError(f"line {lineno}: timestamp must be finite, got {ts_str!r}")
        keys.append(KeyEvent(ts=ts, key=key.strip() or JUMP_KEY))
    return keys


def load_input_script(path: Union[str, Path]) -> List[KeyEvent]:
    keys = parse_input_script(Path(path).read_text(encoding="utf-8"))
    logger.info(f"Loaded {len(keys)} key events from {path}")
    return keys
