"""
Obstacle schedule parsing.

Schedule format: one header line, then one record per pipe:
    gap_y_frac,gap_height_frac,time_sec

- gap_y_frac: gap center (fraction of canvas height)
- gap_height_frac: gap size (fraction of canvas height)
- time_sec: spawn time in seconds from session start

Records are not validated. A non-numeric field becomes NaN, and a NaN pipe
never collides and never scores.
"""

import logging
import math
from pathlib import Path
from typing import Iterable, List, Union

from ..core.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from ..core.errors import ScheduleError
from ..core.events import PIPE_SPAWNED, Event
from ..core.state import Pipe

logger = logging.getLogger(__name__)


def to_number(token: str) -> float:
    """
    Lenient numeric conversion.

    Blank -> 0.0. Unsigned 0x, 0o and 0b literals are read as integers.
    Anything else that is not a finite decimal number (including "inf" and
    "nan") -> NaN.
    """
    s = token.strip()
    if not s:
        return 0.0
    if "_" in s:
        return math.nan
    if s[:2].lower() in ("0x", "0o", "0b"):
        try:
            return float(int(s, 0))
        except ValueError:
            return math.nan
    try:
        value = float(s)
    except ValueError:
        return math.nan
    return value if math.isfinite(value) else math.nan


def parse_pipe_line(line: str) -> Pipe:
    """
    Parse a single CSV record into a Pipe.

    The pipe starts at the right edge of the canvas. Missing fields are NaN.
    """
    fields = [to_number(tok) for tok in line.split(",")]
    fields += [math.nan] * (3 - len(fields))
    gap_y_frac, gap_height_frac, time_sec = fields[:3]

    pipe = Pipe(
        horizontal_position=CANVAS_WIDTH,
        gap_y=gap_y_frac * CANVAS_HEIGHT,
        gap_height=gap_height_frac * CANVAS_HEIGHT,
        time=time_sec * 1000,
    )
    if any(math.isnan(v) for v in (gap_y_frac, gap_height_frac, time_sec)):
        logger.warning(f"Malformed schedule record {line!r}, pipe will be inert")
    return pipe


def parse_schedule(contents: str) -> List[Pipe]:
    """
    Parse schedule text into pipes, skipping the header line.

    Returns:
        One Pipe per record, in file order
    """
    lines = contents.strip().split("\n")[1:]
    return [parse_pipe_line(line) for line in lines]


def load_schedule(path: Union[str, Path]) -> List[Pipe]:
    """
    Read and parse a schedule file.

    Raises:
        ScheduleError: If the file cannot be read (no retry)
    """
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except OSError as ex:
        raise ScheduleError(f"Error reading schedule {path}: {ex}") from ex

    pipes = parse_schedule(contents)
    logger.info(f"Loaded {len(pipes)} pipes from {path}")
    return pipes


def spawn_events(pipes: Iterable[Pipe], session_id: str) -> List[Event]:
    """
    One PipeSpawned event per pipe, due at the pipe's spawn offset.

    A pipe whose spawn time is NaN is due immediately.
    """
    events = []
    for index, pipe in enumerate(pipes):
        ts = pipe.time
        if math.isnan(ts):
            logger.warning(f"Schedule record {index} has no usable spawn time, spawning at 0")
            ts = 0
        events.append(
            Event(
                type=PIPE_SPAWNED,
                session_id=session_id,
                ts=ts,
                payload={"pipe": pipe.to_dict()},
                meta={"source": "schedule", "index": index},
            )
        )
    return events
