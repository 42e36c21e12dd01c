"""
Ghost replays of previous sessions.

A ghost replays one recorded path of bird positions on the same fixed tick
clock as the live game: position i at tick i, then a single None marker that
tells the render sink to stop drawing it.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    One-shot cancellation signal.

    The first cancel() wins and records its reason; later calls are no-ops.
    """

    def __init__(self) -> None:
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> bool:
        """
        Fire the signal.

        Returns:
            True if this call cancelled the token, False if it already was
        """
        if self._reason is not None:
            return False
        self._reason = reason
        return True


class GhostReplay(Iterator[Optional[float]]):
    """
    Lazy, finite replay of a recorded path.

    Yields path[0] .. path[N-1], then None once, then stops for good.
    Stops early when the game_end token fires. Not restartable: build a
    new instance for every replay.
    """

    def __init__(self, path: Sequence[float], game_end: Optional[CancellationToken] = None) -> None:
        self._path = tuple(path)
        self._index = 0
        self._game_end = game_end
        self._stopped = CancellationToken()

    def __len__(self) -> int:
        return len(self._path)

    @property
    def stopped(self) -> bool:
        return self._stopped.cancelled

    @property
    def stop_reason(self) -> Optional[str]:
        return self._stopped.reason

    def cancel(self, reason: str = "cancelled") -> bool:
        return self._stopped.cancel(reason)

    def __iter__(self) -> "GhostReplay":
        return self

    def __next__(self) -> Optional[float]:
        if self._game_end is not None and self._game_end.cancelled:
            self._stopped.cancel("game_end")
        if self._stopped.cancelled:
            raise StopIteration

        i = self._index
        self._index += 1
        if i < len(self._path):
            return self._path[i]

        self._stopped.cancel("exhausted")
        return None


class GhostTimeline(Iterator[Tuple[Optional[float], ...]]):
    """
    All ghosts of a session advanced together, one tuple per tick.

    A ghost that has stopped contributes None. The timeline ends when every
    ghost has stopped or when the game_end token fires, whichever is first.
    """

    def __init__(self, ghosts: List[GhostReplay], game_end: CancellationToken) -> None:
        self._ghosts = list(ghosts)
        self._game_end = game_end
        self._done = False

    @property
    def ghosts(self) -> List[GhostReplay]:
        return list(self._ghosts)

    def __iter__(self) -> "GhostTimeline":
        return self

    def __next__(self) -> Tuple[Optional[float], ...]:
        if self._done or self._game_end.cancelled or all(g.stopped for g in self._ghosts):
            self._done = True
            raise StopIteration

        return tuple(next(g, None) for g in self._ghosts)


def build_timeline(recordings: Sequence[Sequence[float]], game_end: CancellationToken) -> GhostTimeline:
    """Fresh ghosts for every recorded path, bound to one game-end signal."""
    ghosts = [GhostReplay(path, game_end) for path in recordings]
    logger.debug(f"Replaying {len(ghosts)} ghosts")
    return GhostTimeline(ghosts, game_end)
