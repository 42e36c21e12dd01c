"""
Deterministic clock implementation.

The tick clock is the only time source of a session. It advances in fixed
steps and never reads system time, so replay produces identical timestamps.
"""

from dataclasses import dataclass

from .constants import TICK_RATE_MS


@dataclass(frozen=True)
class DeterministicClock:
    """
    Deterministic time source (ms from session start).

    Since DeterministicClock is immutable, tick() returns a new instance.
    """
    current: int = 0
    step: int = TICK_RATE_MS

    def now(self) -> int:
        """Get current timestamp without advancing."""
        return self.current

    def tick(self) -> "DeterministicClock":
        """Advance clock by one step and return new clock instance."""
        return DeterministicClock(self.current + self.step, self.step)
