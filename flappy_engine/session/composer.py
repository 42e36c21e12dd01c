"""
Event stream composition and the authoritative fold.

compose() merges the tick source with the finite spawn and input sources
into one ordered event stream; fold_states() applies that stream to an
initial state and yields every state up to and including the first one
with game_end set.
"""

from typing import Iterable, Iterator, Optional

from ..core.events import Event
from ..core.reducer import Reducer, default_reducer
from ..core.state import GameState
from .queue import EventQueue


def compose(ticks: Iterable[Event], *sources: Iterable[Event]) -> Iterator[Event]:
    """
    Merge sources into dispatch order.

    Each tick closes a fixed step: everything due up to and including the
    tick's ts is collected, sorted by (ts, priority, arrival) and emitted.
    Events due after the last tick are never emitted.
    """
    queue = EventQueue()
    for source in sources:
        queue.extend(source)

    for tick_event in ticks:
        queue.push(tick_event)
        yield from queue.drain_until(tick_event.ts)


def fold_states(
    events: Iterable[Event],
    initial: Optional[GameState] = None,
    reducer: Optional[Reducer] = None,
) -> Iterator[GameState]:
    """
    Fold events over the initial state.

    Yields the initial state first, then one state per applied event. Stops
    right after the first state with game_end=True; later events are not
    consumed.
    """
    reducer = reducer or default_reducer()
    state = initial if initial is not None else GameState.initial()
    yield state
    if state.game_end:
        return

    for event in events:
        state = reducer.apply(state, event)
        yield state
        if state.game_end:
            return
