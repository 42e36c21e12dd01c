"""
Replay runner: rebuild a session's state sequence from the event log.

Replay is pure: applies the reducer to each logged event in sequence order,
stopping at the terminal state exactly like the live fold.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.reducer import Reducer, default_reducer
from ..core.state import GameState
from ..log.store import EventStore


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying events
        applied: Number of events applied
        states: Every state of the fold, initial state included
        session_id: Session that was replayed (None for an empty log)
    """
    state: GameState
    applied: int
    states: Tuple[GameState, ...]
    session_id: Optional[str] = None


def replay(
    store: EventStore,
    reducer: Optional[Reducer] = None,
    session_id: Optional[str] = None,
    to_seq: Optional[int] = None,
) -> ReplayResult:
    """
    Replay logged events to reconstruct game states.

    Same events always produce the same states.

    Args:
        store: Event store to read from
        reducer: Reducer with registered handlers (default: tick/spawn/jump)
        session_id: Session to replay (None = the first session in the log)
        to_seq: Stop at this sequence (inclusive, None = all)

    Returns:
        ReplayResult with final state, count and state sequence
    """
    reducer = reducer or default_reducer()
    st = GameState.initial()
    states = [st]
    count = 0

    for ev in store.read(session_id=session_id, from_seq=0):
        if to_seq is not None and ev.require_seq() > to_seq:
            break
        if session_id is None:
            session_id = ev.session_id
        elif ev.session_id != session_id:
            break
        if st.game_end:
            break
        st = reducer.apply(st, ev)
        states.append(st)
        count += 1

    return ReplayResult(state=st, applied=count, states=tuple(states), session_id=session_id)
