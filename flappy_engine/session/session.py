"""
Game sessions and their lifecycle.

A Session is one game: a spawn schedule plus recorded key-downs folded on the
tick clock until the game ends. SessionManager admits at most one active
session, turns every finished session's path into a ghost, and signals
game end to the ghosts replaying alongside the current session.
"""

import logging
from dataclasses import dataclass
from itertools import islice
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.events import TICK, Event
from ..core.ids import session_id as make_session_id
from ..core.reducer import Reducer, default_reducer
from ..core.state import GameState, Pipe
from ..log.store import EventStore
from ..logging_config import get_logger
from ..metrics import track_event, track_session
from ..replay.ghost import CancellationToken, GhostTimeline, build_timeline
from ..schedule.parser import spawn_events
from .composer import compose, fold_states
from .sources import KeyEvent, input_events, tick_events

logger = logging.getLogger(__name__)

RenderSink = Callable[[GameState], None]
GhostRenderSink = Callable[[Tuple[Optional[float], ...]], None]


@dataclass(frozen=True)
class SessionResult:
    """
    Outcome of a consumed session.

    Fields:
        session_id: Session identifier
        final_state: Last state produced
        states: Number of states produced (initial included)
        ticks: Number of Tick events applied
        path: Bird vertical position of every produced state
        truncated: Tick cap reached before the game ended
    """
    session_id: str
    final_state: GameState
    states: int
    ticks: int
    path: Tuple[float, ...]
    truncated: bool


class Session:
    """
    One game, iterated as its sequence of states.

    Usage:
        session = Session("s1", pipes, keys)
        for state in session:
            render(state)

    Iteration stops after the terminal state. A Session can be iterated once.
    """

    def __init__(
        self,
        session_id: str,
        pipes: Sequence[Pipe],
        keys: Iterable[KeyEvent] = (),
        reducer: Optional[Reducer] = None,
        store: Optional[EventStore] = None,
        render: Optional[RenderSink] = None,
        max_ticks: Optional[int] = None,
        on_finish: Optional[Callable[["Session"], None]] = None,
    ) -> None:
        self.session_id = session_id
        self.reducer = reducer or default_reducer()
        self.store = store
        self.render = render
        self.max_ticks = max_ticks
        self.on_finish = on_finish

        self._spawns = spawn_events(pipes, session_id)
        self._inputs = input_events(keys, session_id)

        self.path: List[float] = []
        self.last_event: Optional[Event] = None
        self.final_state: Optional[GameState] = None
        self.states = 0
        self.ticks = 0
        self.started = False
        self.finished = False
        self.truncated = False
        self._log = get_logger(__name__, trace_id=session_id)

    def events(self) -> Iterator[Event]:
        """The composed event stream of this session, in dispatch order."""
        ticks: Iterable[Event] = tick_events(self.session_id)
        if self.max_ticks is not None:
            ticks = islice(ticks, self.max_ticks)
        return compose(ticks, self._spawns, self._inputs)

    def _recorded(self, events: Iterable[Event]) -> Iterator[Event]:
        for event in events:
            if self.store is not None:
                self.store.append(event)
            track_event(event.type)
            if event.type == TICK:
                self.ticks += 1
            self.last_event = event
            yield event

    def __iter__(self) -> Iterator[GameState]:
        if self.started:
            raise RuntimeError(f"Session {self.session_id} has already been consumed")
        self.started = True

        self._log.info(
            f"Session started with {len(self._spawns)} spawns and {len(self._inputs)} jumps"
        )
        for state in fold_states(self._recorded(self.events()), GameState.initial(), self.reducer):
            self.states += 1
            self.final_state = state
            self.path.append(state.bird.vertical_position)
            if self.render is not None:
                self.render(state)
            try:
                yield state
            finally:
                # Terminal state observed, or the iterator closed right after it
                if state.game_end and not self.finished:
                    self._finish()

        if not self.finished:
            self.truncated = True
            self._finish()

    def _finish(self) -> None:
        self.finished = True
        state = self.final_state
        if self.truncated:
            self._log.warning(f"Session stopped at tick cap {self.max_ticks} before game end")
            track_session("truncated")
        else:
            self._log.info(
                f"Session ended: score={state.score} lives={state.lives} ticks={self.ticks}"
            )
            track_session("ended")
        if self.on_finish is not None:
            self.on_finish(self)

    def run(self) -> SessionResult:
        """Consume the whole session and summarize it."""
        for _ in self:
            pass
        return self.result()

    def result(self) -> SessionResult:
        if not self.finished:
            raise RuntimeError(f"Session {self.session_id} has not finished")
        return SessionResult(
            session_id=self.session_id,
            final_state=self.final_state,
            states=self.states,
            ticks=self.ticks,
            path=tuple(self.path),
            truncated=self.truncated,
        )


class SessionManager:
    """
    Session admission control and ghost bookkeeping.

    - start() while a session is active is ignored (returns None)
    - a session stays active until its terminal state has been observed
    - every finished session's path becomes a ghost for the next sessions
    - session ids are salted with the event log's last hash, so runs
      recorded into one log never share an id
    """

    def __init__(
        self,
        pipes: Sequence[Pipe],
        reducer: Optional[Reducer] = None,
        store: Optional[EventStore] = None,
        render: Optional[RenderSink] = None,
        ghost_render: Optional[GhostRenderSink] = None,
        max_ticks: Optional[int] = None,
    ) -> None:
        self.pipes = list(pipes)
        self.reducer = reducer or default_reducer()
        self.store = store
        self.render = render
        self.ghost_render = ghost_render
        self.max_ticks = max_ticks

        self.recordings: List[Tuple[float, ...]] = []
        self.results: List[SessionResult] = []
        self.timeline: Optional[GhostTimeline] = None
        self._active: Optional[Session] = None
        self._game_end: Optional[CancellationToken] = None
        self._count = 0

    @property
    def active(self) -> Optional[Session]:
        return self._active

    def start(self, keys: Iterable[KeyEvent] = ()) -> Optional[Session]:
        """
        Start a new session unless one is already active.

        Returns:
            The new Session, or None when the start trigger was ignored
        """
        if self._active is not None:
            logger.info(f"Start ignored, session {self._active.session_id} is still active")
            track_session("ignored")
            return None

        self._count += 1
        salt = self.store.get_last_hash() if self.store is not None else None
        sid = make_session_id(self._count, salt=salt or "")
        self._game_end = CancellationToken()
        self.timeline = build_timeline(self.recordings, self._game_end)

        session = Session(
            sid,
            self.pipes,
            keys,
            reducer=self.reducer,
            store=self.store,
            render=self.render,
            max_ticks=self.max_ticks,
            on_finish=self._on_finish,
        )
        self._active = session
        track_session("started")
        return session

    def _on_finish(self, session: Session) -> None:
        if session is not self._active:
            return
        self.recordings.append(tuple(session.path))
        self.results.append(session.result())
        if self._game_end is not None:
            self._game_end.cancel("game_end")
        self._active = None

    def play(self, keys: Iterable[KeyEvent] = ()) -> Optional[SessionResult]:
        """
        Start a session and drive it to the end, replaying earlier ghosts on
        every tick alongside it.

        Returns:
            SessionResult, or None if a session was already active
        """
        session = self.start(keys)
        if session is None:
            return None

        timeline = self.timeline
        for _ in session:
            if session.last_event is None or session.last_event.type != TICK:
                continue
            positions = next(timeline, None)
            if positions is not None and self.ghost_render is not None:
                self.ghost_render(positions)

        return session.result()
