"""
Tests for replay determinism.

Critical: replaying a recorded log must reproduce the live state sequence.
"""

import os
import tempfile

import pytest

from flappy_engine.core.errors import InvalidTransitionError
from flappy_engine.core.events import Event
from flappy_engine.core.state import GameState
from flappy_engine.log import FileEventStore
from flappy_engine.replay import replay
from flappy_engine.schedule import parse_schedule
from flappy_engine.session import KeyEvent, Session, SessionManager
from flappy_engine.snapshot import SequenceHasher, compute_sequence_hash, compute_state_hash

SCHEDULE = "gap_y,gap_height,time\n0.5,0.4,0.5\n0.3,0.3,2\nbad,0.3,3\n0.6,0.35,4\n"
KEYS = [KeyEvent(ts) for ts in (300, 700, 1100, 1500, 1900, 2300, 2700, 3100)]


def _record(store, session_id="s1", keys=KEYS, max_ticks=None):
    hasher = SequenceHasher()
    result = Session(
        session_id,
        parse_schedule(SCHEDULE),
        keys,
        store=store,
        render=hasher,
        max_ticks=max_ticks,
    ).run()
    return result, hasher


def test_replay_matches_live_session():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "run.log"))
        live, hasher = _record(store)

        result = replay(store)

        assert compute_sequence_hash(result.states) == hasher.hexdigest()
        assert compute_state_hash(result.state) == compute_state_hash(live.final_state)
        assert len(result.states) == live.states


def test_replay_100_runs_identical():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "run.log"))
        _record(store)

        hashes = {compute_state_hash(replay(store).state) for _ in range(100)}

        assert len(hashes) == 1


def test_replay_filters_by_session():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "run.log"))
        manager = SessionManager(parse_schedule(SCHEDULE), store=store)
        first = manager.play(KEYS)
        second = manager.play([])

        r1 = replay(store, session_id=first.session_id)
        r2 = replay(store, session_id=second.session_id)

        assert compute_state_hash(r1.state) == compute_state_hash(first.final_state)
        assert compute_state_hash(r2.state) == compute_state_hash(second.final_state)
        assert r1.applied + r2.applied == sum(1 for _ in store.read())


def test_replay_truncated_session():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "run.log"))
        live, hasher = _record(store, max_ticks=50)

        result = replay(store)

        assert live.truncated is True
        assert result.state.game_end is False
        assert compute_sequence_hash(result.states) == hasher.hexdigest()


def test_replay_partial():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "run.log"))
        _record(store)

        result1 = replay(store, to_seq=9)
        result2 = replay(store, to_seq=9)

        assert result1.applied == 10
        assert compute_state_hash(result1.state) == compute_state_hash(result2.state)


def test_replay_empty_log():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "empty.log"))

        result = replay(store)

        assert result.state == GameState.initial()
        assert result.applied == 0
        assert result.states == (GameState.initial(),)


def test_replay_unknown_event_type():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "run.log"))
        store.append(Event(type="Pause", session_id="s1", ts=16))

        with pytest.raises(InvalidTransitionError):
            replay(store)


def test_separate_runs_into_one_log_replay_independently():
    """Each run recorded into a shared log replays to its own live result."""
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "run.log")
        live = []
        for _ in range(2):
            hasher = SequenceHasher()
            manager = SessionManager(
                parse_schedule(SCHEDULE), store=FileEventStore(log_path), render=hasher, max_ticks=30
            )
            live.append((manager.play(KEYS), hasher.hexdigest()))

        (first, first_hash), (second, second_hash) = live
        assert first.session_id != second.session_id

        store = FileEventStore(log_path)
        r1 = replay(store, session_id=first.session_id)
        r2 = replay(store, session_id=second.session_id)

        assert compute_sequence_hash(r1.states) == first_hash
        assert compute_sequence_hash(r2.states) == second_hash


def test_replay_without_session_stops_at_first_boundary():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, "run.log"))
        first, hasher = _record(store, session_id="a", max_ticks=30)
        _record(store, session_id="b", max_ticks=30)

        result = replay(store)

        assert result.session_id == "a"
        assert result.applied == first.states - 1
        assert compute_sequence_hash(result.states) == hasher.hexdigest()
