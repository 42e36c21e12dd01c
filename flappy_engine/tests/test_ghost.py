"""
Tests for ghost replays.
"""

import pytest

from flappy_engine.replay import CancellationToken, GhostReplay, build_timeline


def test_ghost_yields_path_then_single_none():
    ghost = GhostReplay([1.0, 2.0, 3.0])

    assert list(ghost) == [1.0, 2.0, 3.0, None]
    with pytest.raises(StopIteration):
        next(ghost)
    assert ghost.stop_reason == "exhausted"


def test_empty_path_yields_only_none():
    assert list(GhostReplay([])) == [None]


def test_game_end_stops_ghost_early():
    token = CancellationToken()
    ghost = GhostReplay([1.0, 2.0, 3.0], token)

    assert next(ghost) == 1.0
    token.cancel("game_end")

    assert list(ghost) == []
    assert ghost.stop_reason == "game_end"


def test_first_cancel_wins():
    token = CancellationToken()

    assert token.cancel("game_end") is True
    assert token.cancel("exhausted") is False
    assert token.reason == "game_end"


def test_timeline_advances_ghosts_together():
    token = CancellationToken()
    timeline = build_timeline([[10.0], [20.0, 21.0, 22.0]], token)

    assert list(timeline) == [
        (10.0, 20.0),
        (None, 21.0),
        (None, 22.0),
        (None, None),
    ]


def test_timeline_without_ghosts_is_empty():
    assert list(build_timeline([], CancellationToken())) == []


def test_timeline_stops_on_game_end():
    token = CancellationToken()
    timeline = build_timeline([[1.0, 2.0, 3.0]], token)

    assert next(timeline) == (1.0,)
    token.cancel("game_end")

    assert next(timeline, None) is None
