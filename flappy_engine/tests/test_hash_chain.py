"""
Tests for hash chain integrity.

Critical: Hash chain must detect any tampering.
"""

import json
import os
import tempfile

import pytest

from flappy_engine.core.errors import IntegrityError
from flappy_engine.core.events import JUMP, TICK, Event
from flappy_engine.log import FileEventStore, verify_chain
from flappy_engine.log.integrity import ZERO_HASH, hash_event


def _fill(store, n):
    for i in range(n):
        store.append(Event(type=TICK, session_id="s1", ts=16 * (i + 1)))


def test_genesis_event_has_zero_hash():
    """First event must chain to ZERO_HASH."""
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "test.log")
        store = FileEventStore(log_path)

        result = store.append(Event(type=TICK, session_id="s1", ts=16))

        with open(log_path, "r") as f:
            rec = json.loads(f.readline())

        assert rec["prev_hash"] == ZERO_HASH
        assert result.seq == 0


def test_hash_chain_links():
    """Each event must chain to previous event hash."""
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "test.log")
        _fill(FileEventStore(log_path), 5)

        with open(log_path, "r") as f:
            records = [json.loads(line) for line in f]

        for i in range(1, len(records)):
            assert records[i]["prev_hash"] == records[i - 1]["event_hash"]
        assert [r["event"]["seq"] for r in records] == [0, 1, 2, 3, 4]


def test_hash_determinism():
    e = Event(type=JUMP, session_id="s1", seq=0, ts=40, meta={"key": "Space"})

    h1 = hash_event(ZERO_HASH, e)
    h2 = hash_event(ZERO_HASH, e)

    assert h1 == h2
    assert len(h1) == 64


def test_payload_key_order_does_not_affect_hash():
    e1 = Event(type=TICK, session_id="s1", seq=0, ts=16, payload={"a": 1, "b": 2})
    e2 = Event(type=TICK, session_id="s1", seq=0, ts=16, payload={"b": 2, "a": 1})

    assert hash_event(ZERO_HASH, e1) == hash_event(ZERO_HASH, e2)


def test_intact_chain_verifies():
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "test.log")
        store = FileEventStore(log_path)
        _fill(store, 10)

        result = verify_chain(log_path)

        assert result.valid is True
        assert result.checked == 10
        assert store.get_last_hash() != ZERO_HASH


def test_hash_chain_break_detection():
    """Editing a recorded event must be detected at that event."""
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "test.log")
        _fill(FileEventStore(log_path), 10)

        with open(log_path, "r") as f:
            records = [json.loads(line) for line in f]

        records[5]["event"]["type"] = JUMP

        with open(log_path, "w") as f:
            for rec in records:
                f.write(json.dumps(rec) + "\n")

        result = verify_chain(log_path)

        assert result.valid is False
        assert result.error == "event_hash mismatch"
        assert result.mismatch_seq == 5
        assert result.checked == 5


def test_store_verify_raises_on_tamper():
    with tempfile.TemporaryDirectory() as tmpdir:
        log_path = os.path.join(tmpdir, "test.log")
        store = FileEventStore(log_path)
        _fill(store, 4)
        assert store.verify() == 4

        with open(log_path, "r") as f:
            lines = f.readlines()
        # Dropping a record breaks the link of the one after it
        del lines[1]
        with open(log_path, "w") as f:
            f.writelines(lines)

        with pytest.raises(IntegrityError, match="prev_hash mismatch at seq 2"):
            store.verify()
