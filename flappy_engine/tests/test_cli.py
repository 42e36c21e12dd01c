"""
Tests for the flappy CLI.
"""

import json
import os
import tempfile

from typer.testing import CliRunner

from flappy_cli.main import app

runner = CliRunner()
ENV = {"FLAPPY_LOG_LEVEL": "ERROR", "FLAPPY_METRICS_ENABLED": "false"}

SCHEDULE = "gap_y,gap_height,time\n0.5,1.0,0\n"
JUMPS = "# one jump every 35 ticks\n" + "\n".join(str(16 + 560 * m) for m in range(7)) + "\n"


def _write(tmpdir, name, contents):
    path = os.path.join(tmpdir, name)
    with open(path, "w") as f:
        f.write(contents)
    return path


def test_run_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        schedule = _write(tmpdir, "map.csv", SCHEDULE)
        inputs = _write(tmpdir, "jumps.txt", JUMPS)

        result = runner.invoke(app, ["run", schedule, "--inputs", inputs, "--json"], env=ENV)

        assert result.exit_code == 0
        summary = json.loads(result.stdout)
        assert summary["outcome"] == "completed"
        assert summary["score"] == 1
        assert summary["lives"] == 3
        assert summary["ticks"] == 217


def test_recorded_run_replays_identically():
    with tempfile.TemporaryDirectory() as tmpdir:
        schedule = _write(tmpdir, "map.csv", SCHEDULE)
        inputs = _write(tmpdir, "jumps.txt", JUMPS)
        log_path = os.path.join(tmpdir, "logs", "run.log")

        run = runner.invoke(
            app, ["run", schedule, "-i", inputs, "--record", log_path, "--json"], env=ENV
        )
        rep = runner.invoke(app, ["replay", "--log", log_path, "--json"], env=ENV)

        assert run.exit_code == 0
        assert rep.exit_code == 0
        live = json.loads(run.stdout)
        replayed = json.loads(rep.stdout)
        assert replayed["sequence_hash"] == live["sequence_hash"]
        assert replayed["state_hash"] == live["state_hash"]
        assert replayed["event_counts"]["Tick"] == 217
        assert replayed["event_counts"]["Jump"] == 7


def test_log_verify_detects_tampering():
    with tempfile.TemporaryDirectory() as tmpdir:
        schedule = _write(tmpdir, "map.csv", SCHEDULE)
        log_path = os.path.join(tmpdir, "run.log")
        runner.invoke(app, ["run", schedule, "--record", log_path, "--json"], env=ENV)

        ok = runner.invoke(app, ["log", "verify", "--log", log_path, "--json"], env=ENV)
        assert ok.exit_code == 0
        assert json.loads(ok.stdout)["valid"] is True

        with open(log_path, "r") as f:
            records = [json.loads(line) for line in f]
        records[3]["event"]["ts"] = 9999
        with open(log_path, "w") as f:
            for rec in records:
                f.write(json.dumps(rec) + "\n")

        bad = runner.invoke(app, ["log", "verify", "--log", log_path], env=ENV)
        assert bad.exit_code == 1

        rep = runner.invoke(app, ["replay", "--log", log_path, "--json"], env=ENV)
        assert rep.exit_code == 1


def test_log_tail_filters_by_type():
    with tempfile.TemporaryDirectory() as tmpdir:
        schedule = _write(tmpdir, "map.csv", SCHEDULE)
        inputs = _write(tmpdir, "jumps.txt", JUMPS)
        log_path = os.path.join(tmpdir, "run.log")
        runner.invoke(app, ["run", schedule, "-i", inputs, "-r", log_path, "--json"], env=ENV)

        result = runner.invoke(
            app, ["log", "tail", "--log", log_path, "--event-type", "Jump", "--json"], env=ENV
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["count"] == 7


def test_ghost_sessions():
    with tempfile.TemporaryDirectory() as tmpdir:
        schedule = _write(tmpdir, "map.csv", SCHEDULE)
        inputs = _write(tmpdir, "jumps.txt", JUMPS)

        result = runner.invoke(
            app, ["ghost", schedule, "-i", inputs, "-i", inputs, "--json"], env=ENV
        )

        assert result.exit_code == 0
        first, second = json.loads(result.stdout)["sessions"]
        assert first["ghosts"] == 0
        assert first["ghost_frames"] == 0
        assert second["ghosts"] == 1
        assert second["ghost_frames"] == second["ticks"]
        assert second["max_visible_ghosts"] == 1


def test_missing_schedule_exits_2():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["run", os.path.join(tmpdir, "missing.csv"), "--json"], env=ENV)

        assert result.exit_code == 2
        assert "error" in json.loads(result.stdout)


def test_missing_log_exits_2():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["log", "verify", "--log", os.path.join(tmpdir, "none.log")], env=ENV)

        assert result.exit_code == 2


def test_version():
    result = runner.invoke(app, ["version"], env=ENV)

    assert result.exit_code == 0
    assert "0.1.0" in result.stdout


def test_runs_sharing_a_log_get_distinct_sessions():
    with tempfile.TemporaryDirectory() as tmpdir:
        schedule = _write(tmpdir, "map.csv", SCHEDULE)
        log_path = os.path.join(tmpdir, "run.log")
        args = ["run", schedule, "--record", log_path, "--max-ticks", "30", "--json"]

        first = json.loads(runner.invoke(app, args, env=ENV).stdout)
        second = json.loads(runner.invoke(app, args, env=ENV).stdout)
        assert first["session_id"] != second["session_id"]

        rep = runner.invoke(
            app, ["replay", "--log", log_path, "--session", second["session_id"], "--json"], env=ENV
        )

        replayed = json.loads(rep.stdout)
        assert replayed["session_id"] == second["session_id"]
        assert replayed["state_hash"] == second["state_hash"]
        assert replayed["sequence_hash"] == second["sequence_hash"]


def test_zero_tick_cap_is_honoured():
    with tempfile.TemporaryDirectory() as tmpdir:
        schedule = _write(tmpdir, "map.csv", SCHEDULE)

        result = runner.invoke(app, ["run", schedule, "--max-ticks", "0", "--json"], env=ENV)

        summary = json.loads(result.stdout)
        assert summary["outcome"] == "truncated"
        assert summary["ticks"] == 0
