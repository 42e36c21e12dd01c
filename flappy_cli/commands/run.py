"""
Run command: play one headless session and report the outcome
"""

import json
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from flappy_engine.config import Settings
from flappy_engine.core.errors import ScheduleError
from flappy_engine.core.state import GameState
from flappy_engine.log import FileEventStore
from flappy_engine.metrics import track_duration
from flappy_engine.schedule import load_schedule
from flappy_engine.session import KeyEvent, RenderSink, SessionManager, SessionResult, load_input_script
from flappy_engine.snapshot import SequenceHasher, compute_state_hash

console = Console()


def outcome(result: SessionResult) -> str:
    if result.truncated:
        return "truncated"
    if result.final_state.lives <= 0:
        return "lost"
    return "completed"


def result_summary(result: SessionResult) -> dict:
    state = result.final_state
    return {
        "session_id": result.session_id,
        "outcome": outcome(result),
        "score": state.score,
        "lives": state.lives,
        "game_time": state.game_time,
        "ticks": result.ticks,
        "states": result.states,
        "state_hash": compute_state_hash(state),
    }


class StateTrace:
    """Render sink that keeps every n-th state for a summary table."""

    def __init__(self, every: int) -> None:
        self.every = every
        self.rows: List[GameState] = []
        self._seen = 0

    def __call__(self, state: GameState) -> None:
        if self.every > 0 and (self._seen % self.every == 0 or state.game_end):
            self.rows.append(state)
        self._seen += 1

    def table(self) -> Table:
        table = Table(title="State Trace")
        table.add_column("Time (ms)", style="cyan", justify="right")
        table.add_column("Bird Y", justify="right")
        table.add_column("Velocity", justify="right")
        table.add_column("Pipes", justify="right")
        table.add_column("Score", style="green", justify="right")
        table.add_column("Lives", style="red", justify="right")
        for s in self.rows:
            table.add_row(
                f"{s.game_time:g}",
                f"{s.bird.vertical_position:.2f}",
                f"{s.bird.vertical_velocity:.2f}",
                str(len(s.pipes)),
                str(s.score),
                str(s.lives),
            )
        return table


def fan_out(*sinks: RenderSink) -> RenderSink:
    def render(state: GameState) -> None:
        for sink in sinks:
            sink(state)

    return render


def load_keys(inputs: Optional[str]) -> List[KeyEvent]:
    return load_input_script(inputs) if inputs else []


def run_command(
    schedule: str = typer.Argument(..., help="Path to obstacle schedule CSV"),
    inputs: Optional[str] = typer.Option(None, "--inputs", "-i", help="Key-down script (ts_ms[,key] per line)"),
    record: Optional[str] = typer.Option(None, "--record", "-r", help="Append applied events to this log"),
    max_ticks: Optional[int] = typer.Option(None, "--max-ticks", help="Stop after this many ticks"),
    trace_every: int = typer.Option(0, "--trace-every", "-t", help="Show every n-th state (0 = off)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Play one session headlessly.

    Examples:
        flappy run map.csv
        flappy run map.csv --inputs jumps.txt --record /tmp/flappy-logs/run.log
        flappy run map.csv --trace-every 60
    """
    settings = Settings.from_env()
    try:
        pipes = load_schedule(schedule)
        keys = load_keys(inputs)
        store = FileEventStore(record) if record else None
        trace = StateTrace(trace_every)
        hasher = SequenceHasher()

        manager = SessionManager(
            pipes,
            store=store,
            render=fan_out(trace, hasher),
            max_ticks=settings.max_ticks if max_ticks is None else max_ticks,
        )
        with track_duration("session"):
            result = manager.play(keys)

        summary = result_summary(result)
        summary["sequence_hash"] = hasher.hexdigest()

        if json_output:
            print(json.dumps(summary, indent=2))
        else:
            style = {"completed": "green", "lost": "red", "truncated": "yellow"}[summary["outcome"]]
            console.print(f"[{style}]Session {result.session_id} {summary['outcome']}[/{style}]")
            console.print(f"  Score: [green]{summary['score']}[/green]")
            console.print(f"  Lives: [red]{summary['lives']}[/red]")
            console.print(f"  Ticks: [cyan]{summary['ticks']}[/cyan]")
            console.print(f"  State hash: [yellow]{summary['state_hash']}[/yellow]")
            if record:
                console.print(f"  Recorded to: {record}")
            if trace.rows:
                console.print(trace.table())

        raise typer.Exit(0)

    except typer.Exit:
        raise
    except ScheduleError as e:
        if json_output:
            print(json.dumps({"error": str(e), "path": schedule}))
        else:
            console.print(f"[red]Schedule error:[/red] {e}")
        raise typer.Exit(2)
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
