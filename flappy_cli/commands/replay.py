"""
Replay command: rebuild game states from a recorded event log
"""

import json
import os
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from flappy_engine.config import Settings
from flappy_engine.core.errors import IntegrityError
from flappy_engine.log import FileEventStore
from flappy_engine.metrics import track_duration
from flappy_engine.replay import replay as replay_events
from flappy_engine.snapshot import compute_sequence_hash, compute_state_hash

console = Console()


def replay_command(
    log_path: Optional[str] = typer.Option(
        None,
        "--log",
        "-l",
        help="Path to event log file (default: $FLAPPY_LOG_DIR/session-events.log)",
    ),
    session_id: Optional[str] = typer.Option(None, "--session", "-s", help="Replay only this session"),
    until: Optional[int] = typer.Option(None, "--until", "-u", help="Replay until sequence number"),
    show_state: bool = typer.Option(False, "--show-state", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify the hash chain, then replay the event log.

    Examples:
        flappy replay --log /tmp/flappy-logs/run.log
        flappy replay --log run.log --until 200
        flappy replay --log run.log --session session-1-5a0c9e1f --json

    Without --session the first session in the log is replayed.
    """
    log_path = log_path or Settings.from_env().event_log_path()
    try:
        if not os.path.exists(log_path):
            raise FileNotFoundError(log_path)
        store = FileEventStore(log_path)
        try:
            checked = store.verify()
        except IntegrityError as e:
            if json_output:
                print(json.dumps({"error": str(e), "path": log_path}))
            else:
                console.print(f"[red]✗ Hash chain broken:[/red] {e}")
            raise typer.Exit(1)

        if not json_output:
            console.print("[bold]Replaying event log...[/bold]")

        with track_duration("replay"):
            result = replay_events(store, session_id=session_id, to_seq=until)

        state = result.state
        event_types = {}
        for event in store.read(session_id=result.session_id):
            if until is not None and event.require_seq() > until:
                break
            event_types[event.type] = event_types.get(event.type, 0) + 1

        if json_output:
            output = {
                "success": True,
                "session_id": result.session_id,
                "events_replayed": result.applied,
                "events_verified": checked,
                "score": state.score,
                "lives": state.lives,
                "game_end": state.game_end,
                "state_hash": compute_state_hash(state),
                "sequence_hash": compute_sequence_hash(result.states),
                "event_counts": event_types,
            }
            if show_state:
                output["state"] = state.to_dict()
            print(json.dumps(output, indent=2))
        else:
            console.print(f"[green]✓ Replayed {result.applied} events successfully[/green]")
            console.print(f"  Session: [yellow]{result.session_id}[/yellow]")
            console.print(f"  Score: [green]{state.score}[/green]  Lives: [red]{state.lives}[/red]")
            console.print(f"  Game ended: [cyan]{state.game_end}[/cyan]")
            console.print(f"  State hash: [yellow]{compute_state_hash(state)}[/yellow]")

            table = Table(title="Event Counts")
            table.add_column("Event Type", style="green")
            table.add_column("Count", style="cyan", justify="right")

            for event_type in sorted(event_types.keys()):
                table.add_row(event_type, str(event_types[event_type]))

            console.print(table)

            if show_state:
                console.print("\n[bold]Final State:[/bold]")
                console.print(Syntax(json.dumps(state.to_dict(), indent=2), "json", theme="monokai"))

        raise typer.Exit(0)

    except typer.Exit:
        raise
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
