"""
Event log commands: tail, verify
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from flappy_engine.config import Settings
from flappy_engine.log import verify_chain

app = typer.Typer()
console = Console()


@app.command()
def tail(
    log_path: Optional[str] = typer.Option(
        None,
        "--log",
        "-l",
        help="Path to event log file (default: $FLAPPY_LOG_DIR/session-events.log)",
    ),
    lines: Optional[int] = typer.Option(None, "--lines", "-n", help="Number of lines to show"),
    event_type: Optional[str] = typer.Option(None, "--event-type", "-t", help="Filter by event type"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the last events of a log.

    Examples:
        flappy log tail
        flappy log tail --lines 10
        flappy log tail --event-type Jump --json
    """
    log_path = log_path or Settings.from_env().event_log_path()
    try:
        events_data = []
        with open(log_path, "r") as f:
            for line in f:
                if not line.strip():
                    continue
                rec = json.loads(line)
                if event_type and rec["event"].get("type") != event_type:
                    continue
                events_data.append(rec)

        if not events_data:
            if not json_output:
                console.print("[yellow]Event log is empty[/yellow]")
            else:
                print(json.dumps({"events": [], "count": 0}))
            raise typer.Exit(0)

        if lines:
            events_data = events_data[-lines:]

        if json_output:
            print(json.dumps({"events": events_data, "count": len(events_data)}, indent=2))
        else:
            table = Table(title=f"Event Log: {log_path}")
            table.add_column("Seq", style="cyan")
            table.add_column("Type", style="green")
            table.add_column("Session", style="yellow")
            table.add_column("ts (ms)", justify="right")
            table.add_column("Hash (prefix)", style="dim")

            for rec in events_data:
                ev = rec["event"]
                table.add_row(
                    str(ev.get("seq", "N/A")),
                    ev.get("type", "N/A"),
                    ev.get("session_id", "N/A"),
                    f"{ev.get('ts', 0):g}",
                    rec.get("event_hash", "N/A")[:16],
                )

            console.print(table)
            console.print(f"\n[bold]Total events:[/bold] {len(events_data)}")

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


@app.command()
def verify(
    log_path: Optional[str] = typer.Option(
        None,
        "--log",
        "-l",
        help="Path to event log file (default: $FLAPPY_LOG_DIR/session-events.log)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify the hash chain of an event log.

    Exit code 0 when intact, 1 when tampered, 2 on read errors.
    """
    log_path = log_path or Settings.from_env().event_log_path()
    try:
        result = verify_chain(log_path)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)

    if json_output:
        print(
            json.dumps(
                {
                    "valid": result.valid,
                    "checked": result.checked,
                    "error": result.error,
                    "mismatch_seq": result.mismatch_seq,
                },
                indent=2,
            )
        )
    elif result.valid:
        console.print(f"[green]✓ Hash chain intact ({result.checked} events)[/green]")
    else:
        console.print(f"[red]✗ {result.error} at seq {result.mismatch_seq}[/red]")
        console.print(f"  expected: {result.expected}")
        console.print(f"  actual:   {result.actual}")

    raise typer.Exit(0 if result.valid else 1)
