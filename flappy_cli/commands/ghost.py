"""
Ghost command: play sessions back to back, replaying earlier runs as ghosts
"""

import json
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from flappy_engine.config import Settings
from flappy_engine.core.errors import ScheduleError
from flappy_engine.log import FileEventStore
from flappy_engine.schedule import load_schedule
from flappy_engine.session import SessionManager

from .run import load_keys, result_summary

console = Console()


class GhostFrames:
    """Ghost render sink counting frames and visible ghosts per session."""

    def __init__(self) -> None:
        self.frames = 0
        self.max_visible = 0

    def reset(self) -> None:
        self.frames = 0
        self.max_visible = 0

    def __call__(self, positions: Tuple[Optional[float], ...]) -> None:
        self.frames += 1
        visible = sum(1 for p in positions if p is not None)
        self.max_visible = max(self.max_visible, visible)


def ghost_command(
    schedule: str = typer.Argument(..., help="Path to obstacle schedule CSV"),
    inputs: Optional[List[str]] = typer.Option(None, "--inputs", "-i", help="Key-down script, one per session"),
    record: Optional[str] = typer.Option(None, "--record", "-r", help="Append applied events to this log"),
    max_ticks: Optional[int] = typer.Option(None, "--max-ticks", help="Stop each session after this many ticks"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Play one session per input script; each session races the ghosts of the
    sessions before it.

    Examples:
        flappy ghost map.csv -i first.txt -i second.txt -i third.txt
    """
    settings = Settings.from_env()
    try:
        pipes = load_schedule(schedule)
        scripts = [load_keys(path) for path in inputs or []] or [[]]
        frames = GhostFrames()

        manager = SessionManager(
            pipes,
            store=FileEventStore(record) if record else None,
            ghost_render=frames,
            max_ticks=settings.max_ticks if max_ticks is None else max_ticks,
        )

        rows = []
        for keys in scripts:
            frames.reset()
            ghosts = len(manager.recordings)
            result = manager.play(keys)
            row = result_summary(result)
            row["ghosts"] = ghosts
            row["ghost_frames"] = frames.frames
            row["max_visible_ghosts"] = frames.max_visible
            rows.append(row)

        if json_output:
            print(json.dumps({"sessions": rows}, indent=2))
        else:
            table = Table(title="Sessions")
            table.add_column("Session", style="yellow")
            table.add_column("Outcome")
            table.add_column("Score", style="green", justify="right")
            table.add_column("Lives", style="red", justify="right")
            table.add_column("Ticks", style="cyan", justify="right")
            table.add_column("Ghosts", justify="right")
            table.add_column("Ghost frames", justify="right")
            for row in rows:
                table.add_row(
                    row["session_id"],
                    row["outcome"],
                    str(row["score"]),
                    str(row["lives"]),
                    str(row["ticks"]),
                    str(row["ghosts"]),
                    str(row["ghost_frames"]),
                )
            console.print(table)

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
