#!/usr/bin/env python3
"""
Flappy CLI

Main entrypoint for the flappy command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from flappy_cli.commands import ghost, log, replay, run
from flappy_engine.config import Settings
from flappy_engine.logging_config import setup_logging
from flappy_engine.metrics import init_metrics, start_metrics_server

app = typer.Typer(
    name="flappy",
    help="Deterministic Flappy engine CLI",
    add_completion=False,
)

console = Console()

app.add_typer(log.app, name="log", help="Event log operations")

app.command(name="run")(run.run_command)
app.command(name="ghost")(ghost.ghost_command)
app.command(name="replay")(replay.replay_command)


@app.callback()
def configure():
    """Configure logging and metrics from the environment."""
    settings = Settings.from_env()
    setup_logging(settings)
    init_metrics()
    start_metrics_server(settings.metrics_enabled, settings.metrics_port)


@app.command()
def version():
    """Show version information."""
    from flappy_cli import __version__
    from flappy_engine import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Flappy CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
