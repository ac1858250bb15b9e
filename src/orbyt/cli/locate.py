"""Locate command: map a node id back to its filesystem path."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import OrbytError
from ..logging_config import setup_logging
from . import app
from ._common import ConfigOption, build_for_path, console, resolve_config


@app.command()
def locate(
    path: Path = typer.Argument(..., help="Repository root the graph was built from"),
    node_id: str = typer.Argument(..., help="Node id from the graph payload"),
    config: Optional[Path] = ConfigOption,
):
    """Print the file path behind a node id (what a renderer opens on click)."""
    setup_logging(quiet=True)

    try:
        # Node ids do not depend on history
        settings = resolve_config(config=config, churn="off", quiet=True)
        repo_graph = build_for_path(path, settings)
    except OrbytError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    node_path = repo_graph.node_path(node_id)
    if node_path is None:
        console.print(f"[yellow]No node with id '{escape(node_id)}'.[/yellow]")
        raise typer.Exit(1)
    typer.echo(node_path)
