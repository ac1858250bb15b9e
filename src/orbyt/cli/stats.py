"""Stats command: summary panel, most-edited files and clusters."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import OrbytError
from ..formatters import RichFormatter
from ..logging_config import setup_logging
from . import app
from ._common import (
    ChurnOption,
    ConfigOption,
    QuietOption,
    VerboseOption,
    build_for_path,
    console,
    resolve_config,
)


@app.command()
def stats(
    path: Path = typer.Argument(Path("."), help="Repository root to scan"),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Number of most-edited files to list",
        min=1,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output the stats object as JSON",
    ),
    churn: Optional[str] = ChurnOption,
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
    quiet: bool = QuietOption,
):
    """Summarize file count, clusters, average complexity and churn."""
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config, churn=churn, top_n=top, verbose=verbose, quiet=quiet
        )
        repo_graph = build_for_path(path, settings)
    except OrbytError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(repo_graph.stats.to_dict(), indent=2))
    else:
        RichFormatter(console=console).render(repo_graph)
