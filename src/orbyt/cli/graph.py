"""Graph command: build the repository graph and emit its JSON payload."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import OrbytError
from ..formatters import JsonFormatter
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
def graph(
    path: Path = typer.Argument(Path("."), help="Repository root to scan"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the payload to a file instead of stdout",
        dir_okay=False,
    ),
    no_folders: bool = typer.Option(
        False,
        "--no-folders",
        help="Emit file nodes and import edges only",
    ),
    relative_first: bool = typer.Option(
        False,
        "--relative-first",
        help="Resolve ./ and ../ imports against the importing file first",
    ),
    churn: Optional[str] = ChurnOption,
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
    quiet: bool = QuietOption,
):
    """
    Build the graph and print the renderer payload (nodes, edges, stats) as JSON.

    [bold cyan]Examples:[/bold cyan]

      orbyt graph

      orbyt graph path/to/repo --churn off -o graph.json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            churn=churn,
            include_folders=False if no_folders else None,
            relative_first=True if relative_first else None,
            verbose=verbose,
            quiet=quiet,
        )
        repo_graph = build_for_path(path, settings)
        text = JsonFormatter().format(repo_graph)

        if output is None:
            typer.echo(text)
        else:
            output.write_text(text + "\n", encoding="utf-8")
            console.print(
                f"Wrote [bold]{repo_graph.stats.total_files}[/bold] files "
                f"to [cyan]{escape(str(output))}[/cyan]"
            )

    except OrbytError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)
