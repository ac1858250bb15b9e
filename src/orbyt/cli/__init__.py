"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="orbyt",
    help="Orbyt - repository dependency graphs with size, complexity and churn",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Orbyt[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Build a file/folder dependency graph of a repository."""


# Import subcommands to register them
from .graph import graph as _graph  # noqa: F401, E402
from .stats import stats as _stats  # noqa: F401, E402
from .locate import locate as _locate  # noqa: F401, E402
from .explain import explain as _explain  # noqa: F401, E402


def main() -> None:
    app()
