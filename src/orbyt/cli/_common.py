"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.console import Console

from ..api import RepoGraph, build_repo_graph
from ..config import AnalysisConfig, load_config
from ..exceptions import InvalidPathError

console = Console()

CHURN_CHOICE = click.Choice(["history", "per_file", "off"], case_sensitive=False)

# Shared option declarations
ConfigOption = typer.Option(
    None,
    "-c",
    "--config",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
ChurnOption = typer.Option(
    None,
    "--churn",
    help="Churn strategy: history | per_file | off",
    click_type=CHURN_CHOICE,
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging")
QuietOption = typer.Option(False, "--quiet", "-q", help="Only log errors")


def resolve_config(
    config: Optional[Path] = None,
    churn: Optional[str] = None,
    include_folders: Optional[bool] = None,
    relative_first: Optional[bool] = None,
    top_n: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build config from CLI options; unset options keep file/env values."""
    overrides = {
        "churn_mode": churn.lower() if churn else None,
        "include_folders": include_folders,
        "relative_first": relative_first,
        "top_n": top_n,
        "verbose": verbose,
        "quiet": quiet,
    }
    return load_config(config_file=config, **overrides)


def build_for_path(path: Path, config: AnalysisConfig) -> RepoGraph:
    """Build a graph, treating a missing directory as a user error."""
    if not path.is_dir():
        raise InvalidPathError(path, "not a directory")
    return build_repo_graph(path, config)
