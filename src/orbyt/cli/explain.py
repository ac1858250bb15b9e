"""Explain command: three-tier plain-language explanation of one file."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..config import load_config
from ..exceptions import OrbytError
from ..explain import ExplanationService, parse_explanation
from ..formatters import RichFormatter
from ..logging_config import setup_logging
from ..scanning import read_source
from . import app
from ._common import ConfigOption, console


@app.command()
def explain(
    file: Path = typer.Argument(..., help="Source file to explain"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Gemini model name"),
    raw: bool = typer.Option(False, "--raw", help="Print the response without splitting it"),
    config: Optional[Path] = ConfigOption,
):
    """Explain a file for a beginner, an intermediate reader and an expert.

    Needs GEMINI_API_KEY in the environment or in a .env file.
    """
    setup_logging()

    try:
        settings = load_config(config_file=config, explain_model=model)
        source = read_source(file)
    except OrbytError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    service = ExplanationService(model=settings.explain_model, max_chars=settings.explain_max_chars)
    text = service.explain(file, source)

    explanation = parse_explanation(text)
    # Failure messages and unstructured answers carry no tier headings
    if raw or not (explanation.intermediate or explanation.technical):
        typer.echo(text)
        return
    RichFormatter(console=console).render_explanation(file.name, explanation)
