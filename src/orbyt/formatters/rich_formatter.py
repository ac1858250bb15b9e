"""Rich terminal formatter for Orbyt."""

from collections import Counter
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..api import RepoGraph
from ..explain import Explanation
from ..graph import ROOT_CLUSTER, EdgeKind
from .base import BaseFormatter


def _complexity_label(value: float) -> str:
    if value >= 20:
        return "[red bold]very high[/red bold]"
    elif value >= 10:
        return "[red]high[/red]"
    elif value >= 5:
        return "[yellow]moderate[/yellow]"
    else:
        return "[green]low[/green]"


class RichFormatter(BaseFormatter):
    """Summary panel, most-edited table and cluster table."""

    def __init__(self, console: Optional[Console] = None, max_clusters: int = 15):
        self.console = console or Console()
        self.max_clusters = max_clusters

    def render(self, graph: RepoGraph) -> None:
        self._print_summary(graph)
        self._print_most_edited(graph)
        self._print_clusters(graph)

    def format(self, graph: RepoGraph) -> str:
        with self.console.capture() as capture:
            self.render(graph)
        return capture.get()

    def render_explanation(self, file_label: str, explanation: Explanation) -> None:
        """Print the three explanation tiers for one file."""
        self.console.print(
            Panel(
                f"[bold]{escape(file_label)}[/bold]",
                title="[bold cyan]Explain[/bold cyan]",
                expand=False,
            )
        )
        self.console.print()
        for title, body in explanation.sections():
            if not body:
                continue
            self.console.print(f"[bold]{title}[/bold]")
            self.console.print(body, markup=False)
            self.console.print()

    # -- private helpers --

    def _print_summary(self, graph: RepoGraph) -> None:
        stats = graph.stats
        imports = graph.store.edges(EdgeKind.IMPORT)
        cross = sum(1 for e in imports if e.inter_folder)
        summary_text = (
            f"Scanned [bold]{stats.total_files}[/bold] files in "
            f"[cyan]{stats.clusters}[/cyan] clusters  |  "
            f"[yellow]{len(imports)}[/yellow] imports "
            f"([yellow]{cross}[/yellow] cross-folder)  |  "
            f"Avg complexity: [blue]{stats.avg_complexity:.2f}[/blue] "
            f"({_complexity_label(stats.avg_complexity)})"
        )
        self.console.print(
            Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False)
        )
        self.console.print()

    def _print_most_edited(self, graph: RepoGraph) -> None:
        entries = graph.stats.most_edited
        if not entries:
            self.console.print("[dim]No git history found for the scanned files.[/dim]")
            self.console.print()
            return

        table = Table(title=f"Top {len(entries)} Most Edited Files", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("File", style="yellow", no_wrap=False, ratio=3)
        table.add_column("Commits", justify="right", width=9)

        root = graph.root
        for i, entry in enumerate(entries, 1):
            table.add_row(
                str(i),
                escape(_display_path(entry.path or entry.file, root)),
                f"[red]{entry.commits}[/red]",
            )

        self.console.print(table)
        self.console.print()

    def _print_clusters(self, graph: RepoGraph) -> None:
        files = graph.file_nodes()
        if not files:
            return

        counts = Counter(f.cluster for f in files)
        loc: Counter = Counter()
        for f in files:
            loc[f.cluster] += f.loc

        table = Table(title="Clusters", expand=True)
        table.add_column("Cluster", style="cyan", ratio=3)
        table.add_column("Files", justify="right", width=7)
        table.add_column("Lines", justify="right", width=9)

        for cluster, count in counts.most_common(self.max_clusters):
            table.add_row(_cluster_label(cluster), str(count), str(loc[cluster]))
        if len(counts) > self.max_clusters:
            table.caption = f"{len(counts) - self.max_clusters} more clusters not shown"

        self.console.print(table)
        self.console.print()


def _display_path(path: str, root) -> str:
    if root is None:
        return path
    prefix = str(root)
    if path.startswith(prefix):
        return path[len(prefix):].lstrip("/\\") or path
    return path


def _cluster_label(cluster: str) -> str:
    return "(root)" if cluster == ROOT_CLUSTER else escape(cluster)
