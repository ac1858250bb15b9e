"""Public API for Orbyt.

This module provides the main entry point for graph construction. Callers
should use build_repo_graph() instead of wiring the scanner, resolver and
builder by hand.

Example:
    >>> from orbyt import build_repo_graph
    >>>
    >>> graph = build_repo_graph("/path/to/repo")
    >>> payload = graph.to_payload()
    >>> payload["stats"]["totalFiles"]
    42
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .config import AnalysisConfig, load_config
from .exceptions import FileAccessError
from .graph import GraphBuilder, GraphStore, Stats, compute_stats
from .graph.models import FileRecord
from .logging_config import get_logger
from .scanning import (
    BasenameIndex,
    ImportExtractor,
    ScannedFile,
    extract_metrics,
    load_ignore_spec,
    read_source,
    resolve_imports,
    scan_paths,
)
from .temporal import collect_churn

logger = get_logger(__name__)


@dataclass
class RepoGraph:
    """A completed build: the graph store plus its summary statistics."""

    root: Optional[Path] = None
    store: GraphStore = field(default_factory=GraphStore)
    stats: Stats = field(default_factory=Stats)

    def to_payload(self) -> dict[str, Any]:
        """Serializable ``{nodes, edges, stats}`` mapping for renderers."""
        return {
            "nodes": [node.to_dict() for node in self.store.nodes()],
            "edges": [edge.to_dict() for edge in self.store.edges()],
            "stats": self.stats.to_dict(),
        }

    def node_path(self, node_id: str) -> Optional[str]:
        """Filesystem path behind a selected node, or None for unknown ids."""
        node = self.store.get_node(node_id)
        if node is None:
            return None
        return node.path

    def file_nodes(self) -> list[FileRecord]:
        return self.store.file_nodes()

    @property
    def is_empty(self) -> bool:
        return len(self.store) == 0


def build_repo_graph(
    root: Union[str, Path, None],
    config: Optional[AnalysisConfig] = None,
    **overrides,
) -> RepoGraph:
    """Scan a directory tree and build its dependency graph.

    Pipeline:
    1. Discover eligible files (ignore rules, excluded directories)
    2. Look up churn for every discovered file
    3. Read each file once: metrics plus raw import specifiers
    4. Build the basename index over the readable files
    5. Resolve specifiers and assemble nodes and edges
    6. Aggregate statistics

    Args:
        root: Directory to scan. None or a non-directory yields an empty graph.
        config: Build configuration. When omitted, it is loaded from the
            usual config files and environment, with ``overrides`` applied.
        **overrides: Configuration overrides (e.g., churn_mode="off")

    Returns:
        RepoGraph with nodes, edges and stats

    Raises:
        ConfigurationError: If no config is given and loading one fails
    """
    if config is None:
        config = load_config(**overrides)

    if root is None or not Path(root).is_dir():
        logger.warning(f"No directory to scan at {root!r}; returning an empty graph")
        return RepoGraph(root=None)

    root = Path(root).resolve()

    ignore_spec = (
        load_ignore_spec(root, config.ignore_file) if config.respect_ignore_file else None
    )
    paths = scan_paths(
        root,
        ignore_spec=ignore_spec,
        extensions=config.extensions,
        excluded_dirs=config.excluded_dirs,
    )

    churn = collect_churn(
        root,
        paths,
        mode=config.churn_mode,
        timeout_seconds=config.git_timeout_seconds,
        workers=config.effective_workers,
    )

    scanned = _scan_files(paths, churn)

    index = BasenameIndex.from_paths(s.path for s in scanned)
    resolved = resolve_imports(
        {s.path: s.specifiers for s in scanned},
        index,
        relative_first=config.relative_first,
    )

    store = GraphBuilder(root, include_folders=config.include_folders).build(scanned, resolved)
    stats = compute_stats(store, top_n=config.top_n)
    return RepoGraph(root=root, store=store, stats=stats)


def _scan_files(paths: list[Path], churn: dict[Path, int]) -> list[ScannedFile]:
    extractor = ImportExtractor()
    scanned: list[ScannedFile] = []
    for path in paths:
        try:
            content = read_source(path)
        except FileAccessError as e:
            logger.warning(f"Skipping {path}: {e.reason}")
            continue

        scanned.append(
            ScannedFile(
                path=path,
                metrics=extract_metrics(content, commits=churn.get(path, 0)),
                specifiers=extractor.extract(path, content),
            )
        )
    return scanned
