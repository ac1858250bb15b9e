"""Summary statistics over a completed repository graph."""

from __future__ import annotations

import numpy as np

from ..logging_config import get_logger
from .models import ChurnEntry, Stats
from .store import GraphStore

logger = get_logger(__name__)


def compute_stats(store: GraphStore, top_n: int = 5) -> Stats:
    """Aggregate file-node metrics.

    Folder nodes never contribute. ``most_edited`` holds at most ``top_n``
    files with at least one commit, by commits descending; ties keep scan
    order.

    Args:
        store: Graph produced by GraphBuilder
        top_n: Length cap for the most-edited list

    Returns:
        Stats with zeroed fields for a graph without file nodes
    """
    files = store.file_nodes()
    if not files:
        return Stats()

    complexity = np.fromiter((f.complexity for f in files), dtype=float, count=len(files))
    avg_complexity = float(np.mean(complexity))

    churned = [f for f in files if f.commits > 0]
    churned.sort(key=lambda f: f.commits, reverse=True)
    most_edited = tuple(
        ChurnEntry(file=f.label, commits=f.commits, path=f.path) for f in churned[:top_n]
    )

    clusters = len({f.cluster for f in files})

    logger.debug(
        f"Stats: {len(files)} files, {clusters} clusters, avg complexity {avg_complexity:.2f}"
    )
    return Stats(
        total_files=len(files),
        clusters=clusters,
        avg_complexity=avg_complexity,
        most_edited=most_edited,
    )
