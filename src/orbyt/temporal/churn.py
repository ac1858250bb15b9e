"""Churn lookup: which git strategy to run for a build."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..logging_config import get_logger
from .git_extractor import GitExtractor

logger = get_logger(__name__)


def collect_churn(
    root: Path,
    files: Sequence[Path],
    mode: str = "history",
    timeout_seconds: int = 10,
    workers: int = 4,
) -> dict[Path, int]:
    """Map each file to the number of commits touching it.

    Files without history (or every file, when git is unavailable) are
    absent from the result and read as 0.
    """
    if mode == "off" or not files:
        return {}

    extractor = GitExtractor(root, timeout_seconds=timeout_seconds, max_workers=workers)
    if mode == "per_file":
        counts = extractor.per_file_counts(files)
    else:
        counts = extractor.history_counts(files)

    logger.debug(f"Churn ({mode}): {len(counts)}/{len(files)} files have history")
    return counts
