"""Data models for the scanning layer."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FileMetrics:
    """Raw observations for a single file"""

    loc: int
    complexity: int
    commits: int = 0


@dataclass
class ScannedFile:
    """One readable file carried from the scan pass to the resolution pass."""

    path: Path
    metrics: FileMetrics
    specifiers: list[str] = field(default_factory=list)
