"""Data models for the repository graph.

Two node tiers share one id space:
  Files:   keyed by absolute path, carry the per-file metrics
  Folders: keyed by POSIX path relative to the scan root (optional tier)

Edges are typed; the (source, target, kind) triple is unique within a graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Union

# Cluster of files that sit directly in the scan root. No relative folder id
# can equal it.
ROOT_CLUSTER = "."


class EdgeKind(str, Enum):
    IMPORT = "import"  # file -> file
    HIERARCHY = "hierarchy"  # folder -> child folder, folder -> contained file
    ROLLUP = "rollup"  # folder -> folder, from cross-folder imports


@dataclass(frozen=True)
class FileRecord:
    """One scanned file. Immutable once built."""

    id: str
    label: str
    cluster: str
    path: str
    loc: int
    complexity: int
    commits: int
    color: str
    size: float

    kind = "file"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "cluster": self.cluster,
            "path": self.path,
            "loc": self.loc,
            "complexity": self.complexity,
            "commits": self.commits,
            "color": self.color,
            "size": self.size,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class FolderRecord:
    """A folder with at least one descendant file."""

    id: str
    label: str
    depth: int
    path: str
    color: str
    size: float

    kind = "folder"

    @property
    def cluster(self) -> str:
        return self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "cluster": self.cluster,
            "path": self.path,
            "loc": 0,
            "complexity": 0,
            "commits": 0,
            "color": self.color,
            "size": self.size,
            "kind": self.kind,
        }


Node = Union[FileRecord, FolderRecord]


@dataclass(frozen=True)
class Edge:
    """Directed, typed edge.

    ``inter_folder`` is only meaningful for import edges: True when the two
    files live in different folders.
    """

    source: str
    target: str
    kind: EdgeKind
    inter_folder: bool = False

    @property
    def key(self) -> tuple[str, str, EdgeKind]:
        return (self.source, self.target, self.kind)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "from": self.source,
            "to": self.target,
            "kind": self.kind.value,
        }
        if self.kind is EdgeKind.IMPORT:
            data["interFolder"] = self.inter_folder
        return data


@dataclass(frozen=True)
class ChurnEntry:
    """One most-edited file: display name, commit count and full path."""

    file: str
    commits: int
    path: str = ""


@dataclass(frozen=True)
class Stats:
    """Read-only summary of a completed graph."""

    total_files: int = 0
    clusters: int = 0
    avg_complexity: float = 0.0
    most_edited: tuple[ChurnEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgComplexity": _two_decimals(self.avg_complexity),
            "mostEdited": [{"file": e.file, "commits": e.commits} for e in self.most_edited],
            "totalFiles": self.total_files,
            "clusters": self.clusters,
        }


def _two_decimals(value: float) -> str:
    """Round the exact binary value to 2 places, ties away from zero."""
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
