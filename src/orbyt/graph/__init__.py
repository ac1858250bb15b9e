"""Repository graph: typed nodes and edges, construction and statistics."""

from .builder import GraphBuilder
from .models import (
    ROOT_CLUSTER,
    ChurnEntry,
    Edge,
    EdgeKind,
    FileRecord,
    FolderRecord,
    Node,
    Stats,
)
from .presentation import cluster_color, file_size, folder_size
from .stats import compute_stats
from .store import GraphStore

__all__ = [
    "GraphBuilder",
    "GraphStore",
    "compute_stats",
    "ROOT_CLUSTER",
    "ChurnEntry",
    "Edge",
    "EdgeKind",
    "FileRecord",
    "FolderRecord",
    "Node",
    "Stats",
    "cluster_color",
    "file_size",
    "folder_size",
]
