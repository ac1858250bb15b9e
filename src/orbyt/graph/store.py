"""Arena-style graph store with idempotent insertion.

All node and edge mutations go through ``add_node`` / ``add_edge``, which
report whether anything was added instead of raising on duplicates. A lock
serializes mutations so the existence check and the insert happen as one
step. Cycles (including two files importing each other) are plain data here;
nothing assumes the graph is acyclic.
"""

from __future__ import annotations

from collections.abc import Iterator
from threading import Lock
from typing import Optional

from .models import Edge, EdgeKind, FileRecord, FolderRecord, Node


class GraphStore:
    """Nodes keyed by id and edges keyed by (source, target, kind)."""

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._edges: dict[tuple[str, str, EdgeKind], Edge] = {}
        self._lock = Lock()

    # ── Mutation ───────────────────────────────────────────────

    def add_node(self, node: Node) -> bool:
        """Insert a node; False if the id already exists."""
        with self._lock:
            if node.id in self._nodes:
                return False
            self._nodes[node.id] = node
            return True

    def add_edge(
        self, source: str, target: str, kind: EdgeKind, inter_folder: bool = False
    ) -> bool:
        """Insert an edge; False if the (source, target, kind) triple exists.

        Raises:
            KeyError: If either endpoint is not a node of this graph
        """
        key = (source, target, kind)
        with self._lock:
            if key in self._edges:
                return False
            for endpoint in (source, target):
                if endpoint not in self._nodes:
                    raise KeyError(f"Edge endpoint is not a node: {endpoint}")
            self._edges[key] = Edge(source, target, kind, inter_folder)
            return True

    # ── Queries ────────────────────────────────────────────────

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def has_edge(self, source: str, target: str, kind: EdgeKind) -> bool:
        return (source, target, kind) in self._edges

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def nodes(self) -> list[Node]:
        """All nodes in insertion order."""
        return list(self._nodes.values())

    def file_nodes(self) -> list[FileRecord]:
        """File nodes in insertion (scan) order."""
        return [n for n in self._nodes.values() if isinstance(n, FileRecord)]

    def folder_nodes(self) -> list[FolderRecord]:
        return [n for n in self._nodes.values() if isinstance(n, FolderRecord)]

    def edges(self, kind: Optional[EdgeKind] = None) -> list[Edge]:
        """Edges in insertion order, optionally restricted to one kind."""
        if kind is None:
            return list(self._edges.values())
        return [e for e in self._edges.values() if e.kind is kind]

    def out_edges(self, node_id: str, kind: Optional[EdgeKind] = None) -> Iterator[Edge]:
        for edge in self._edges.values():
            if edge.source == node_id and (kind is None or edge.kind is kind):
                yield edge

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
