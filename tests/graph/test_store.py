"""Tests for the idempotent graph store."""

import pytest

from orbyt.graph.models import EdgeKind, FileRecord, FolderRecord
from orbyt.graph.store import GraphStore


def file_node(node_id: str, cluster: str = "src") -> FileRecord:
    return FileRecord(
        id=node_id,
        label=node_id.rsplit("/", 1)[-1],
        cluster=cluster,
        path=node_id,
        loc=1,
        complexity=1,
        commits=0,
        color="rgb(0,0,0)",
        size=4.0,
    )


def folder_node(folder: str) -> FolderRecord:
    return FolderRecord(
        id=folder, label=folder, depth=1, path="/r/" + folder, color="rgb(0,0,0)", size=16.0
    )


class TestGraphStore:
    """Tests for GraphStore."""

    def test_add_node_is_idempotent(self):
        store = GraphStore()
        assert store.add_node(file_node("/r/a.ts")) is True
        assert store.add_node(file_node("/r/a.ts")) is False
        assert len(store) == 1

    def test_add_edge_is_idempotent_per_kind(self):
        """The same pair may carry one edge of each kind."""
        store = GraphStore()
        store.add_node(folder_node("src"))
        store.add_node(folder_node("lib"))
        assert store.add_edge("src", "lib", EdgeKind.ROLLUP) is True
        assert store.add_edge("src", "lib", EdgeKind.ROLLUP) is False
        assert store.add_edge("src", "lib", EdgeKind.HIERARCHY) is True
        assert len(store.edges()) == 2

    def test_edge_endpoints_must_exist(self):
        store = GraphStore()
        store.add_node(file_node("/r/a.ts"))
        with pytest.raises(KeyError):
            store.add_edge("/r/a.ts", "/r/missing.ts", EdgeKind.IMPORT)

    def test_cycles_are_allowed(self):
        """Mutual imports are two ordinary edges."""
        store = GraphStore()
        store.add_node(file_node("/r/a.ts"))
        store.add_node(file_node("/r/b.ts"))
        assert store.add_edge("/r/a.ts", "/r/b.ts", EdgeKind.IMPORT)
        assert store.add_edge("/r/b.ts", "/r/a.ts", EdgeKind.IMPORT)
        assert store.has_edge("/r/b.ts", "/r/a.ts", EdgeKind.IMPORT)

    def test_queries_by_kind(self):
        store = GraphStore()
        store.add_node(folder_node("src"))
        store.add_node(file_node("/r/src/a.ts"))
        store.add_node(file_node("/r/src/b.ts"))
        store.add_edge("src", "/r/src/a.ts", EdgeKind.HIERARCHY)
        store.add_edge("/r/src/a.ts", "/r/src/b.ts", EdgeKind.IMPORT)

        assert [n.id for n in store.file_nodes()] == ["/r/src/a.ts", "/r/src/b.ts"]
        assert [n.id for n in store.folder_nodes()] == ["src"]
        assert [e.target for e in store.edges(EdgeKind.IMPORT)] == ["/r/src/b.ts"]
        assert [e.target for e in store.out_edges("src")] == ["/r/src/a.ts"]
        assert "src" in store
        assert store.get_node("nope") is None


class TestEdgeSerialization:
    """Tests for Edge.to_dict."""

    def test_import_edge_carries_inter_folder_flag(self):
        store = GraphStore()
        store.add_node(file_node("/r/a.ts"))
        store.add_node(file_node("/r/b.ts"))
        store.add_edge("/r/a.ts", "/r/b.ts", EdgeKind.IMPORT, inter_folder=True)
        (edge,) = store.edges()
        assert edge.to_dict() == {
            "from": "/r/a.ts",
            "to": "/r/b.ts",
            "kind": "import",
            "interFolder": True,
        }

    def test_structural_edges_have_no_flag(self):
        store = GraphStore()
        store.add_node(folder_node("src"))
        store.add_node(file_node("/r/src/a.ts"))
        store.add_edge("src", "/r/src/a.ts", EdgeKind.HIERARCHY)
        assert store.edges()[0].to_dict() == {"from": "src", "to": "/r/src/a.ts", "kind": "hierarchy"}
