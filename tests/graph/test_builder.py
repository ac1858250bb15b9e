"""Tests for GraphBuilder: clustering, folder tier and edge rules."""

from pathlib import Path

import pytest

from orbyt.graph.builder import GraphBuilder
from orbyt.graph.models import ROOT_CLUSTER, EdgeKind, FileRecord, FolderRecord
from orbyt.scanning.models import FileMetrics, ScannedFile

ROOT = Path("/repo")


def scanned(*rels, loc: int = 10, complexity: int = 2, commits: int = 0):
    return [
        ScannedFile(path=ROOT / r, metrics=FileMetrics(loc, complexity, commits)) for r in rels
    ]


def fid(rel: str) -> str:
    return str(ROOT / rel)


def edge_pairs(store, kind):
    return {(e.source, e.target) for e in store.edges(kind)}


class TestClusters:
    """Owning-folder clustering."""

    def test_root_files_use_sentinel(self):
        builder = GraphBuilder(ROOT)
        assert builder.owning_folder(ROOT / "a.ts") == ROOT_CLUSTER

    def test_nested_file_cluster_is_relative_posix_folder(self):
        builder = GraphBuilder(ROOT)
        assert builder.owning_folder(ROOT / "src" / "ui" / "a.ts") == "src/ui"

    def test_file_node_fields(self):
        store = GraphBuilder(ROOT).build(scanned("src/a.ts", loc=99, commits=3), {})
        node = store.get_node(fid("src/a.ts"))
        assert isinstance(node, FileRecord)
        assert node.label == "a.ts"
        assert node.cluster == "src"
        assert node.path == fid("src/a.ts")
        assert (node.loc, node.complexity, node.commits) == (99, 2, 3)
        assert node.size == pytest.approx(7.0)
        assert node.color.startswith("rgb(")


class TestFolderTier:
    """Folder nodes and hierarchy edges."""

    def test_folder_exists_iff_it_has_a_descendant_file(self):
        """Every ancestor folder appears, nothing else does."""
        store = GraphBuilder(ROOT).build(scanned("a/b/c/deep.ts", "x/y.ts", "top.ts"), {})
        assert {n.id for n in store.folder_nodes()} == {"a", "a/b", "a/b/c", "x"}

    def test_root_is_not_a_folder_node(self):
        store = GraphBuilder(ROOT).build(scanned("top.ts"), {})
        assert store.folder_nodes() == []
        assert store.edges(EdgeKind.HIERARCHY) == []

    def test_folder_node_fields(self):
        store = GraphBuilder(ROOT).build(scanned("src/ui/a.ts"), {})
        folder = store.get_node("src/ui")
        assert isinstance(folder, FolderRecord)
        assert folder.label == "ui"
        assert folder.depth == 2
        assert folder.path == str(ROOT / "src" / "ui")
        assert folder.size == 14.0
        assert folder.to_dict()["loc"] == 0

    def test_hierarchy_edges(self):
        store = GraphBuilder(ROOT).build(scanned("src/ui/a.ts", "src/b.ts"), {})
        assert edge_pairs(store, EdgeKind.HIERARCHY) == {
            ("src", "src/ui"),
            ("src/ui", fid("src/ui/a.ts")),
            ("src", fid("src/b.ts")),
        }

    def test_folders_disabled(self):
        """Without the folder tier only file nodes and import edges remain."""
        files = scanned("src/x.ts", "lib/y.ts")
        resolved = {ROOT / "src/x.ts": [ROOT / "lib/y.ts"]}
        store = GraphBuilder(ROOT, include_folders=False).build(files, resolved)
        assert store.folder_nodes() == []
        assert store.edges(EdgeKind.HIERARCHY) == []
        assert store.edges(EdgeKind.ROLLUP) == []
        assert edge_pairs(store, EdgeKind.IMPORT) == {(fid("src/x.ts"), fid("lib/y.ts"))}


class TestImportEdges:
    """Import and rollup edges."""

    def test_duplicate_imports_collapse(self):
        files = scanned("a.ts", "b.ts")
        resolved = {ROOT / "a.ts": [ROOT / "b.ts", ROOT / "b.ts"]}
        store = GraphBuilder(ROOT).build(files, resolved)
        assert len(store.edges(EdgeKind.IMPORT)) == 1

    def test_self_import_dropped(self):
        files = scanned("a.ts")
        store = GraphBuilder(ROOT).build(files, {ROOT / "a.ts": [ROOT / "a.ts"]})
        assert store.edges(EdgeKind.IMPORT) == []

    def test_unknown_target_dropped(self):
        files = scanned("a.ts")
        store = GraphBuilder(ROOT).build(files, {ROOT / "a.ts": [ROOT / "gone.ts"]})
        assert store.edges(EdgeKind.IMPORT) == []

    def test_intra_folder_import_has_no_rollup(self):
        files = scanned("src/a.ts", "src/b.ts")
        store = GraphBuilder(ROOT).build(files, {ROOT / "src/a.ts": [ROOT / "src/b.ts"]})
        (edge,) = store.edges(EdgeKind.IMPORT)
        assert edge.inter_folder is False
        assert store.edges(EdgeKind.ROLLUP) == []

    def test_inter_folder_import_rolls_up_once(self):
        """Several cross-folder imports between two folders give one rollup."""
        files = scanned("src/x.ts", "src/z.ts", "lib/y.ts", "lib/w.ts")
        resolved = {
            ROOT / "src/x.ts": [ROOT / "lib/y.ts", ROOT / "lib/w.ts"],
            ROOT / "src/z.ts": [ROOT / "lib/y.ts"],
        }
        store = GraphBuilder(ROOT).build(files, resolved)
        assert all(e.inter_folder for e in store.edges(EdgeKind.IMPORT))
        assert edge_pairs(store, EdgeKind.ROLLUP) == {("src", "lib")}

    def test_import_from_root_file_has_no_rollup(self):
        """The root cluster has no folder node, so no rollup is emitted."""
        files = scanned("index.ts", "src/app.ts")
        store = GraphBuilder(ROOT).build(files, {ROOT / "index.ts": [ROOT / "src/app.ts"]})
        (edge,) = store.edges(EdgeKind.IMPORT)
        assert edge.inter_folder is True
        assert store.edges(EdgeKind.ROLLUP) == []

    def test_directory_named_root_is_an_ordinary_folder(self):
        files = scanned("index.ts", "(root)/x.ts")
        store = GraphBuilder(ROOT).build(files, {ROOT / "index.ts": [ROOT / "(root)/x.ts"]})
        assert store.get_node(fid("index.ts")).cluster == ROOT_CLUSTER
        assert store.get_node(fid("(root)/x.ts")).cluster == "(root)"
        assert edge_pairs(store, EdgeKind.HIERARCHY) == {("(root)", fid("(root)/x.ts"))}
        (edge,) = store.edges(EdgeKind.IMPORT)
        assert edge.inter_folder is True
        assert store.edges(EdgeKind.ROLLUP) == []

    def test_mutual_imports(self):
        files = scanned("src/a.ts", "lib/b.ts")
        resolved = {
            ROOT / "src/a.ts": [ROOT / "lib/b.ts"],
            ROOT / "lib/b.ts": [ROOT / "src/a.ts"],
        }
        store = GraphBuilder(ROOT).build(files, resolved)
        assert len(store.edges(EdgeKind.IMPORT)) == 2
        assert edge_pairs(store, EdgeKind.ROLLUP) == {("src", "lib"), ("lib", "src")}
