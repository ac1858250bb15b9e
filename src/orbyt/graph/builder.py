"""Repository graph construction from scanned files and resolved imports."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path, PurePosixPath
from typing import Optional

from ..logging_config import get_logger
from ..scanning.models import ScannedFile
from .models import ROOT_CLUSTER, EdgeKind, FileRecord, FolderRecord
from .presentation import cluster_color, file_size, folder_size
from .store import GraphStore

logger = get_logger(__name__)


class GraphBuilder:
    """Assembles file nodes, folder nodes and typed edges into a GraphStore.

    Folder nodes are keyed by their POSIX path relative to ``root``; the root
    itself never becomes a folder node, so files directly under it belong to
    the ``"."`` cluster and have no hierarchy parent.

    Usage:
        store = GraphBuilder(root).build(scanned_files, resolved_imports)
    """

    def __init__(self, root: Path, include_folders: bool = True):
        self.root = Path(root)
        self.include_folders = include_folders

    def build(
        self,
        files: Sequence[ScannedFile],
        resolved: Mapping[Path, Sequence[Path]],
    ) -> GraphStore:
        store = GraphStore()

        if self.include_folders:
            self._add_folders(store, files)

        for scanned in files:
            self._add_file(store, scanned)

        intra, inter, rollups = self._add_imports(store, resolved)

        logger.info(
            f"Graph built: {len(store.file_nodes())} files, {len(store.folder_nodes())} folders, "
            f"{intra + inter} import edges ({inter} cross-folder), {rollups} rollup edges"
        )
        return store

    # ── Clustering ─────────────────────────────────────────────

    def owning_folder(self, path: Path) -> str:
        """Relative POSIX folder of a file, or the root sentinel."""
        parent = PurePosixPath(Path(path).relative_to(self.root).as_posix()).parent
        return ROOT_CLUSTER if str(parent) == "." else str(parent)

    def _folder_chain(self, path: Path) -> list[str]:
        """Ancestor folders of a file, outermost first, root excluded."""
        parts = Path(path).relative_to(self.root).parts[:-1]
        return ["/".join(parts[: i + 1]) for i in range(len(parts))]

    def _add_folders(self, store: GraphStore, files: Sequence[ScannedFile]) -> None:
        folders: dict[str, None] = {}
        for scanned in files:
            for folder in self._folder_chain(scanned.path):
                folders.setdefault(folder)

        for folder in folders:
            depth = folder.count("/") + 1
            store.add_node(
                FolderRecord(
                    id=folder,
                    label=PurePosixPath(folder).name,
                    depth=depth,
                    path=str(self.root.joinpath(*folder.split("/"))),
                    color=cluster_color(folder, depth),
                    size=folder_size(depth),
                )
            )

        for folder in folders:
            parent = _parent_folder(folder)
            if parent is not None and store.has_node(parent):
                store.add_edge(parent, folder, EdgeKind.HIERARCHY)

    # ── Files ──────────────────────────────────────────────────

    def _add_file(self, store: GraphStore, scanned: ScannedFile) -> None:
        cluster = self.owning_folder(scanned.path)
        depth = cluster.count("/") + 2
        node_id = str(scanned.path)
        added = store.add_node(
            FileRecord(
                id=node_id,
                label=scanned.path.name,
                cluster=cluster,
                path=node_id,
                loc=scanned.metrics.loc,
                complexity=scanned.metrics.complexity,
                commits=scanned.metrics.commits,
                color=cluster_color(cluster, depth),
                size=file_size(scanned.metrics.loc),
            )
        )
        if added and self.include_folders and store.has_node(cluster):
            store.add_edge(cluster, node_id, EdgeKind.HIERARCHY)

    # ── Imports ────────────────────────────────────────────────

    def _add_imports(
        self, store: GraphStore, resolved: Mapping[Path, Sequence[Path]]
    ) -> tuple[int, int, int]:
        intra = inter = rollups = 0
        for importer, targets in resolved.items():
            source_id = str(importer)
            if not store.has_node(source_id):
                continue
            from_folder = self.owning_folder(importer)

            for target in targets:
                target_id = str(target)
                if target_id == source_id or not store.has_node(target_id):
                    continue
                to_folder = self.owning_folder(target)
                crosses = from_folder != to_folder

                if not store.add_edge(source_id, target_id, EdgeKind.IMPORT, inter_folder=crosses):
                    continue
                if not crosses:
                    intra += 1
                    continue
                inter += 1

                if (
                    self.include_folders
                    and store.has_node(from_folder)
                    and store.has_node(to_folder)
                    and store.add_edge(from_folder, to_folder, EdgeKind.ROLLUP)
                ):
                    rollups += 1

        return intra, inter, rollups


def _parent_folder(folder: str) -> Optional[str]:
    if "/" not in folder:
        return None
    return folder.rsplit("/", 1)[0]
