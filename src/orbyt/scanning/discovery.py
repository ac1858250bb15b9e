"""Directory traversal with ignore rules and a fixed exclusion list."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

import pathspec

from ..logging_config import get_logger
from .languages import EXCLUDED_DIRS, SOURCE_EXTENSIONS

logger = get_logger(__name__)


def load_ignore_spec(root: Path, ignore_file: str = ".gitignore") -> Optional[pathspec.PathSpec]:
    """Read gitignore-style patterns from ``root / ignore_file``.

    Returns None when the file does not exist or cannot be read.
    """
    candidate = Path(root) / ignore_file
    if not candidate.is_file():
        return None
    try:
        text = candidate.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Cannot read ignore file {candidate}: {e}")
        return None
    return ignore_spec_from_text(text)


def ignore_spec_from_text(text: str) -> pathspec.PathSpec:
    """Compile gitignore pattern text."""
    return pathspec.PathSpec.from_lines("gitwildmatch", text.splitlines())


def scan_paths(
    root: Path,
    ignore_spec: Optional[pathspec.PathSpec] = None,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    excluded_dirs: Iterable[str] = EXCLUDED_DIRS,
) -> list[Path]:
    """Return eligible files under ``root``, depth-first.

    Entries are visited in sorted name order so the result is stable for a
    fixed tree. A directory is pruned when its name is excluded or its
    relative path matches an ignore rule; a file is accepted when it is a
    regular file, is not ignored and its extension is allow-listed.

    Args:
        root: Directory to scan
        ignore_spec: Compiled ignore rules, evaluated relative to root
        extensions: Allow-listed extensions (lowercase, with leading dot)
        excluded_dirs: Directory names that are always pruned

    Returns:
        Absolute file paths in traversal order
    """
    root = Path(root).resolve()
    ext_set = {e.lower() for e in extensions}
    skip_dirs = set(excluded_dirs)
    files: list[Path] = []
    skipped = 0

    def walk(directory: Path) -> None:
        nonlocal skipped
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return

        for entry in entries:
            full = directory / entry.name
            rel = full.relative_to(root).as_posix()
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError:
                continue

            if ignore_spec is not None:
                probe = rel + "/" if is_dir else rel
                if ignore_spec.match_file(probe):
                    skipped += 1
                    logger.debug(f"Skipped (ignore rule): {rel}")
                    continue

            if is_dir:
                if entry.name in skip_dirs:
                    logger.debug(f"Skipped (excluded dir): {rel}")
                    continue
                walk(full)
            elif is_file and os.path.splitext(entry.name)[1].lower() in ext_set:
                files.append(full)

    if root.is_dir():
        walk(root)

    logger.info(f"Discovery complete: {len(files)} files, {skipped} ignored")
    return files
