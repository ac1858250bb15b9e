"""Commit counts per file from git history via subprocess.

Two strategies count the commits ``git log -- <file>`` lists for each file
(absolute path -> distinct commits):

- ``history``: one repository-wide ``git log --name-only`` parsed into counts.
  Merges are diffed in combined form, so a merge appears for a file only when
  it differs from every parent, which is when ``git log -- <file>`` shows it.
- ``per_file``: one ``git log -- <file>`` per file, run in a bounded thread
  pool with a per-call timeout and memoized for the lifetime of the
  extractor.

Every failure mode (git missing, not a repository, non-zero exit, timeout)
degrades to an empty mapping, which callers read as churn 0.
"""

from __future__ import annotations

import shutil
import subprocess
from collections import defaultdict
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from threading import Lock
from typing import Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

_COMMIT_MARKER = "commit:"

# The repository-wide query walks the whole history, so it gets more headroom
# than a single-file query.
HISTORY_TIMEOUT_FACTOR = 6


class GitExtractor:
    """Count the commits touching each scanned file."""

    def __init__(self, repo_path: Path, timeout_seconds: int = 10, max_workers: int = 4):
        self.repo_path = Path(repo_path).resolve()
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers
        self._toplevel: Optional[Path] = None
        self._toplevel_checked = False
        self._memo: dict[Path, int] = {}
        self._lock = Lock()

    # ── Repository detection ───────────────────────────────────

    def toplevel(self) -> Optional[Path]:
        """Working tree root containing repo_path, or None outside git."""
        if self._toplevel_checked:
            return self._toplevel
        self._toplevel_checked = True

        if shutil.which("git") is None:
            logger.info("git not found on PATH, churn will be 0")
            return None

        out = self._run(["rev-parse", "--show-toplevel"], self.timeout_seconds)
        if out is None or not out.strip():
            logger.info("Not a git repository, churn will be 0")
            return None
        self._toplevel = Path(out.strip()).resolve()
        return self._toplevel

    # ── Strategies ─────────────────────────────────────────────

    def history_counts(self, files: Iterable[Path]) -> dict[Path, int]:
        """Single pass over the full log; counts only for ``files``."""
        wanted = {Path(f) for f in files}
        top = self.toplevel()
        if top is None or not wanted:
            return {}

        raw = self._run(
            [
                "log",
                "-z",
                f"--format={_COMMIT_MARKER}%H",
                "--name-only",
                "--no-renames",
                "--diff-merges=combined",
            ],
            self.timeout_seconds * HISTORY_TIMEOUT_FACTOR,
            cwd=top,
        )
        if raw is None:
            return {}

        commits_by_file = parse_name_only_log(raw)
        counts: dict[Path, int] = {}
        for rel, hashes in commits_by_file.items():
            path = top / rel
            if path in wanted:
                counts[path] = len(hashes)
        return counts

    def per_file_counts(self, files: Iterable[Path]) -> dict[Path, int]:
        """One query per file on a bounded worker pool."""
        paths = [Path(f) for f in files]
        if self.toplevel() is None or not paths:
            return {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = list(executor.map(self.file_count, paths))
        return {path: count for path, count in zip(paths, results) if count > 0}

    def file_count(self, path: Path) -> int:
        """Distinct commits touching one file (memoized)."""
        with self._lock:
            if path in self._memo:
                return self._memo[path]

        out = self._run(["log", "--format=%H", "--", str(path)], self.timeout_seconds)
        count = 0 if out is None else len({line for line in out.splitlines() if line.strip()})

        with self._lock:
            self._memo[path] = count
        return count

    # ── Subprocess ─────────────────────────────────────────────

    def _run(self, args: list[str], timeout: int, cwd: Optional[Path] = None) -> Optional[str]:
        cmd = ["git", "-C", str(cwd or self.repo_path), *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as e:
            logger.warning("git command failed (%s): %s", " ".join(args), e)
            return None
        if result.returncode != 0:
            logger.debug(
                "git %s exited %d: %s", " ".join(args), result.returncode, result.stderr.strip()
            )
            return None
        return result.stdout


def parse_name_only_log(raw: str) -> dict[str, set[str]]:
    """Parse ``git log -z --format=commit:%H --name-only`` output.

    Names are NUL-terminated and never quoted; a commit header is separated
    from its first name by a newline. Returns repository-relative path -> set
    of commit hashes touching it.
    """
    commits_by_file: dict[str, set[str]] = defaultdict(set)
    current: Optional[str] = None
    for token in raw.split("\0"):
        token = token.lstrip("\n")
        if token.startswith(_COMMIT_MARKER):
            header, _, token = token.partition("\n")
            current = header[len(_COMMIT_MARKER):].strip() or None
            token = token.lstrip("\n")
        if token and current is not None:
            commits_by_file[token].add(current)
    return dict(commits_by_file)
