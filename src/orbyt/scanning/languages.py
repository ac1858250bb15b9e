"""Language tables: which files are scanned and which ones are parsed.

Every allow-listed extension becomes a file node. Only the parseable subset
carries import edges; everything else is an isolated node with respect to
imports.
"""

from pathlib import Path
from typing import Union

# Extensions accepted by the scanner (matched case-insensitively).
SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".js",
    ".ts",
    ".jsx",
    ".tsx",
    ".py",
    ".java",
    ".cpp",
    ".c",
    ".cs",
    ".php",
    ".rb",
    ".go",
    ".rs",
    ".html",
    ".css",
    ".json",
    ".sh",
    ".yml",
    ".yaml",
)

# Directory names pruned regardless of ignore rules.
EXCLUDED_DIRS: tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "out",
    ".next",
    "build",
)

# Extension -> tree-sitter grammar for the files we extract imports from.
# Order matters: it is the probing order used by the resolver.
PARSEABLE_LANGUAGES: dict[str, str] = {
    ".js": "javascript",
    ".ts": "typescript",
    ".jsx": "javascript",
    ".tsx": "tsx",
}

PARSEABLE_EXTENSIONS: tuple[str, ...] = tuple(PARSEABLE_LANGUAGES)


def detect_language(filepath: Union[str, Path]) -> str:
    """Return the grammar name for a parseable file, or "unknown"."""
    suffix = Path(filepath).suffix.lower()
    return PARSEABLE_LANGUAGES.get(suffix, "unknown")


def is_parseable(filepath: Union[str, Path]) -> bool:
    return Path(filepath).suffix.lower() in PARSEABLE_LANGUAGES
