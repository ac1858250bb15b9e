"""Import extraction and resolution.

Extraction parses the parseable subset with tree-sitter and returns the raw
module specifiers of ``import`` declarations and ``require("...")`` calls.

Resolution maps a specifier onto a scanned file through a basename index,
trying in order:
    1. the specifier's basename exactly
    2. the basename plus each parseable extension
    3. any indexed basename the specifier ends with

Optionally, relative specifiers (``./x``, ``../x``) are first joined with the
importing file's directory. A specifier with no hit is assumed to be external
and produces no edge.

Known limitation: basenames are not unique in most repositories. The index
keeps the last path seen for each basename, so an ambiguous specifier can
resolve to an unintended file. Enable ``relative_first`` to reduce this for
relative specifiers.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from .languages import PARSEABLE_EXTENSIONS, detect_language, is_parseable
from .queries import get_query
from .treesitter_parser import TreeSitterParser

logger = get_logger(__name__)

_QUOTES = ("'", '"')


class ImportExtractor:
    """Extracts raw import specifiers from JavaScript/TypeScript sources.

    Usage:
        extractor = ImportExtractor()
        specifiers = extractor.extract(Path("src/app.ts"), content)
    """

    def __init__(self) -> None:
        self._parser = TreeSitterParser()

    def extract(self, filepath: Path, content: str) -> list[str]:
        """Return specifiers in source order, without duplicates.

        Files outside the parseable subset and files that fail to parse
        return an empty list.
        """
        if not is_parseable(filepath):
            return []
        language = detect_language(filepath)
        if not self._parser.is_language_supported(language):
            return []

        try:
            return self._parse_specifiers(filepath, content, language)
        except ParsingError as e:
            logger.debug(f"No imports extracted from {filepath}: {e.reason}")
            return []

    def _parse_specifiers(self, filepath: Path, content: str, language: str) -> list[str]:
        code_bytes = content.encode("utf-8", errors="replace")
        try:
            tree = self._parser.parse(code_bytes, language)
        except Exception as e:
            raise ParsingError(filepath, language, str(e))
        if tree is None:
            raise ParsingError(filepath, language, "parser unavailable")
        if tree.root_node.has_error:
            raise ParsingError(filepath, language, "syntax error")

        found: list[tuple[int, str]] = []

        for node, capture_name in self._parser.query(tree, get_query(language, "import"), language):
            if capture_name != "import.source":
                continue
            value = _string_value(node)
            if value:
                found.append((node.start_byte, value))

        for node, capture_name in self._parser.query(tree, get_query(language, "require"), language):
            if capture_name != "require_call":
                continue
            value = _require_argument(node)
            if value:
                found.append((node.start_byte, value))

        found.sort(key=lambda item: item[0])
        specifiers: list[str] = []
        seen: set[str] = set()
        for _, value in found:
            if value not in seen:
                seen.add(value)
                specifiers.append(value)
        return specifiers


def _string_value(node: Any) -> Optional[str]:
    """Literal value of a tree-sitter ``string`` node, quotes removed."""
    if node is None or node.type != "string" or node.text is None:
        return None
    text = node.text.decode("utf-8", errors="replace")
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return None


def _require_argument(call_node: Any) -> Optional[str]:
    """First string-literal argument of a ``require(...)`` call."""
    callee = call_node.child_by_field_name("function")
    if callee is None or callee.type != "identifier" or callee.text != b"require":
        return None
    arguments = call_node.child_by_field_name("arguments")
    if arguments is None:
        return None
    args = [child for child in arguments.named_children if child.type != "comment"]
    if not args:
        return None
    return _string_value(args[0])


@dataclass
class BasenameIndex:
    """Basename -> path lookup built once per build, before resolution.

    Attributes:
        entries: basename -> path, last writer wins
        collisions: basename -> every path seen with that basename, only for
            basenames that occur more than once
        paths: every indexed path
    """

    entries: dict[str, Path] = field(default_factory=dict)
    collisions: dict[str, list[Path]] = field(default_factory=dict)
    paths: set[Path] = field(default_factory=set)

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> BasenameIndex:
        index = cls()
        seen: dict[str, list[Path]] = {}
        for path in paths:
            path = Path(path)
            seen.setdefault(path.name, []).append(path)
            index.entries[path.name] = path
            index.paths.add(path)

        index.collisions = {name: ps for name, ps in seen.items() if len(ps) > 1}
        if index.collisions:
            logger.debug(
                f"{len(index.collisions)} basenames are shared by several files; "
                "the last one scanned wins during resolution"
            )
        return index

    def get(self, name: str) -> Optional[Path]:
        return self.entries.get(name)

    def suffix_match(self, specifier: str) -> Optional[Path]:
        """First indexed basename (insertion order) that ends the specifier."""
        for name, path in self.entries.items():
            if specifier.endswith(name):
                return path
        return None

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self.entries


def resolve(
    specifier: str,
    index: BasenameIndex,
    importer: Optional[Path] = None,
    relative_first: bool = False,
) -> Optional[Path]:
    """Resolve a raw specifier to a scanned file, or None for a miss."""
    specifier = specifier.strip()
    if not specifier:
        return None

    if relative_first and importer is not None and _is_relative(specifier):
        resolved = _resolve_relative(specifier, importer, index)
        if resolved is not None:
            return resolved

    base = posixpath.basename(specifier)
    if base:
        hit = index.get(base)
        if hit is not None:
            return hit

        for ext in PARSEABLE_EXTENSIONS:
            hit = index.get(base + ext)
            if hit is not None:
                return hit

    return index.suffix_match(specifier)


def _is_relative(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.startswith(("./", "../"))


def _resolve_relative(specifier: str, importer: Path, index: BasenameIndex) -> Optional[Path]:
    target = os.path.normpath(os.path.join(str(importer.parent), specifier))
    candidates = [target]
    candidates.extend(target + ext for ext in PARSEABLE_EXTENSIONS)
    candidates.extend(os.path.join(target, "index" + ext) for ext in PARSEABLE_EXTENSIONS)
    for candidate in candidates:
        path = Path(candidate)
        if path in index.paths:
            return path
    return None


def resolve_imports(
    specifiers: dict[Path, list[str]],
    index: BasenameIndex,
    relative_first: bool = False,
) -> dict[Path, list[Path]]:
    """Second pass: resolve every file's specifiers against a complete index.

    Returns importer -> resolved targets, in specifier order. Misses are
    dropped silently.
    """
    resolved: dict[Path, list[Path]] = {}
    misses = 0
    for importer, specs in specifiers.items():
        targets: list[Path] = []
        for spec in specs:
            target = resolve(spec, index, importer=importer, relative_first=relative_first)
            if target is None:
                misses += 1
                continue
            targets.append(target)
        resolved[importer] = targets

    logger.debug(f"Import resolution: {misses} specifiers left unresolved (assumed external)")
    return resolved
