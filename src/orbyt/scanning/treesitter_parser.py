"""Tree-sitter parser wrapper.

Provides one interface over the JavaScript, TypeScript and TSX grammars.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "typescript")
    captures = parser.query(tree, query_str, "typescript")
"""

from __future__ import annotations

from typing import Any

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..logging_config import get_logger

logger = get_logger(__name__)

# Grammar name -> module exposing language() / language_<name>()
_language_modules: dict[str, Any] = {
    "javascript": tree_sitter_javascript,
    "typescript": tree_sitter_typescript,
    "tsx": tree_sitter_typescript,
}

Capture = tuple[Any, str]


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    return list(_language_modules.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for the parseable language subset.

    A parser instance is not safe to share between threads.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, Any] = {}
        self._languages: dict[str, Any] = {}
        self._queries: dict[tuple[str, str], Any] = {}

        for lang_name, lang_module in _language_modules.items():
            # tree-sitter-typescript ships language_typescript() and language_tsx()
            lang_fn = getattr(lang_module, f"language_{lang_name}", None)
            if lang_fn is None:
                lang_fn = getattr(lang_module, "language", None)
            if lang_fn is None:
                logger.warning(f"No tree-sitter grammar entry point for {lang_name}")
                continue

            lang_obj = tree_sitter.Language(lang_fn())
            self._parsers[lang_name] = tree_sitter.Parser(lang_obj)
            self._languages[lang_name] = lang_obj

    def parse(self, code: bytes, language: str) -> Any | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: Language name (e.g., "typescript")

        Returns:
            Tree object, or None if the language is not supported
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None
        return parser.parse(code)

    def query(self, tree: Any | None, query_str: str, language: str) -> list[Capture]:
        """Run a query on a syntax tree.

        Args:
            tree: Syntax tree from parse()
            query_str: S-expression query string
            language: Language name

        Returns:
            List of (node, capture_name) tuples in match order
        """
        if tree is None:
            return []

        lang = self._languages.get(language)
        if lang is None:
            return []

        key = (language, query_str)
        query = self._queries.get(key)
        if query is None:
            query = tree_sitter.Query(lang, query_str)
            self._queries[key] = query

        cursor = tree_sitter.QueryCursor(query)
        # Convert from [(pattern_id, {name: [nodes]})] to [(node, name)]
        result: list[Capture] = []
        for _pattern_id, captures_dict in cursor.matches(tree.root_node):
            for capture_name, nodes in captures_dict.items():
                for node in nodes:
                    result.append((node, capture_name))
        return result

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._parsers
