"""Tree-sitter queries for import extraction.

The JavaScript, TypeScript and TSX grammars share node names for the
constructs we care about:
    - ES module import declarations (``import x from "./y"``, ``import "./y"``)
    - CommonJS calls (``require("./y")``); the callee and argument are
      checked by the extractor since predicate support varies by binding
"""

from __future__ import annotations

IMPORT_QUERY = """
(import_statement
    source: (string) @import.source
) @import
"""

REQUIRE_QUERY = """
(call_expression
    function: (identifier) @require.callee
    arguments: (arguments) @require.arguments
) @require_call
"""

QUERIES: dict[str, dict[str, str]] = {
    language: {"import": IMPORT_QUERY, "require": REQUIRE_QUERY}
    for language in ("javascript", "typescript", "tsx")
}


def get_query(language: str, query_name: str) -> str | None:
    """Get a specific query for a language, or None if unsupported."""
    queries = QUERIES.get(language)
    if queries is None:
        return None
    return queries.get(query_name)
