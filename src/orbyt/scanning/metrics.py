"""Static per-file metrics: line count and a complexity heuristic.

Complexity is a token-count proxy for cyclomatic complexity, computed on raw
text: one point per branching or looping keyword and per short-circuit
operator, plus one for the file itself. Keywords are matched as whole words
so identifiers such as ``notify`` or ``format`` never count.
"""

import re
from pathlib import Path

from ..exceptions import FileAccessError
from .models import FileMetrics

COMPLEXITY_KEYWORDS: tuple[str, ...] = ("if", "for", "while", "case", "catch")
COMPLEXITY_OPERATORS: tuple[str, ...] = ("&&", "||")

_KEYWORD_RE = re.compile(r"\b(?:" + "|".join(COMPLEXITY_KEYWORDS) + r")\b")
_OPERATOR_RE = re.compile("|".join(re.escape(op) for op in COMPLEXITY_OPERATORS))


def read_source(filepath: Path) -> str:
    """Read a source file as text, replacing undecodable bytes.

    Raises:
        FileAccessError: If the file cannot be opened or read
    """
    try:
        with open(filepath, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(filepath, f"Cannot read file: {e}")


def count_lines(content: str) -> int:
    """Number of newline-delimited segments (never less than 1)."""
    return content.count("\n") + 1


def estimate_complexity(content: str) -> int:
    return 1 + len(_KEYWORD_RE.findall(content)) + len(_OPERATOR_RE.findall(content))


def extract_metrics(content: str, commits: int = 0) -> FileMetrics:
    return FileMetrics(
        loc=count_lines(content),
        complexity=estimate_complexity(content),
        commits=max(0, commits),
    )
