"""File discovery, per-file metrics and import extraction."""

from .discovery import ignore_spec_from_text, load_ignore_spec, scan_paths
from .imports import BasenameIndex, ImportExtractor, resolve, resolve_imports
from .languages import (
    EXCLUDED_DIRS,
    PARSEABLE_EXTENSIONS,
    SOURCE_EXTENSIONS,
    detect_language,
    is_parseable,
)
from .metrics import count_lines, estimate_complexity, extract_metrics, read_source
from .models import FileMetrics, ScannedFile
from .treesitter_parser import TreeSitterParser, get_supported_languages

__all__ = [
    # Discovery
    "scan_paths",
    "load_ignore_spec",
    "ignore_spec_from_text",
    "EXCLUDED_DIRS",
    "SOURCE_EXTENSIONS",
    "PARSEABLE_EXTENSIONS",
    "detect_language",
    "is_parseable",
    # Metrics
    "read_source",
    "count_lines",
    "estimate_complexity",
    "extract_metrics",
    "FileMetrics",
    "ScannedFile",
    # Imports
    "ImportExtractor",
    "BasenameIndex",
    "resolve",
    "resolve_imports",
    "TreeSitterParser",
    "get_supported_languages",
]
