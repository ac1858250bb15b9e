"""
Orbyt - repository dependency graphs

Scans a source tree and builds a two-tier graph of files and folders, wired
by resolved import edges and annotated with size, complexity and git churn,
ready for a force-directed renderer.
"""

__version__ = "0.1.0"

from .api import RepoGraph, build_repo_graph
from .config import AnalysisConfig, load_config
from .explain import Explanation, ExplanationService
from .graph import EdgeKind, Stats

__all__ = [
    "build_repo_graph",  # Main entry point
    "RepoGraph",
    "AnalysisConfig",
    "load_config",
    "ExplanationService",
    "Explanation",
    "EdgeKind",
    "Stats",
]
