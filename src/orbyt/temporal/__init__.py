"""Temporal analysis: per-file commit counts from git history."""

from .churn import collect_churn
from .git_extractor import GitExtractor, parse_name_only_log

__all__ = ["GitExtractor", "collect_churn", "parse_name_only_log"]
