"""Exception hierarchy for Orbyt."""

from .analysis import AnalysisError, FileAccessError, ParsingError
from .base import OrbytError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "OrbytError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
