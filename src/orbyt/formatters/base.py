"""Base formatter interface for Orbyt output rendering."""

from abc import ABC, abstractmethod

from ..api import RepoGraph


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, graph: RepoGraph) -> None:
        """Render the graph to stdout."""

    @abstractmethod
    def format(self, graph: RepoGraph) -> str:
        """Return formatted string representation of the graph."""
