"""JSON formatter for Orbyt."""

import json

from ..api import RepoGraph
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the renderer payload (nodes, edges, stats) as JSON."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def render(self, graph: RepoGraph) -> None:
        print(self.format(graph))

    def format(self, graph: RepoGraph) -> str:
        return json.dumps(graph.to_payload(), indent=self.indent, ensure_ascii=False)
