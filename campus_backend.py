"""
Campus map backend: loads walking-time graphs from DOT files and answers
location queries on top of a graph and a shortest-path engine.

DOT edge lines look like:

    "Union South" -> "Computer Sciences and Statistics" [seconds=176.0];

Quotes around names are optional and the weight is the first key=value
attribute inside the brackets whose value is a number. Lines without "->"
(graph header, braces, comments) are skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional
import logging
import re

from adjacency_list_graph import AdjacencyListGraph
from algorithms import ShortestPathEngine
from dijkstra_engine import SimpleDijkstraEngine
from errors import EdgeNotFoundError

logger = logging.getLogger(__name__)

_EDGE_LINE = re.compile(r'^\s*"?(?P<pred>[^"\[]+?)"?\s*->\s*"?(?P<succ>[^"\[]+?)"?\s*\[(?P<attrs>[^\]]*)\]')
# key=value attribute whose whole value is a number, optionally quoted
_NUMERIC_ATTR = re.compile(r'\w+\s*=\s*"?(?P<value>-?(?:\d+(?:\.\d*)?|\.\d+))"?\s*(?=[,;]|$)')


class CampusBackend:
    """
    Location queries over a campus graph.

    Path lookups downgrade "no path" to an empty list for display code;
    closest_destination_from_all raises NoCommonDestinationError instead.
    """

    def __init__(
        self,
        graph: Optional[AdjacencyListGraph[str, float]] = None,
        engine: Optional[ShortestPathEngine[str]] = None,
    ) -> None:
        self._graph: AdjacencyListGraph[str, float] = graph if graph is not None else AdjacencyListGraph()
        self._engine: ShortestPathEngine[str] = engine if engine is not None else SimpleDijkstraEngine(self._graph)

    @property
    def graph(self) -> AdjacencyListGraph[str, float]:
        return self._graph

    def load_graph_data(self, path: Path | str) -> None:
        """
        Replace the current graph contents with the edges in a DOT file.

        Raises:
            FileNotFoundError: if path does not exist.
            ValueError: if an edge line is malformed or its weight is
                missing or negative.
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")

        # Parse everything first so a bad line leaves the current map intact.
        edges = [
            _parse_edge_line(line, lineno)
            for lineno, line in enumerate(text.splitlines(), start=1)
            if "->" in line
        ]

        for node in self._graph.all_nodes():
            self._graph.remove_node(node)

        for pred, succ, weight in edges:
            if not self._graph.contains_node(pred):
                self._graph.insert_node(pred)
            if not self._graph.contains_node(succ):
                self._graph.insert_node(succ)
            self._graph.insert_edge(pred, succ, weight)

        logger.info(
            "Loaded %d locations and %d edges from %s",
            self._graph.node_count(),
            len(edges),
            path,
        )

    def list_locations(self) -> List[str]:
        return self._graph.all_nodes()

    def locations_on_shortest_path(self, start: str, end: str) -> List[str]:
        return self._engine.shortest_path_data(start, end)

    def times_on_shortest_path(self, start: str, end: str) -> List[float]:
        """Per-hop walking times along the shortest path, or [] if none."""
        return self.times_along(self.locations_on_shortest_path(start, end))

    def times_along(self, path: List[str]) -> List[float]:
        """Per-hop walking times along an existing path, or [] if a hop is missing."""
        try:
            return [float(self._graph.get_edge_weight(a, b)) for a, b in zip(path, path[1:])]
        except EdgeNotFoundError:
            return []

    def closest_destination_from_all(self, starts: Iterable[str]) -> str:
        return self._engine.closest_common_destination(starts)


def parse_locations(text: str) -> List[str]:
    """Split a comma-separated location list, trimming and dropping blanks."""
    return [part.strip() for part in text.split(",") if part.strip()]


def _parse_edge_line(line: str, lineno: int) -> tuple[str, str, float]:
    match = _EDGE_LINE.match(line)
    if match is None:
        raise ValueError(f"Line {lineno}: malformed edge {line.strip()!r}")
    attr = _NUMERIC_ATTR.search(match.group("attrs").strip())
    if attr is None:
        raise ValueError(f"Line {lineno}: edge has no numeric weight {line.strip()!r}")
    weight = float(attr.group("value"))
    if weight < 0:
        raise ValueError(f"Line {lineno}: edge weight must be non-negative {line.strip()!r}")
    return match.group("pred").strip(), match.group("succ").strip(), weight
