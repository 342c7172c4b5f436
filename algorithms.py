"""
Algorithm interfaces for path queries.

Keeps the search algorithm separate from graph storage and from the
campus backend that presents results.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class SearchRecord(Generic[K]):
    """
    One candidate path found during a search.

    node is the path's last node, cost its total weight, and predecessor the
    record for the path minus its last hop (None for the source).
    """

    node: K
    cost: float
    predecessor: Optional["SearchRecord[K]"] = None


class ShortestPathEngine(ABC, Generic[K]):
    """
    Interface for exact shortest-path queries over one graph.
    """

    @abstractmethod
    def compute_shortest_path(self, start: K, end: K) -> SearchRecord[K]:
        """
        Search from start until end's cheapest path is known.

        Returns:
            The SearchRecord for end; its predecessor chain leads to start.

        Raises:
            NodeNotFoundError: if start or end is not a node.
            NoPathFoundError: if end is unreachable from start.
        """
        raise NotImplementedError

    @abstractmethod
    def shortest_path_data(self, start: K, end: K) -> List[K]:
        """
        Nodes along the shortest path, start first and end last.

        Returns:
            The node sequence, or [] when either node is missing or no
            path exists.
        """
        raise NotImplementedError

    @abstractmethod
    def shortest_path_cost(self, start: K, end: K) -> float:
        """
        Total weight of the shortest path from start to end.

        Raises:
            NodeNotFoundError: if start or end is not a node.
            NoPathFoundError: if end is unreachable from start.
        """
        raise NotImplementedError

    @abstractmethod
    def shortest_path_costs(self, source: K) -> Dict[K, float]:
        """
        Shortest-path costs from source to all reachable nodes.

        Returns:
            Mapping dest_node -> path_cost(source -> dest_node).
        """
        raise NotImplementedError

    @abstractmethod
    def closest_common_destination(self, starts: Iterable[K]) -> K:
        """
        Node minimising the summed shortest-path cost from every start.

        Raises:
            NoCommonDestinationError: if no node is reachable from all starts.
        """
        raise NotImplementedError
