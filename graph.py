"""
Directed, weighted graph interface for campus_routing.

Nodes are any hashable identifiers.
Edges are directed: pred -> succ with a non-negative numeric weight.
Shortest-path engines depend only on this read-only view.
"""

from abc import ABC, abstractmethod
from typing import Generic, Hashable, List, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
W = TypeVar("W")


class Graph(ABC, Generic[K, W]):
    """Read-only view of a directed, weighted graph."""

    @abstractmethod
    def contains_node(self, key: K) -> bool:
        """Return True if key identifies a node in the graph."""
        raise NotImplementedError

    @abstractmethod
    def all_nodes(self) -> List[K]:
        """Return a snapshot of every node identifier."""
        raise NotImplementedError

    @abstractmethod
    def outgoing_edges(self, key: K) -> List[Tuple[K, W]]:
        """
        Outgoing neighbours and edge weights for a given node.

        Returns: list of (successor, weight)

        Raises:
            NodeNotFoundError: if key is not in the graph.
        """
        raise NotImplementedError
