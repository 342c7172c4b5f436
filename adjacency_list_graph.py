"""
Concrete directed, weighted graph implementation for campus_routing.

Implements the Graph interface with a HashtableMap node index. Every node
keeps its leaving and entering edge lists so removal touches only the
node's own neighbourhood.
"""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, Tuple
import math

from errors import DuplicateNodeError, EdgeNotFoundError, NodeNotFoundError, NullKeyError
from graph import Graph, K, W
from hashtable_map import HashtableMap


@dataclass
class Edge(Generic[K, W]):
    """Directed edge owned by its predecessor's leaving list."""

    predecessor: K
    successor: K
    weight: W


@dataclass
class _Vertex(Generic[K, W]):
    key: K
    edges_leaving: List[Edge[K, W]] = field(default_factory=list)
    edges_entering: List[Edge[K, W]] = field(default_factory=list)


class AdjacencyListGraph(Graph[K, W]):
    """
    Directed, weighted graph backed by a key -> vertex hashtable.

    Inserting an edge for an existing (pred, succ) pair overwrites its
    weight. Endpoints must be inserted before the edge; nothing is
    auto-created here.
    """

    def __init__(self) -> None:
        self._nodes: HashtableMap[K, _Vertex[K, W]] = HashtableMap()
        # Insertion order of live keys, so all_nodes() is stable across runs.
        self._order: List[K] = []
        self._edge_count = 0

    # --- Mutation API --------------------------------------------------------

    def insert_node(self, key: K) -> None:
        """
        Add a node with no edges.

        Raises:
            NullKeyError: if key is None.
            DuplicateNodeError: if key is already a node.
        """
        if key is None:
            raise NullKeyError("Node key cannot be None.")
        if self._nodes.contains_key(key):
            raise DuplicateNodeError(f"Node {key!r} already exists.")
        self._nodes.put(key, _Vertex(key))
        self._order.append(key)

    def remove_node(self, key: K) -> None:
        """Remove key and every edge that leaves or enters it."""
        vertex = self._vertex(key)

        for edge in vertex.edges_leaving:
            if edge.successor != key:
                self._vertex(edge.successor).edges_entering.remove(edge)
        for edge in vertex.edges_entering:
            if edge.predecessor != key:
                self._vertex(edge.predecessor).edges_leaving.remove(edge)

        # A self-loop appears in both lists but is a single edge.
        self_loops = sum(1 for e in vertex.edges_leaving if e.successor == key)
        self._edge_count -= len(vertex.edges_leaving) + len(vertex.edges_entering) - self_loops

        self._nodes.remove(key)
        self._order.remove(key)

    def insert_edge(self, pred: K, succ: K, weight: W) -> None:
        """
        Add or update the directed edge pred -> succ.

        Raises:
            NodeNotFoundError: if either endpoint is not a node.
            ValueError: if weight is negative or NaN.
        """
        source = self._vertex(pred)
        target = self._vertex(succ)
        _check_weight(weight)

        existing = self._find_edge(source, succ)
        if existing is not None:
            existing.weight = weight
            return

        edge = Edge(pred, succ, weight)
        source.edges_leaving.append(edge)
        target.edges_entering.append(edge)
        self._edge_count += 1

    def remove_edge(self, pred: K, succ: K) -> None:
        """
        Remove the directed edge pred -> succ.

        Raises:
            EdgeNotFoundError: if the edge (or either endpoint) is absent.
        """
        edge = None
        if self._nodes.contains_key(pred):
            source = self._nodes.get(pred)
            edge = self._find_edge(source, succ)
        if edge is None:
            raise EdgeNotFoundError(f"No edge from {pred!r} to {succ!r}.")
        source.edges_leaving.remove(edge)
        self._nodes.get(succ).edges_entering.remove(edge)
        self._edge_count -= 1

    def clear(self) -> None:
        """Remove every node and edge."""
        self._nodes.clear()
        self._order.clear()
        self._edge_count = 0

    # --- Queries -------------------------------------------------------------

    def contains_edge(self, pred: K, succ: K) -> bool:
        if not self._nodes.contains_key(pred):
            return False
        return self._find_edge(self._nodes.get(pred), succ) is not None

    def get_edge_weight(self, pred: K, succ: K) -> W:
        """
        Weight of pred -> succ.

        Raises:
            EdgeNotFoundError: if the edge (or either endpoint) is absent.
        """
        if self._nodes.contains_key(pred):
            edge = self._find_edge(self._nodes.get(pred), succ)
            if edge is not None:
                return edge.weight
        raise EdgeNotFoundError(f"No edge from {pred!r} to {succ!r}.")

    def incoming_edges(self, key: K) -> List[Tuple[K, W]]:
        return [(e.predecessor, e.weight) for e in self._vertex(key).edges_entering]

    def node_count(self) -> int:
        return self._nodes.size()

    def edge_count(self) -> int:
        return self._edge_count

    # --- Graph interface -----------------------------------------------------

    def contains_node(self, key: K) -> bool:
        return self._nodes.contains_key(key)

    def all_nodes(self) -> List[K]:
        return list(self._order)

    def outgoing_edges(self, key: K) -> List[Tuple[K, W]]:
        return [(e.successor, e.weight) for e in self._vertex(key).edges_leaving]

    # --- Internal helpers ---------------------------------------------------

    def _vertex(self, key: K) -> _Vertex[K, W]:
        if not self._nodes.contains_key(key):
            raise NodeNotFoundError(f"Node {key!r} is not in the graph.")
        return self._nodes.get(key)

    @staticmethod
    def _find_edge(source: _Vertex[K, W], succ: K) -> Optional[Edge[K, W]]:
        for edge in source.edges_leaving:
            if edge.successor == succ:
                return edge
        return None


def _check_weight(weight: object) -> None:
    value = float(weight)  # type: ignore[arg-type]
    if math.isnan(value) or value < 0:
        raise ValueError(f"Edge weight must be non-negative, got {weight!r}.")
