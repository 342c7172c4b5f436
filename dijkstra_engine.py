"""
Heap-based ShortestPathEngine implementation for campus_routing.

Uses Python's heapq to answer shortest-path queries over any Graph
implementation that satisfies the Graph interface.
"""

from typing import Dict, Generic, Iterable, List, Optional, Tuple
import heapq
import itertools

from algorithms import SearchRecord, ShortestPathEngine
from errors import NoCommonDestinationError, NodeNotFoundError, NoPathFoundError
from graph import Graph, K, W
from hashtable_map import HashtableMap

__all__ = ["SearchRecord", "SimpleDijkstraEngine", "path_from_record"]


class SimpleDijkstraEngine(ShortestPathEngine[K], Generic[K, W]):
    """
    Dijkstra over a binary heap without decrease-key.

    A node may sit in the heap several times; the first pop finalizes it
    and later pops of the same node are discarded as stale.

    Complexity:
        O(E log E) over the edges reachable from the source.
    """

    def __init__(self, graph: Graph[K, W]) -> None:
        self._graph = graph
        # Instrumentation counters for the last search.
        self.last_heap_pops = 0
        self.last_heap_pushes = 0
        self.last_edges_examined = 0
        self.last_finalized = 0

    @property
    def graph(self) -> Graph[K, W]:
        return self._graph

    def compute_shortest_path(self, start: K, end: K) -> SearchRecord[K]:
        """
        Run Dijkstra from start until end is finalized.

        Returns:
            The SearchRecord for end; walking its predecessors leads back to
            start.

        Raises:
            NodeNotFoundError: if start or end is not a node.
            NoPathFoundError: if the heap empties before end is reached.
        """
        if not self._graph.contains_node(start) or not self._graph.contains_node(end):
            raise NodeNotFoundError(f"Start {start!r} or end {end!r} is not in the graph.")

        finalized = self._search(start, target=end)
        if finalized.contains_key(end):
            return finalized.get(end)
        raise NoPathFoundError(f"There is no path from {start!r} to {end!r}.")

    def shortest_path_data(self, start: K, end: K) -> List[K]:
        try:
            record = self.compute_shortest_path(start, end)
        except (NodeNotFoundError, NoPathFoundError):
            return []
        return path_from_record(record)

    def shortest_path_cost(self, start: K, end: K) -> float:
        return self.compute_shortest_path(start, end).cost

    def shortest_path_costs(self, source: K) -> Dict[K, float]:
        if not self._graph.contains_node(source):
            raise NodeNotFoundError(f"Source {source!r} is not in the graph.")
        finalized = self._search(source)
        return {node: record.cost for node, record in finalized.items()}

    def closest_common_destination(self, starts: Iterable[K]) -> K:
        """
        Find the node with the smallest summed cost from every start.

        A node is a candidate only if every start reaches it; an unknown
        start reaches nothing. Ties go to the node listed first by
        all_nodes(). With no starts every node costs 0, so the first node
        wins.
        """
        start_list = list(starts)
        cost_maps: List[Dict[K, float]] = []
        for start in start_list:
            if not self._graph.contains_node(start):
                raise NoCommonDestinationError(
                    f"Start {start!r} is not in the graph; no common destination."
                )
            cost_maps.append(self.shortest_path_costs(start))

        best: Optional[Tuple[K, float]] = None
        for node in self._graph.all_nodes():
            if not all(node in costs for costs in cost_maps):
                continue
            total = sum(costs[node] for costs in cost_maps)
            if best is None or total < best[1]:
                best = (node, total)

        if best is None:
            raise NoCommonDestinationError(
                f"No destination is reachable from all of {start_list!r}."
            )
        return best[0]

    # --- Internal helpers ---------------------------------------------------

    def _search(self, source: K, target: Optional[K] = None) -> HashtableMap[K, SearchRecord[K]]:
        """
        Finalize nodes in cost order from source.

        Stops as soon as target is finalized; with no target, runs until the
        heap is empty. Returns the finalized node -> record map.
        """
        self.last_heap_pops = 0
        self.last_heap_pushes = 0
        self.last_edges_examined = 0
        self.last_finalized = 0

        finalized: HashtableMap[K, SearchRecord[K]] = HashtableMap()
        # Sequence numbers keep equal-cost pops in insertion order and stop
        # heapq from ever comparing two records.
        counter = itertools.count()
        pq: List[Tuple[float, int, SearchRecord[K]]] = [(0.0, next(counter), SearchRecord(source, 0.0))]
        self.last_heap_pushes = 1

        while pq:
            _, _, current = heapq.heappop(pq)
            self.last_heap_pops += 1

            # Skip stale duplicates of already finalized nodes
            if finalized.contains_key(current.node):
                continue

            finalized.put(current.node, current)
            self.last_finalized += 1
            if target is not None and current.node == target:
                break

            for neighbor, weight in self._graph.outgoing_edges(current.node):
                self.last_edges_examined += 1
                if finalized.contains_key(neighbor):
                    continue
                record = SearchRecord(neighbor, current.cost + float(weight), current)
                heapq.heappush(pq, (record.cost, next(counter), record))
                self.last_heap_pushes += 1

        return finalized


def path_from_record(record: SearchRecord[K]) -> List[K]:
    """Walk predecessor links back to the source and return start..end."""
    path: List[K] = []
    current: Optional[SearchRecord[K]] = record
    while current is not None:
        path.append(current.node)
        current = current.predecessor
    path.reverse()
    return path
