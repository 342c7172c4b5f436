"""
Unit tests for SimpleDijkstraEngine using AdjacencyListGraph.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple
import random

import numpy as np
import pytest

from adjacency_list_graph import AdjacencyListGraph
from algorithms import ShortestPathEngine
from dijkstra_engine import SearchRecord, SimpleDijkstraEngine, path_from_record
from errors import NoCommonDestinationError, NodeNotFoundError, NoPathFoundError


@dataclass(frozen=True)
class DummyNode:
    """
    Minimal hashable node key for Dijkstra tests.
    """

    _id: str


LECTURE_EDGES = [
    ("A", "B", 4.0),
    ("A", "C", 2.0),
    ("A", "E", 15.0),
    ("B", "E", 10.0),
    ("B", "D", 1.0),
    ("C", "D", 5.0),
    ("D", "F", 0.0),
    ("D", "E", 3.0),
    ("F", "D", 2.0),
    ("F", "H", 4.0),
]


def _build(nodes: Iterable, edges: Iterable[Tuple]) -> AdjacencyListGraph:
    g: AdjacencyListGraph = AdjacencyListGraph()
    for n in nodes:
        g.insert_node(n)
    for u, v, w in edges:
        g.insert_edge(u, v, w)
    return g


@pytest.fixture
def lecture_engine() -> SimpleDijkstraEngine:
    g = _build("ABCDEFH", LECTURE_EDGES)
    return SimpleDijkstraEngine(g)


def test_dijkstra_basic_paths():
    a = DummyNode("A")
    b = DummyNode("B")
    c = DummyNode("C")

    # A -> B (1), A -> C (4), B -> C (2)
    g = _build([a, b, c], [(a, b, 1.0), (a, c, 4.0), (b, c, 2.0)])
    engine = SimpleDijkstraEngine(g)

    # Shortest A->C is A->B->C with cost 3.0
    assert engine.shortest_path_cost(a, c) == 3.0
    assert engine.shortest_path_data(a, c) == [a, b, c]
    assert engine.shortest_path_costs(a) == {a: 0.0, b: 1.0, c: 3.0}


@pytest.mark.parametrize(
    "start, end, path, cost",
    [
        ("A", "E", ["A", "B", "D", "E"], 8.0),
        ("B", "E", ["B", "D", "E"], 4.0),
        ("A", "H", ["A", "B", "D", "F", "H"], 9.0),
        ("F", "E", ["F", "D", "E"], 5.0),
        ("A", "A", ["A"], 0.0),
    ],
)
def test_lecture_graph_paths(lecture_engine, start, end, path, cost):
    assert lecture_engine.shortest_path_data(start, end) == path
    assert lecture_engine.shortest_path_cost(start, end) == pytest.approx(cost)


def test_compute_shortest_path_record_chain(lecture_engine):
    record = lecture_engine.compute_shortest_path("A", "E")

    assert isinstance(record, SearchRecord)
    assert record.node == "E"
    assert record.cost == 8.0
    assert record.predecessor is not None and record.predecessor.node == "D"
    assert path_from_record(record) == ["A", "B", "D", "E"]


def test_engine_interface_declares_compute_shortest_path(lecture_engine):
    assert "compute_shortest_path" in ShortestPathEngine.__abstractmethods__
    assert isinstance(lecture_engine, ShortestPathEngine)

    class PartialEngine(ShortestPathEngine):
        def shortest_path_data(self, start, end):
            return []

        def shortest_path_cost(self, start, end):
            return 0.0

        def shortest_path_costs(self, source):
            return {}

        def closest_common_destination(self, starts):
            return None

    with pytest.raises(TypeError):
        PartialEngine()


def test_path_weights_sum_to_cost(lecture_engine):
    g = lecture_engine.graph
    for end in ("B", "C", "D", "E", "F", "H"):
        path = lecture_engine.shortest_path_data("A", end)
        total = sum(g.get_edge_weight(u, v) for u, v in zip(path, path[1:]))
        assert total == lecture_engine.shortest_path_cost("A", end)


def test_dijkstra_unreachable_node():
    g = _build("ABC", [("A", "B", 5.0)])
    engine = SimpleDijkstraEngine(g)

    assert engine.shortest_path_data("A", "C") == []
    with pytest.raises(NoPathFoundError):
        engine.shortest_path_cost("A", "C")
    # Unreachable node should not appear in the cost map
    assert engine.shortest_path_costs("A") == {"A": 0.0, "B": 5.0}


def test_edges_are_not_walked_backwards():
    g = _build("AB", [("A", "B", 1.0)])
    engine = SimpleDijkstraEngine(g)

    assert engine.shortest_path_data("B", "A") == []
    with pytest.raises(NoPathFoundError):
        engine.compute_shortest_path("B", "A")


def test_missing_nodes(lecture_engine):
    assert lecture_engine.shortest_path_data("A", "Z") == []
    assert lecture_engine.shortest_path_data("Z", "A") == []
    with pytest.raises(NodeNotFoundError):
        lecture_engine.shortest_path_cost("Z", "A")
    with pytest.raises(NodeNotFoundError):
        lecture_engine.compute_shortest_path("A", "Z")
    with pytest.raises(NodeNotFoundError):
        lecture_engine.shortest_path_costs("Z")


def test_stale_heap_entries_are_skipped(lecture_engine):
    costs = lecture_engine.shortest_path_costs("A")

    assert costs == {"A": 0.0, "B": 4.0, "C": 2.0, "D": 5.0, "E": 8.0, "F": 5.0, "H": 9.0}
    assert lecture_engine.last_finalized == 7
    # D (via C) and E (via A and via B) are pushed more than once
    assert lecture_engine.last_heap_pops == lecture_engine.last_heap_pushes == 10


def test_search_stops_once_end_is_finalized(lecture_engine):
    lecture_engine.shortest_path_cost("A", "C")

    # A and C are finalized; nothing beyond C needs to be popped
    assert lecture_engine.last_finalized == 2
    assert lecture_engine.last_heap_pops == 2


def test_equal_cost_ties_are_valid_and_repeatable():
    g = _build("ABCD", [("A", "B", 1.0), ("A", "C", 1.0), ("B", "D", 1.0), ("C", "D", 1.0)])
    engine = SimpleDijkstraEngine(g)

    path = engine.shortest_path_data("A", "D")
    assert path in (["A", "B", "D"], ["A", "C", "D"])
    assert engine.shortest_path_cost("A", "D") == 2.0
    assert engine.shortest_path_data("A", "D") == path


def test_integer_weights_give_float_costs():
    g = _build("ABC", [("A", "B", 2), ("B", "C", 3)])
    engine = SimpleDijkstraEngine(g)

    cost = engine.shortest_path_cost("A", "C")
    assert cost == 5.0
    assert isinstance(cost, float)


def test_graph_changes_seen_by_next_query():
    g = _build("ABC", [("A", "B", 1.0), ("B", "C", 1.0)])
    engine = SimpleDijkstraEngine(g)
    assert engine.shortest_path_data("A", "C") == ["A", "B", "C"]

    g.remove_node("B")
    assert engine.shortest_path_data("A", "C") == []

    g.insert_edge("A", "C", 7.0)
    assert engine.shortest_path_cost("A", "C") == 7.0


# --- closest_common_destination ----------------------------------------------


def test_closest_common_destination_two_starts(lecture_engine):
    # Reachable from both A and B: B=4+0, D=5+1, E=8+4, F=5+1, H=9+5
    assert lecture_engine.closest_common_destination(["A", "B"]) == "B"


def test_closest_common_destination_matches_pairwise_sums(lecture_engine):
    starts = ["C", "F"]
    best = None
    for d in lecture_engine.graph.all_nodes():
        try:
            total = sum(lecture_engine.shortest_path_cost(s, d) for s in starts)
        except NoPathFoundError:
            continue
        if best is None or total < best[1]:
            best = (d, total)

    assert best is not None
    assert lecture_engine.closest_common_destination(starts) == best[0]


def test_closest_common_destination_single_start_is_itself(lecture_engine):
    assert lecture_engine.closest_common_destination(["F"]) == "F"


def test_closest_common_destination_ties_go_to_first_node():
    g = _build("XYZ", [("X", "Y", 1.0), ("Y", "X", 1.0), ("X", "Z", 5.0), ("Y", "Z", 5.0)])
    engine = SimpleDijkstraEngine(g)

    # X and Y both total 1.0; X was inserted first
    assert engine.closest_common_destination(["X", "Y"]) == "X"


def test_no_common_destination(lecture_engine):
    # E and H are sinks with no way to each other
    with pytest.raises(NoCommonDestinationError):
        lecture_engine.closest_common_destination(["E", "H"])


def test_unknown_start_has_no_common_destination(lecture_engine):
    with pytest.raises(NoCommonDestinationError):
        lecture_engine.closest_common_destination(["A", "Z"])


def test_empty_starts(lecture_engine):
    assert lecture_engine.closest_common_destination([]) == "A"

    empty = SimpleDijkstraEngine(AdjacencyListGraph())
    with pytest.raises(NoCommonDestinationError):
        empty.closest_common_destination([])


# --- randomized cross-check --------------------------------------------------


def _floyd_warshall(n: int, edges) -> np.ndarray:
    dist = np.full((n, n), np.inf)
    np.fill_diagonal(dist, 0.0)
    for u, v, w in edges:
        dist[u, v] = min(dist[u, v], w)
    for k in range(n):
        dist = np.minimum(dist, dist[:, k, None] + dist[None, k, :])
    return dist


@pytest.mark.parametrize("seed", range(6))
def test_costs_match_floyd_warshall(seed):
    rng = random.Random(seed)
    n = 9
    edges = {}
    for u in range(n):
        for v in range(n):
            if u != v and rng.random() < 0.25:
                # Small integers keep float sums exact
                edges[(u, v)] = float(rng.randint(0, 9))
    edge_list = [(u, v, w) for (u, v), w in edges.items()]

    g = _build(range(n), edge_list)
    engine = SimpleDijkstraEngine(g)
    reference = _floyd_warshall(n, edge_list)

    for a in range(n):
        for b in range(n):
            path = engine.shortest_path_data(a, b)
            if np.isinf(reference[a, b]):
                assert path == []
                with pytest.raises(NoPathFoundError):
                    engine.shortest_path_cost(a, b)
                continue

            cost = engine.shortest_path_cost(a, b)
            assert cost == reference[a, b]
            assert path[0] == a and path[-1] == b
            assert sum(g.get_edge_weight(u, v) for u, v in zip(path, path[1:])) == cost
