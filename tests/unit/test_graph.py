"""Unit tests for the graph store and traversal."""

import random

import pytest

from graphengine.core.exceptions import InvalidGraphError, VertexOutOfRangeError
from graphengine.core.graph import Graph, build_graph
from graphengine.core.graph.traversal import (
    bfs,
    dfs_iterative,
    dfs_recursive,
    multi_source_bfs,
)


def random_graph(seed: int, n: int = 8, m: int = 14, directed: bool = True) -> Graph:
    """Create a random unit-weight graph (may contain parallel edges and loops)."""
    rng = random.Random(seed)
    graph = Graph(n, directed=directed)
    for _ in range(m):
        graph.add_edge(rng.randrange(n), rng.randrange(n))
    return graph


@pytest.fixture
def diamond_graph() -> Graph:
    """Directed graph: 0 -> 1, 0 -> 2, 1 -> 2, 2 -> 3."""
    return build_graph(4, [(0, 1), (0, 2), (1, 2), (2, 3)], directed=True)


@pytest.fixture
def line_graph() -> Graph:
    """Undirected path 0 - 1 - 2 - 3 - 4."""
    return build_graph(5, [(0, 1), (1, 2), (2, 3), (3, 4)], directed=False)


class TestGraph:
    """Tests for the Graph class."""

    def test_add_edge_undirected_mirrors(self) -> None:
        graph = Graph(3)
        graph.add_edge(0, 1, 5)
        assert graph.neighbors(0) == [(1, 5)]
        assert graph.neighbors(1) == [(0, 5)]
        assert graph.num_edges == 1
        assert graph.edge_count == 2

    def test_add_edge_directed(self) -> None:
        graph = Graph(3, directed=True)
        graph.add_edge(0, 1, 5)
        assert graph.neighbors(0) == [(1, 5)]
        assert graph.neighbors(1) == []
        assert graph.edge_count == 1

    def test_adjacency_keeps_insertion_order(self) -> None:
        graph = Graph(4, directed=True)
        graph.add_edge(0, 3)
        graph.add_edge(0, 1)
        graph.add_edge(0, 2)
        assert [v for v, _ in graph.neighbors(0)] == [3, 1, 2]

    def test_edge_list_records_id(self) -> None:
        graph = Graph(2)
        edge = graph.add_edge(0, 1, 7, id=42)
        assert graph.edge_list() == [edge]
        assert edge.id == 42
        assert edge.weight == 7

    def test_edge_list_is_a_copy(self) -> None:
        graph = Graph(2)
        graph.add_edge(0, 1)
        graph.edge_list().clear()
        assert graph.num_edges == 1

    def test_out_of_range_endpoint_raises(self) -> None:
        graph = Graph(3)
        with pytest.raises(VertexOutOfRangeError):
            graph.add_edge(0, 3)
        with pytest.raises(VertexOutOfRangeError):
            graph.add_edge(-1, 2)
        assert graph.num_edges == 0
        assert graph.edge_count == 0

    def test_negative_vertex_count_raises(self) -> None:
        with pytest.raises(InvalidGraphError):
            Graph(-1)

    def test_undirected_edges_deduplicates(self) -> None:
        graph = Graph(3)
        graph.add_edge(0, 1, 2)
        graph.add_edge(1, 0, 2)
        graph.add_edge(2, 1, 3)
        unique = [(e.u, e.v, e.weight) for e in graph.undirected_edges()]
        assert unique == [(0, 1, 2), (1, 2, 3)]

    def test_reversed(self) -> None:
        graph = Graph(3, directed=True)
        graph.add_edge(0, 1, 4)
        graph.add_edge(2, 1, 6)
        rev = graph.reversed()
        assert rev.neighbors(1) == [(0, 4), (2, 6)]
        assert rev.neighbors(0) == []
        assert graph.neighbors(0) == [(1, 4)]

    def test_in_degrees(self, diamond_graph: Graph) -> None:
        assert diamond_graph.in_degrees() == [0, 1, 2, 1]
        assert diamond_graph.out_degree(0) == 2

    def test_repr(self, diamond_graph: Graph) -> None:
        assert repr(diamond_graph) == "Graph(nodes=4, edges=4, directed)"


class TestBFS:
    """Tests for breadth-first search."""

    def test_bfs_distances(self, diamond_graph: Graph) -> None:
        result = bfs(diamond_graph, 0)
        assert result.distances == [0, 1, 1, 2]
        assert result.parents == [-1, 0, 0, 2]

    def test_bfs_path(self, diamond_graph: Graph) -> None:
        assert bfs(diamond_graph, 0).path_to(3) == [0, 2, 3]

    def test_bfs_unreachable(self, diamond_graph: Graph) -> None:
        result = bfs(diamond_graph, 2)
        assert result.distances == [-1, -1, 0, 1]
        assert result.path_to(0) == []

    @pytest.mark.parametrize("target", [-1, 4])
    def test_bfs_path_rejects_out_of_range(self, diamond_graph: Graph, target: int) -> None:
        with pytest.raises(VertexOutOfRangeError):
            bfs(diamond_graph, 0).path_to(target)

    def test_bfs_invalid_source(self, diamond_graph: Graph) -> None:
        with pytest.raises(VertexOutOfRangeError):
            bfs(diamond_graph, 4)

    def test_multi_source(self, line_graph: Graph) -> None:
        result = multi_source_bfs(line_graph, [0, 4])
        assert result.distances == [0, 1, 2, 1, 0]

    def test_multi_source_duplicates(self, line_graph: Graph) -> None:
        assert multi_source_bfs(line_graph, [2, 2]).distances == [2, 1, 0, 1, 2]

    @pytest.mark.parametrize("seed", range(10))
    def test_bfs_edge_bound(self, seed: int) -> None:
        """Every edge leaving a reached vertex lands at most one layer further."""
        graph = random_graph(seed)
        dist = bfs(graph, 0).distances
        for edge in graph.edge_list():
            if dist[edge.u] != -1:
                assert dist[edge.v] != -1
                assert dist[edge.v] <= dist[edge.u] + 1


class TestDFS:
    """Tests for depth-first search."""

    def test_dfs_recursive_order(self) -> None:
        graph = build_graph(4, [(0, 1), (0, 2), (1, 3), (2, 3)], directed=True)
        assert dfs_recursive(graph, 0) == [0, 1, 3, 2]

    def test_dfs_iterative_order(self) -> None:
        graph = build_graph(4, [(0, 1), (0, 2), (1, 3), (2, 3)], directed=True)
        assert dfs_iterative(graph, 0) == [0, 1, 3, 2]

    @pytest.mark.parametrize("seed", range(10))
    @pytest.mark.parametrize("directed", [True, False])
    def test_variants_agree(self, seed: int, directed: bool) -> None:
        graph = random_graph(seed, directed=directed)
        assert dfs_iterative(graph, 0) == dfs_recursive(graph, 0)

    def test_iterative_handles_deep_path(self) -> None:
        n = 5000
        graph = build_graph(n, [(i, i + 1) for i in range(n - 1)], directed=True)
        assert dfs_iterative(graph, 0) == list(range(n))

    def test_dfs_does_not_mutate_graph(self, diamond_graph: Graph) -> None:
        before = [diamond_graph.neighbors(v) for v in range(4)]
        dfs_iterative(diamond_graph, 0)
        dfs_recursive(diamond_graph, 0)
        assert [diamond_graph.neighbors(v) for v in range(4)] == before
