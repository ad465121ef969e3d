"""Unit tests for shortest path algorithms."""

import logging
import random

import pytest

from graphengine.core.exceptions import InvalidGraphError, VertexOutOfRangeError
from graphengine.core.graph import Graph, build_graph
from graphengine.core.graph.pathfinding import (
    bellman_ford,
    dag_shortest_path,
    dijkstra,
    floyd_warshall,
    zero_one_bfs,
)
from graphengine.core.models import INF


def random_weighted(
    seed: int, n: int = 7, m: int = 16, low: int = 0, high: int = 9, directed: bool = True
) -> Graph:
    """Create a random weighted graph."""
    rng = random.Random(seed)
    graph = Graph(n, directed=directed)
    for _ in range(m):
        graph.add_edge(rng.randrange(n), rng.randrange(n), rng.randint(low, high))
    return graph


def brute_force_distances(graph: Graph, source: int) -> list:
    """Relax every adjacency entry n times; no early exit, no ordering."""
    dist = [INF] * graph.num_nodes
    dist[source] = 0
    for _ in range(graph.num_nodes):
        for u in range(graph.num_nodes):
            for v, w in graph.neighbors(u):
                if dist[u] + w < dist[v]:
                    dist[v] = dist[u] + w
    return dist


@pytest.fixture
def weighted_graph() -> Graph:
    """Directed: (0,1,1), (0,2,4), (1,2,2), (1,3,5), (2,3,1)."""
    edges = [(0, 1, 1), (0, 2, 4), (1, 2, 2), (1, 3, 5), (2, 3, 1)]
    return build_graph(4, edges, directed=True)


class TestDijkstra:
    """Tests for Dijkstra's algorithm."""

    def test_distances(self, weighted_graph: Graph) -> None:
        assert dijkstra(weighted_graph, 0).distances == [0, 1, 3, 4]

    def test_path(self, weighted_graph: Graph) -> None:
        assert dijkstra(weighted_graph, 0).path_to(3) == [0, 1, 2, 3]

    def test_unreachable(self, weighted_graph: Graph) -> None:
        result = dijkstra(weighted_graph, 2)
        assert result.distances[0] == INF
        assert not result.is_reachable(0)
        assert result.path_to(0) == []

    @pytest.mark.parametrize("target", [-1, 4])
    def test_path_to_rejects_out_of_range(self, weighted_graph: Graph, target: int) -> None:
        result = dijkstra(weighted_graph, 0)
        with pytest.raises(VertexOutOfRangeError):
            result.path_to(target)
        with pytest.raises(VertexOutOfRangeError):
            result.is_reachable(target)

    def test_negative_edges_are_skipped(self) -> None:
        graph = build_graph(3, [(0, 1, 5), (0, 2, 2), (2, 1, -10)], directed=True)
        assert dijkstra(graph, 0).distances == [0, 5, 2]

    def test_invalid_source(self, weighted_graph: Graph) -> None:
        with pytest.raises(VertexOutOfRangeError):
            dijkstra(weighted_graph, 10)

    @pytest.mark.parametrize("seed", range(15))
    @pytest.mark.parametrize("directed", [True, False])
    def test_matches_brute_force(self, seed: int, directed: bool) -> None:
        graph = random_weighted(seed, directed=directed)
        assert dijkstra(graph, 0).distances == brute_force_distances(graph, 0)


class TestBellmanFord:
    """Tests for Bellman-Ford."""

    def test_matches_dijkstra_on_positive_graph(self, weighted_graph: Graph) -> None:
        result = bellman_ford(weighted_graph, 0)
        assert result.distances == [0, 1, 3, 4]
        assert result.has_negative_cycle is False

    def test_negative_edge(self) -> None:
        graph = build_graph(3, [(0, 1, 4), (0, 2, 5), (2, 1, -3)], directed=True)
        result = bellman_ford(graph, 0)
        assert result.distances == [0, 2, 5]
        assert result.path_to(1) == [0, 2, 1]

    def test_negative_cycle(self) -> None:
        graph = build_graph(4, [(0, 1, 4), (1, 2, -2), (2, 3, 1), (3, 1, 0)], directed=True)
        assert bellman_ford(graph, 0).has_negative_cycle is True

    def test_unreachable_negative_cycle_not_reported(self) -> None:
        graph = build_graph(4, [(0, 1, 1), (2, 3, -1), (3, 2, -1)], directed=True)
        result = bellman_ford(graph, 0)
        assert result.has_negative_cycle is False
        assert result.distances == [0, 1, INF, INF]

    def test_undirected_uses_both_orientations(self) -> None:
        edges = [(0, 1, 1), (0, 2, 4), (1, 2, 2), (1, 3, 5), (2, 3, 1)]
        graph = build_graph(4, edges, directed=False)
        result = bellman_ford(graph, 3)
        assert result.distances == [4, 3, 1, 0]
        assert result.has_negative_cycle is False

    def test_undirected_negative_edge_is_a_cycle(self) -> None:
        graph = build_graph(3, [(0, 1, 2), (1, 2, -1)], directed=False)
        assert bellman_ford(graph, 0).has_negative_cycle is True

    def test_undirected_negative_self_loop_is_a_cycle(self) -> None:
        graph = build_graph(2, [(0, 1, 1), (1, 1, -1)], directed=False)
        assert floyd_warshall(graph).has_negative_cycle is True
        assert bellman_ford(graph, 0).has_negative_cycle is True

    def test_undirected_positive_self_loop_is_harmless(self) -> None:
        graph = build_graph(2, [(0, 1, 3), (1, 1, 2)], directed=False)
        result = bellman_ford(graph, 0)
        assert result.has_negative_cycle is False
        assert result.distances == [0, 3]

    def test_early_exit_logged(
        self, weighted_graph: Graph, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="graphengine.core.graph.pathfinding")
        bellman_ford(weighted_graph, 0)
        assert "converged" in caplog.text

    @pytest.mark.parametrize("seed", range(20))
    def test_flag_iff_reachable_negative_cycle(self, seed: int) -> None:
        graph = random_weighted(seed, n=6, m=10, low=-3, high=6)
        apsp = floyd_warshall(graph)
        expected = any(
            apsp.distances[0][v] != INF and apsp.distances[v][v] < 0 for v in range(6)
        )
        assert bellman_ford(graph, 0).has_negative_cycle is expected

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_brute_force_without_negative_cycle(self, seed: int) -> None:
        graph = random_weighted(seed, directed=True)
        assert bellman_ford(graph, 0).distances == brute_force_distances(graph, 0)


class TestZeroOneBFS:
    """Tests for 0-1 BFS."""

    def test_distances(self) -> None:
        graph = build_graph(4, [(0, 1, 1), (0, 2, 0), (2, 1, 0), (1, 3, 1)], directed=True)
        result = zero_one_bfs(graph, 0)
        assert result.distances == [0, 0, 0, 1]
        assert result.path_to(3) == [0, 2, 1, 3]

    def test_rejects_other_weights(self) -> None:
        graph = build_graph(2, [(0, 1, 2)], directed=True)
        with pytest.raises(InvalidGraphError):
            zero_one_bfs(graph, 0)

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_dijkstra(self, seed: int) -> None:
        graph = random_weighted(seed, low=0, high=1)
        assert zero_one_bfs(graph, 0).distances == dijkstra(graph, 0).distances


class TestDagShortestPath:
    """Tests for shortest paths on a DAG."""

    def test_distances(self, weighted_graph: Graph) -> None:
        result = dag_shortest_path(weighted_graph, 0)
        assert result is not None
        assert result.distances == [0, 1, 3, 4]

    def test_negative_weights(self) -> None:
        graph = build_graph(3, [(0, 1, 2), (1, 2, -5), (0, 2, 1)], directed=True)
        result = dag_shortest_path(graph, 0)
        assert result is not None
        assert result.distances == [0, 2, -3]

    def test_unreached_vertices_stay_infinite(self, weighted_graph: Graph) -> None:
        result = dag_shortest_path(weighted_graph, 2)
        assert result is not None
        assert result.distances == [INF, INF, 0, 1]

    def test_cyclic_returns_none(self) -> None:
        graph = build_graph(3, [(0, 1), (1, 2), (2, 0)], directed=True)
        assert dag_shortest_path(graph, 0) is None


class TestFloydWarshall:
    """Tests for Floyd-Warshall."""

    def test_matrix(self) -> None:
        graph = build_graph(3, [(0, 1, 3), (1, 2, 2), (0, 2, 6)], directed=True)
        result = floyd_warshall(graph)
        assert result.distances == [[0, 3, 5], [INF, 0, 2], [INF, INF, 0]]

    def test_path_reconstruction(self) -> None:
        graph = build_graph(3, [(0, 1, 3), (1, 2, 2), (0, 2, 6)], directed=True)
        result = floyd_warshall(graph)
        assert result.path(0, 2) == [0, 1, 2]
        assert result.path(1, 1) == [1]
        assert result.path(2, 0) is None

    @pytest.mark.parametrize(("source", "target"), [(-1, 0), (0, -1), (3, 0), (0, 3)])
    def test_path_rejects_out_of_range(self, source: int, target: int) -> None:
        graph = build_graph(3, [(0, 1, 3), (1, 2, 2), (0, 2, 6)], directed=True)
        with pytest.raises(VertexOutOfRangeError):
            floyd_warshall(graph).path(source, target)

    def test_parallel_edges_keep_minimum(self) -> None:
        graph = build_graph(2, [(0, 1, 5), (0, 1, 2)], directed=True)
        assert floyd_warshall(graph).distances[0][1] == 2

    def test_negative_cycle(self) -> None:
        graph = build_graph(3, [(0, 1, 1), (1, 2, -3), (2, 1, 1)], directed=True)
        assert floyd_warshall(graph).has_negative_cycle is True

    def test_empty_graph(self) -> None:
        result = floyd_warshall(Graph(0))
        assert result.distances == []
        assert result.has_negative_cycle is False

    @pytest.mark.parametrize("seed", range(10))
    def test_triangle_inequality(self, seed: int) -> None:
        graph = random_weighted(seed)
        dist = floyd_warshall(graph).distances
        n = graph.num_nodes
        for i in range(n):
            for j in range(n):
                for k in range(n):
                    assert dist[i][j] <= dist[i][k] + dist[k][j]

    @pytest.mark.parametrize("seed", range(10))
    def test_rows_match_dijkstra_and_paths_add_up(self, seed: int) -> None:
        graph = random_weighted(seed, directed=False)
        result = floyd_warshall(graph)
        for s in range(graph.num_nodes):
            assert result.distances[s] == dijkstra(graph, s).distances
            for t in range(graph.num_nodes):
                path = result.path(s, t)
                if result.distances[s][t] == INF:
                    assert path is None
                    continue
                assert path is not None
                assert path[0] == s and path[-1] == t
                total = sum(
                    min(w for v, w in graph.neighbors(a) if v == b)
                    for a, b in zip(path, path[1:])
                )
                assert total == result.distances[s][t]
