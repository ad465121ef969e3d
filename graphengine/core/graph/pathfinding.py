"""Shortest path algorithms: Dijkstra, Bellman-Ford, 0-1 BFS, DAG, Floyd-Warshall."""

from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import TYPE_CHECKING

from graphengine.core.exceptions import InvalidGraphError
from graphengine.core.graph.analysis import topological_sort_dfs
from graphengine.core.models import (
    INF,
    AllPairsShortestPaths,
    BellmanFordResult,
    ShortestPaths,
    Weight,
)

if TYPE_CHECKING:
    from graphengine.core.graph.base import Graph

logger = logging.getLogger(__name__)


def dijkstra(graph: Graph, source: int) -> ShortestPaths:
    """Label-setting shortest paths with a lazy-deletion heap. O((V + E) log V).

    Negative-weight edges are skipped, never relaxed. Distances are only
    meaningful when every weight is non-negative.
    """
    graph.check_vertex(source)
    n = graph.num_nodes
    dist: list[Weight] = [INF] * n
    parent = [-1] * n
    dist[source] = 0
    heap: list[tuple[Weight, int]] = [(0, source)]

    while heap:
        d, u = heapq.heappop(heap)
        if d > dist[u]:
            continue  # stale entry
        for v, w in graph._adj[u]:
            if w < 0:
                continue
            candidate = d + w
            if candidate < dist[v]:
                dist[v] = candidate
                parent[v] = u
                heapq.heappush(heap, (candidate, v))

    return ShortestPaths(source=source, distances=dist, parents=parent)


def bellman_ford(graph: Graph, source: int) -> BellmanFordResult:
    """Shortest paths with negative weights and negative-cycle detection. O(V * E).

    Stops early once a full pass relaxes nothing. Undirected graphs use the
    deduplicated edge set, each edge relaxed in both orientations, plus every
    self-loop, so any negative undirected edge reachable from source reports
    a negative cycle.
    """
    graph.check_vertex(source)
    n = graph.num_nodes
    arcs: list[tuple[int, int, Weight]] = []
    if graph.directed:
        arcs = [(e.u, e.v, e.weight) for e in graph._edges]
    else:
        for e in graph.undirected_edges():
            arcs.append((e.u, e.v, e.weight))
            arcs.append((e.v, e.u, e.weight))
        # undirected_edges() drops self-loops; a negative one is still a cycle
        loops = {
            (u, u, w) for u, entries in enumerate(graph._adj) for v, w in entries if v == u
        }
        arcs.extend(sorted(loops))

    dist: list[Weight] = [INF] * n
    parent = [-1] * n
    dist[source] = 0

    for i in range(n - 1):
        updated = False
        for u, v, w in arcs:
            if dist[u] != INF and dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
                parent[v] = u
                updated = True
        if not updated:
            logger.debug(f"Bellman-Ford converged after {i + 1} passes")
            break

    negative_cycle = any(dist[u] != INF and dist[u] + w < dist[v] for u, v, w in arcs)
    if negative_cycle:
        logger.debug(f"Negative cycle reachable from {source}")

    return BellmanFordResult(
        source=source,
        distances=dist,
        parents=parent,
        has_negative_cycle=negative_cycle,
    )


def zero_one_bfs(graph: Graph, source: int) -> ShortestPaths:
    """Deque-based shortest paths for weights in {0, 1}. O(V + E).

    Raises InvalidGraphError if any stored edge has another weight.
    """
    graph.check_vertex(source)
    for e in graph._edges:
        if e.weight not in (0, 1):
            raise InvalidGraphError(
                f"0-1 BFS requires weights in {{0, 1}}, edge ({e.u}, {e.v}) has {e.weight}"
            )

    n = graph.num_nodes
    dist: list[Weight] = [INF] * n
    parent = [-1] * n
    dist[source] = 0
    dq: deque[int] = deque([source])

    while dq:
        u = dq.popleft()
        for v, w in graph._adj[u]:
            if dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
                parent[v] = u
                if w == 0:
                    dq.appendleft(v)
                else:
                    dq.append(v)

    return ShortestPaths(source=source, distances=dist, parents=parent)


def dag_shortest_path(graph: Graph, source: int) -> ShortestPaths | None:
    """Relax edges once in topological order. O(V + E).

    Returns None if the graph has a cycle.
    """
    graph.check_vertex(source)
    order = topological_sort_dfs(graph)
    if not order:
        return None

    n = graph.num_nodes
    dist: list[Weight] = [INF] * n
    parent = [-1] * n
    dist[source] = 0

    for u in order:
        if dist[u] == INF:
            continue
        for v, w in graph._adj[u]:
            if dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
                parent[v] = u

    return ShortestPaths(source=source, distances=dist, parents=parent)


def floyd_warshall(graph: Graph) -> AllPairsShortestPaths:
    """All-pairs shortest paths with next-hop reconstruction. O(V^3)."""
    n = graph.num_nodes
    dist: list[list[Weight]] = [[INF] * n for _ in range(n)]
    nxt = [[-1] * n for _ in range(n)]

    for i in range(n):
        dist[i][i] = 0
        nxt[i][i] = i
    for i, entries in enumerate(graph._adj):
        for v, w in entries:
            if w < dist[i][v]:
                dist[i][v] = w
                nxt[i][v] = v

    for k in range(n):
        dist_k = dist[k]
        for i in range(n):
            dik = dist[i][k]
            if dik == INF:
                continue
            dist_i = dist[i]
            nxt_i = nxt[i]
            for j in range(n):
                candidate = dik + dist_k[j]
                if candidate < dist_i[j]:
                    dist_i[j] = candidate
                    nxt_i[j] = nxt_i[k]

    return AllPairsShortestPaths(distances=dist, next_hop=nxt)
