"""Breadth-first and depth-first traversal."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

from graphengine.core.models import BFSResult

if TYPE_CHECKING:
    from graphengine.core.graph.base import Graph


def bfs(graph: Graph, source: int) -> BFSResult:
    """Unweighted shortest paths from source. O(V + E)."""
    return multi_source_bfs(graph, [source])


def multi_source_bfs(graph: Graph, sources: Iterable[int]) -> BFSResult:
    """BFS seeded with every source at distance 0. O(V + E).

    Duplicate sources are harmless.
    """
    n = graph.num_nodes
    dist = [-1] * n
    parent = [-1] * n
    queue: deque[int] = deque()

    for s in sources:
        graph.check_vertex(s)
        if dist[s] == -1:
            dist[s] = 0
            queue.append(s)

    while queue:
        u = queue.popleft()
        for v, _ in graph._adj[u]:
            if dist[v] == -1:
                dist[v] = dist[u] + 1
                parent[v] = u
                queue.append(v)

    return BFSResult(distances=dist, parents=parent)


def dfs_recursive(graph: Graph, source: int) -> list[int]:
    """Pre-order DFS visitation from source.

    Recursion depth grows with path length; use dfs_iterative for deep graphs.
    """
    graph.check_vertex(source)
    order: list[int] = []
    visited = [False] * graph.num_nodes

    def dfs(u: int) -> None:
        visited[u] = True
        order.append(u)
        for v, _ in graph._adj[u]:
            if not visited[v]:
                dfs(v)

    dfs(source)
    return order


def dfs_iterative(graph: Graph, source: int) -> list[int]:
    """Explicit-stack DFS producing the same order as dfs_recursive.

    Neighbors are pushed in reverse adjacency order so the first neighbor is
    popped first.
    """
    graph.check_vertex(source)
    order: list[int] = []
    visited = [False] * graph.num_nodes
    stack = [source]

    while stack:
        u = stack.pop()
        if visited[u]:
            continue
        visited[u] = True
        order.append(u)
        for v, _ in reversed(graph._adj[u]):
            if not visited[v]:
                stack.append(v)

    return order
