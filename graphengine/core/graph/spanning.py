"""Minimum spanning trees: Prim and Kruskal."""

from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING

from graphengine.core.exceptions import DisconnectedGraphError, NotUndirectedError
from graphengine.core.models import INF, Edge, SpanningTree, Weight
from graphengine.core.structures.union_find import UnionFind

if TYPE_CHECKING:
    from graphengine.core.graph.base import Graph

logger = logging.getLogger(__name__)


def _require_undirected(graph: Graph, algorithm: str) -> None:
    if graph.directed:
        raise NotUndirectedError(f"{algorithm} requires an undirected graph")


def _require_spanning(graph: Graph, tree: SpanningTree, algorithm: str) -> SpanningTree:
    needed = max(graph.num_nodes - 1, 0)
    if len(tree) != needed:
        logger.debug(f"{algorithm} assembled {len(tree)}/{needed} tree edges")
        raise DisconnectedGraphError(
            f"Graph is not connected: {algorithm} found {len(tree)} of {needed} tree edges"
        )
    return tree


def prim_mst(graph: Graph, start: int = 0) -> SpanningTree:
    """Grow a tree from start with a lazy-deletion heap. O(E log V).

    Raises NotUndirectedError on directed graphs and DisconnectedGraphError
    when some vertex cannot be reached.
    """
    _require_undirected(graph, "Prim")
    n = graph.num_nodes
    if n == 0:
        return SpanningTree(total_weight=0)
    graph.check_vertex(start)

    key: list[Weight] = [INF] * n
    parent = [-1] * n
    in_tree = [False] * n
    key[start] = 0
    heap: list[tuple[Weight, int]] = [(0, start)]
    tree = SpanningTree(total_weight=0)

    while heap:
        k, u = heapq.heappop(heap)
        if in_tree[u]:
            continue  # stale entry
        in_tree[u] = True
        tree.total_weight += k
        if parent[u] != -1:
            tree.edges.append(Edge(u=parent[u], v=u, weight=k))
        for v, w in graph._adj[u]:
            if not in_tree[v] and w < key[v]:
                key[v] = w
                parent[v] = u
                heapq.heappush(heap, (w, v))

    return _require_spanning(graph, tree, "Prim")


def kruskal_mst(graph: Graph) -> SpanningTree:
    """Greedy edge selection over (weight, u, v)-sorted edges. O(E log E).

    Same failure contract as prim_mst.
    """
    _require_undirected(graph, "Kruskal")
    n = graph.num_nodes
    edges = sorted(graph.undirected_edges(), key=Edge.sort_key)
    components = UnionFind(n)
    tree = SpanningTree(total_weight=0)

    for edge in edges:
        if len(tree) == n - 1:
            break
        if components.union(edge.u, edge.v):
            tree.edges.append(edge)
            tree.total_weight += edge.weight

    return _require_spanning(graph, tree, "Kruskal")
