"""Graph analysis: topological sort, strongly connected components, bridges."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from graphengine.core.models import ConnectivityReport

if TYPE_CHECKING:
    from graphengine.core.graph.base import Graph

logger = logging.getLogger(__name__)


def topological_sort_kahn(graph: Graph) -> list[int]:
    """Topological sort using Kahn's algorithm. O(V + E).

    Zero in-degree vertices are seeded in ascending order. Returns an empty
    list if the graph has a cycle.
    """
    in_degree = graph.in_degrees()
    queue: deque[int] = deque(v for v, d in enumerate(in_degree) if d == 0)
    order: list[int] = []

    while queue:
        u = queue.popleft()
        order.append(u)
        for v, _ in graph._adj[u]:
            in_degree[v] -= 1
            if in_degree[v] == 0:
                queue.append(v)

    if len(order) != graph.num_nodes:
        logger.debug(f"Kahn sort stopped at {len(order)}/{graph.num_nodes}: cycle present")
        return []
    return order


def topological_sort_dfs(graph: Graph) -> list[int]:
    """Reverse postorder of a three-color DFS. O(V + E).

    A gray neighbor means a back edge; returns an empty list in that case.
    """
    white, gray, black = 0, 1, 2
    n = graph.num_nodes
    color = [white] * n
    next_index = [0] * n
    order: list[int] = []

    for root in range(n):
        if color[root] != white:
            continue
        color[root] = gray
        stack = [root]
        while stack:
            u = stack[-1]
            adj = graph._adj[u]
            if next_index[u] < len(adj):
                v = adj[next_index[u]][0]
                next_index[u] += 1
                if color[v] == white:
                    color[v] = gray
                    stack.append(v)
                elif color[v] == gray:
                    logger.debug(f"Back edge {u} -> {v}: graph is not acyclic")
                    return []
            else:
                stack.pop()
                color[u] = black
                order.append(u)

    order.reverse()
    return order


def _finishing_order(graph: Graph) -> list[int]:
    """Vertices in DFS postorder over the whole graph."""
    n = graph.num_nodes
    visited = [False] * n
    next_index = [0] * n
    order: list[int] = []

    for root in range(n):
        if visited[root]:
            continue
        visited[root] = True
        stack = [root]
        while stack:
            u = stack[-1]
            adj = graph._adj[u]
            if next_index[u] < len(adj):
                v = adj[next_index[u]][0]
                next_index[u] += 1
                if not visited[v]:
                    visited[v] = True
                    stack.append(v)
            else:
                stack.pop()
                order.append(u)

    return order


def kosaraju_scc(graph: Graph) -> list[list[int]]:
    """Strongly connected components via two DFS passes. O(V + E).

    Components come out in topological order of the condensation. Order of
    vertices inside a component only reflects the second pass.
    """
    order = _finishing_order(graph)
    rev = graph.reversed()
    visited = [False] * graph.num_nodes
    components: list[list[int]] = []

    for root in reversed(order):
        if visited[root]:
            continue
        visited[root] = True
        component: list[int] = []
        stack = [root]
        while stack:
            u = stack.pop()
            component.append(u)
            for v, _ in rev._adj[u]:
                if not visited[v]:
                    visited[v] = True
                    stack.append(v)
        components.append(component)

    return components


def tarjan_scc(graph: Graph) -> list[list[int]]:
    """Strongly connected components in a single low-link DFS. O(V + E).

    Components are emitted in reverse topological order of the condensation.
    """
    n = graph.num_nodes
    disc = [-1] * n
    low = [0] * n
    on_stack = [False] * n
    next_index = [0] * n
    open_stack: list[int] = []
    components: list[list[int]] = []
    timer = 0

    for root in range(n):
        if disc[root] != -1:
            continue
        disc[root] = low[root] = timer
        timer += 1
        open_stack.append(root)
        on_stack[root] = True
        work = [root]

        while work:
            u = work[-1]
            adj = graph._adj[u]
            if next_index[u] < len(adj):
                v = adj[next_index[u]][0]
                next_index[u] += 1
                if disc[v] == -1:
                    disc[v] = low[v] = timer
                    timer += 1
                    open_stack.append(v)
                    on_stack[v] = True
                    work.append(v)
                elif on_stack[v]:
                    low[u] = min(low[u], disc[v])
                continue

            work.pop()
            if work:
                p = work[-1]
                low[p] = min(low[p], low[u])
            if low[u] == disc[u]:
                component: list[int] = []
                while True:
                    w = open_stack.pop()
                    on_stack[w] = False
                    component.append(w)
                    if w == u:
                        break
                components.append(component)

    return components


def bridges_and_articulation_points(graph: Graph) -> ConnectivityReport:
    """Find bridges and cut vertices with discovery/low-link values. O(V + E).

    Intended for undirected graphs. The edge back to a vertex's DFS parent is
    skipped once, so a doubled (parallel) edge is never reported as a bridge.
    """
    n = graph.num_nodes
    tin = [-1] * n
    low = [0] * n
    parent = [-1] * n
    parent_skipped = [False] * n
    next_index = [0] * n
    is_cut = [False] * n
    bridges: list[tuple[int, int]] = []
    timer = 0

    for root in range(n):
        if tin[root] != -1:
            continue
        tin[root] = low[root] = timer
        timer += 1
        root_children = 0
        work = [root]

        while work:
            u = work[-1]
            adj = graph._adj[u]
            if next_index[u] < len(adj):
                v = adj[next_index[u]][0]
                next_index[u] += 1
                if v == parent[u] and not parent_skipped[u]:
                    parent_skipped[u] = True
                elif tin[v] != -1:
                    low[u] = min(low[u], tin[v])
                else:
                    parent[v] = u
                    tin[v] = low[v] = timer
                    timer += 1
                    if u == root:
                        root_children += 1
                    work.append(v)
                continue

            work.pop()
            p = parent[u]
            if p == -1:
                continue
            low[p] = min(low[p], low[u])
            if low[u] > tin[p]:
                bridges.append((p, u))
            if parent[p] != -1 and low[u] >= tin[p]:
                is_cut[p] = True

        if root_children > 1:
            is_cut[root] = True

    return ConnectivityReport(
        bridges=bridges,
        articulation_points=[v for v in range(n) if is_cut[v]],
    )
