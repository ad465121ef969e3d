"""Example graphs used by ``graphengine demo``."""

from __future__ import annotations

from graphengine.core.graph import Graph, build_flow_network, build_graph, build_tree
from graphengine.core.structures import FlowNetwork


def unweighted_dag() -> Graph:
    """Four vertices, unit weights: BFS and topological sort."""
    return build_graph(4, [(0, 1), (0, 2), (1, 2), (2, 3)], directed=True)


def weighted_digraph() -> Graph:
    """Dijkstra and Bellman-Ford agree on this one: [0, 1, 3, 4] from 0."""
    edges = [(0, 1, 1), (0, 2, 4), (1, 2, 2), (1, 3, 5), (2, 3, 1)]
    return build_graph(4, edges, directed=True)


def negative_cycle_digraph() -> Graph:
    """1 -> 2 -> 3 -> 1 sums to -1."""
    edges = [(0, 1, 4), (1, 2, -2), (2, 3, 1), (3, 1, 0)]
    return build_graph(4, edges, directed=True)


def small_digraph() -> Graph:
    """Three vertices for the all-pairs matrix."""
    return build_graph(3, [(0, 1, 3), (1, 2, 2), (0, 2, 6)], directed=True)


def scc_digraph() -> Graph:
    """Components {0, 1, 2}, {3} and {4}."""
    return build_graph(5, [(0, 1), (1, 2), (2, 0), (1, 3), (3, 4)], directed=True)


def weighted_undirected() -> Graph:
    """Unique MST of total weight 4."""
    edges = [(0, 1, 1), (0, 2, 4), (1, 2, 2), (1, 3, 5), (2, 3, 1)]
    return build_graph(4, edges, directed=False)


def bridged_undirected() -> Graph:
    """Two triangles joined by the bridge 2 -- 3."""
    edges = [(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 5), (5, 3)]
    return build_graph(6, edges, directed=False)


def sample_tree() -> list[list[int]]:
    r"""Rooted at 0::

            0
           / \
          1   2
         / \   \
        3   4   5
                 \
                  6
    """
    return build_tree(7, [(0, 1), (0, 2), (1, 3), (1, 4), (2, 5), (5, 6)])


def sample_flow_network() -> FlowNetwork:
    """Classic six-vertex network with max flow 23 from 0 to 5."""
    arcs = [
        (0, 1, 16),
        (0, 2, 13),
        (1, 2, 10),
        (2, 1, 4),
        (1, 3, 12),
        (3, 2, 9),
        (2, 4, 14),
        (4, 3, 7),
        (3, 5, 20),
        (4, 5, 4),
    ]
    return build_flow_network(6, arcs)
