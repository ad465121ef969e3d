"""
Graph store and algorithm suite.

This module provides the weighted graph and the algorithms that query it:

Data Structures:
    - Graph: Adjacency lists over vertices [0, n), directed or undirected

Algorithms:
    - traversal: BFS (single and multi-source), DFS (recursive and iterative)
    - pathfinding: Dijkstra, Bellman-Ford, 0-1 BFS, DAG shortest path, Floyd-Warshall
    - analysis: Kahn and DFS topological sort, Kosaraju and Tarjan SCC, bridges
    - spanning: Prim and Kruskal minimum spanning trees

Loading:
    - build_graph(): Graph from edge tuples or "u,v,w" specs
    - build_tree(): Neighbor lists for LCA
    - build_flow_network(): FlowNetwork from capacity arcs

All algorithms treat the graph as read-only and return fresh result objects.
"""

from graphengine.core.graph.base import Graph
from graphengine.core.graph.loader import (
    build_flow_network,
    build_graph,
    build_tree,
    parse_edge,
)

__all__ = [
    "Graph",
    "build_flow_network",
    "build_graph",
    "build_tree",
    "parse_edge",
]
