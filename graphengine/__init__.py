"""
Graph engine: exact graph algorithms over an in-memory weighted graph.

Build a graph incrementally, then query it for connectivity, shortest paths,
orderings, spanning trees and flows:
- BFS/DFS traversal, Dijkstra, Bellman-Ford, 0-1 BFS, Floyd-Warshall
- Topological sort, strongly connected components, bridges
- Prim/Kruskal spanning trees, union-find, LCA, Dinic max-flow

Usage:
    from graphengine.core.graph import Graph
    from graphengine.core.graph.pathfinding import dijkstra

    graph = Graph(4, directed=True)
    graph.add_edge(0, 1, 5)
    result = dijkstra(graph, 0)
"""

__version__ = "0.1.0"
