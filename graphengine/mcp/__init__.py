"""
MCP server for the graph engine.

Exposes the algorithm suite to LLMs via the Model Context Protocol. Every
tool takes the graph inline as ``nodes`` plus an ``edges`` array.

Tools:
    - graph_traverse: BFS distances and DFS order
    - graph_shortest_paths: Dijkstra, Bellman-Ford, 0-1 BFS, DAG, Floyd-Warshall
    - graph_order: Topological sort
    - graph_components: SCCs, bridges and articulation points
    - graph_spanning_tree: Prim or Kruskal
    - graph_max_flow: Dinic max-flow and min cut
    - graph_lca: Lowest common ancestor in a tree

Usage:
    Run: graphengine-mcp
"""

import asyncio

from graphengine.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
